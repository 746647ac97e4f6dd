"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and turns
the engine's error taxonomy into :class:`fastapi.HTTPException` responses.
HTTPExceptions raised by the handler are propagated untouched. Malformed
source tables and series too short to forecast become ``422``, unknown
transport types ``404``, store failures ``503``, research collaborator
failures ``502``; everything else is a ``500`` with the exception message
as the response detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from engine.exceptions import (
    InsufficientDataError,
    ParseError,
    ResearchError,
    StorageError,
    UnknownTransportType,
)

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, ParseError):
        return HTTPException(
            status_code=422,
            detail={"error": str(exc), "row": exc.row, "column": exc.column, "field": exc.field},
        )
    if isinstance(exc, InsufficientDataError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, UnknownTransportType):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, StorageError):
        log.error("Storage failure: %s", exc)
        return HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, ResearchError):
        return HTTPException(status_code=502, detail=str(exc))
    log.exception("Unhandled error: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    The decorator works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _to_http(exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _to_http(exc) from exc

    return cast(F, sync_wrapper)
