import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from store.client import _fallback, _fallback_lists, _write_locks


SAMPLE_TABLE = (
    "year;bus;tram;ferry\n"
    "2016;100;50;0\n"
    "2017;110;45;2\n"
    "2018;90;40;4\n"
    "2019;120;35;6\n"
)


@pytest.fixture(autouse=True)
def clear_fallback(monkeypatch):
    """Wipe the in-memory store fallback before and after each test and force
    the store onto it so tests never attempt a network connection.
    """
    _fallback.clear()
    _fallback_lists.clear()
    _write_locks.clear()

    import store.client as client

    async def no_redis():
        return None

    monkeypatch.setattr(client, "get_redis", no_redis)
    monkeypatch.setattr(client, "_had_redis", False)

    from config import settings
    monkeypatch.setattr(settings, "database_url", None)

    yield

    _fallback.clear()
    _fallback_lists.clear()
    _write_locks.clear()


@pytest.fixture
def sample_table() -> str:
    return SAMPLE_TABLE


@pytest.fixture
def sql_store(tmp_path, monkeypatch):
    """Route the record stores through a throwaway SQLite database."""
    import database
    from config import settings

    url = f"sqlite:///{tmp_path / 'passtrend.db'}"
    database.init_database(url)
    database.init_db()
    monkeypatch.setattr(settings, "database_url", url)
    yield url
    database.dispose_database()


class FakeRedis:
    """List-only stand-in for the async Redis client."""

    def __init__(self):
        self.lists: dict[str, list[str]] = {}
        self.pushes: list[int] = []
        self.renames: list[tuple[str, str]] = []
        self.fail_on_push = None
        self.fail_reads = False

    async def rpush(self, key, *values):
        if self.fail_on_push is not None and len(self.pushes) == self.fail_on_push:
            raise ConnectionError("connection reset")
        self.pushes.append(len(values))
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    async def rename(self, src, dst):
        self.renames.append((src, dst))
        self.lists[dst] = self.lists.pop(src)
        return True

    async def delete(self, key):
        return 1 if self.lists.pop(key, None) is not None else 0

    async def lrange(self, key, start, end):
        if self.fail_reads:
            raise ConnectionError("connection reset")
        return list(self.lists.get(key, []))


@pytest.fixture
def fake_redis(monkeypatch):
    import store.client as client

    fake = FakeRedis()

    async def get_fake():
        return fake

    monkeypatch.setattr(client, "get_redis", get_fake)
    monkeypatch.setattr(client, "_had_redis", True)
    return fake
