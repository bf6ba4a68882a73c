"""Shared fixtures: captured structlog output and an in-memory Redis stub."""

from __future__ import annotations

import fnmatch

import pytest
from structlog.testing import capture_logs

import src.common.redis as redis_mod


class FakeRedis:
    """The handful of list commands the sample store uses."""

    def __init__(self) -> None:
        self.lists: dict[str, list[str]] = {}

    def rpush(self, key: str, *values: str) -> int:
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    def llen(self, key: str) -> int:
        return len(self.lists.get(key, []))

    def lrange(self, key: str, start: int, end: int) -> list[str]:
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]

    def delete(self, key: str) -> int:
        return 1 if self.lists.pop(key, None) is not None else 0

    def scan_iter(self, match: str = "*"):
        return (k for k in list(self.lists) if fnmatch.fnmatch(k, match))


@pytest.fixture(autouse=True)
def captured_logs():
    """Collect structlog events instead of printing them."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> FakeRedis:
    client = FakeRedis()
    monkeypatch.setattr(redis_mod, "_client", client)
    return client
