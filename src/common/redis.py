"""Redis connection and sample-list access."""

from __future__ import annotations

import os

import redis

from src.common.constants import REDIS_SAMPLES_PREFIX

_REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
_REDIS_PORT = int(os.environ.get("REDIS_PORT", "6379"))
_REDIS_DB = int(os.environ.get("REDIS_DB", "0"))
_REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD") or None

_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Return a shared Redis client (lazy singleton)."""
    global _client
    if _client is None:
        _client = redis.Redis(
            host=_REDIS_HOST,
            port=_REDIS_PORT,
            db=_REDIS_DB,
            password=_REDIS_PASSWORD,
            decode_responses=True,
        )
    return _client


def samples_key(name: str) -> str:
    """Full Redis key for a timer name; already-prefixed keys pass through."""
    if name.startswith(REDIS_SAMPLES_PREFIX):
        return name
    return f"{REDIS_SAMPLES_PREFIX}{name}"


# ── Sample lists ─────────────────────────────────────────────────────────────


def push_samples(name: str, values: list[float]) -> int:
    """Append *values* to the timer's sample list.  Returns the new length."""
    if not values:
        return get_redis().llen(samples_key(name))
    return get_redis().rpush(samples_key(name), *(repr(float(v)) for v in values))


def read_samples(name: str) -> list[str]:
    """Return the raw (unparsed) sample strings for a timer, oldest first."""
    return get_redis().lrange(samples_key(name), 0, -1)


def list_timers() -> list[str]:
    """Names of all timers with stored samples, sorted."""
    keys = get_redis().scan_iter(match=f"{REDIS_SAMPLES_PREFIX}*")
    return sorted(k[len(REDIS_SAMPLES_PREFIX):] for k in keys)


def clear_samples(name: str) -> None:
    """Drop the timer's sample list (end of a flush interval)."""
    get_redis().delete(samples_key(name))
