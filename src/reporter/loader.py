"""Sample loading from text files, stdin and Redis."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

import redis
import structlog

from src.common.constants import COMMENT_PREFIX, STDIN_SOURCE, VALUE_SUFFIX_SEPARATOR
from src.stats.errors import SampleSourceError
from src.stats.values import ValueSlice

log = structlog.get_logger("loader")


class LoadResult(NamedTuple):
    values: ValueSlice
    rejected: int


def parse_sample(line: str) -> float | None:
    """Parse one sample line.  Returns None for blanks, comments and junk.

    ``nan`` parses (and is kept); ``12.5|ms`` keeps the leading number.
    """
    text = line.strip()
    if not text or text.startswith(COMMENT_PREFIX):
        return None
    text = text.split(VALUE_SUFFIX_SEPARATOR, 1)[0].strip()
    try:
        return float(text)
    except ValueError:
        return None


def parse_samples(lines: Iterable[str]) -> LoadResult:
    """Build a ``ValueSlice`` from *lines*, counting lines that did not parse."""
    values = ValueSlice()
    rejected = 0
    for lineno, line in enumerate(lines, start=1):
        value = parse_sample(line)
        if value is not None:
            values.append(value)
            continue
        stripped = line.strip()
        if stripped and not stripped.startswith(COMMENT_PREFIX):
            rejected += 1
            log.debug("sample_rejected", line=lineno, text=stripped[:80])
    return LoadResult(values, rejected)


def load_file(source: str) -> LoadResult:
    """Load samples from a file path, or from stdin when *source* is ``-``."""
    if source == STDIN_SOURCE:
        result = parse_samples(sys.stdin)
    else:
        path = Path(source)
        try:
            with path.open(encoding="utf-8") as f:
                result = parse_samples(f)
        except OSError as exc:
            raise SampleSourceError(f"cannot read {source}: {exc}") from exc
    log.info("samples_loaded", source=source, count=len(result.values), rejected=result.rejected)
    return result


def load_files(sources: Iterable[str]) -> LoadResult:
    """Concatenate samples from several sources, in the order given."""
    values = ValueSlice()
    rejected = 0
    for source in sources:
        result = load_file(source)
        values.extend(result.values)
        rejected += result.rejected
    return LoadResult(values, rejected)


def load_redis(name: str) -> LoadResult:
    """Load the stored sample list for timer *name*."""
    from src.common.redis import read_samples

    try:
        raw = read_samples(name)
    except redis.RedisError as exc:
        raise SampleSourceError(f"cannot read samples for {name} from Redis: {exc}") from exc
    result = parse_samples(raw)
    log.info("samples_loaded", source=f"redis:{name}", count=len(result.values), rejected=result.rejected)
    return result
