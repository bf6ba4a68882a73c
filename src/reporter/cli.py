"""CLI entrypoint for the sample summary script."""

from __future__ import annotations

import argparse
from pathlib import Path

import redis
import structlog

from src.common.console import fail, warn
from src.common.constants import DEFAULT_QUANTILES, STDIN_SOURCE
from src.common.logging import configure_structlog, get_json_file_logger, verbosity_to_level
from src.reporter.loader import LoadResult, load_files, load_redis
from src.reporter.report import render_json, render_set_report, render_timer_report
from src.stats.errors import DuplicateQuantileError, QuantileRangeError, SampleSourceError
from src.stats.summary import (
    quantile_labels,
    set_fields,
    summarize_set,
    summarize_timer,
    timer_fields,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize a set of timer samples (min/max/mean/median/quantiles).",
        epilog=(
            "Files: %(prog)s latencies.txt  |  "
            "Stdin: cat samples | %(prog)s -  |  "
            "Redis: %(prog)s --redis-key api.request"
        ),
    )
    parser.add_argument(
        "sources",
        nargs="*",
        metavar="FILE",
        help="Sample files, one value per line ('-' for stdin)",
    )
    parser.add_argument(
        "--redis-key",
        metavar="NAME",
        default=None,
        help="Read samples from the Redis list for timer NAME instead of files",
    )
    parser.add_argument(
        "--list-timers",
        action="store_true",
        default=False,
        help="List timers with samples stored in Redis and exit",
    )
    parser.add_argument(
        "--store",
        metavar="NAME",
        default=None,
        help="Also append the loaded samples to the Redis list for timer NAME",
    )
    parser.add_argument(
        "--flush",
        action="store_true",
        default=False,
        help="With --redis-key: delete the Redis list after summarizing it",
    )
    parser.add_argument(
        "-q",
        "--quantile",
        type=float,
        action="append",
        default=None,
        help=f"Quantile in [0, 1] to report (repeatable, default {DEFAULT_QUANTILES})",
    )
    parser.add_argument(
        "--set",
        action="store_true",
        default=False,
        help="Treat samples as a set metric (count + distinct count only)",
    )
    parser.add_argument("-n", "--name", default=None, help="Metric name used in output")
    parser.add_argument("--json", action="store_true", default=False, help="Emit JSON")
    parser.add_argument("--plot", metavar="PNG", default=None, help="Write a histogram chart")
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        default=None,
        help="Append the summary as a JSON line to PATH",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def _metric_name(args: argparse.Namespace) -> str:
    if args.name:
        return args.name
    if args.redis_key:
        return args.redis_key
    if len(args.sources) == 1 and args.sources[0] != STDIN_SOURCE:
        return Path(args.sources[0]).stem
    return "samples"


def _load(args: argparse.Namespace) -> LoadResult:
    try:
        if args.redis_key:
            return load_redis(args.redis_key)
        return load_files(args.sources)
    except SampleSourceError as exc:
        fail(str(exc))


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_structlog(verbosity_to_level(args.verbose))
    log = structlog.get_logger("cli")

    if args.list_timers:
        from src.common.redis import list_timers

        try:
            for timer in list_timers():
                print(timer)
        except redis.RedisError as exc:
            fail(f"cannot list timers: {exc}")
        return

    if not args.sources and not args.redis_key:
        parser.error("Provide sample FILE(s), '-' for stdin, or --redis-key NAME.")
    if args.sources and args.redis_key:
        parser.error("FILE arguments and --redis-key are mutually exclusive.")
    if args.flush and not args.redis_key:
        parser.error("--flush only applies to --redis-key.")

    quantiles = tuple(args.quantile) if args.quantile else DEFAULT_QUANTILES
    try:
        quantile_labels(quantiles)
    except (QuantileRangeError, DuplicateQuantileError) as exc:
        parser.error(str(exc))

    values, rejected = _load(args)
    name = _metric_name(args)
    if rejected:
        warn(f"{rejected} line(s) could not be parsed and were skipped")

    if args.store:
        from src.common.redis import push_samples

        try:
            stored = push_samples(args.store, values.to_list())
        except redis.RedisError as exc:
            fail(f"cannot store samples for {args.store}: {exc}")
        log.info("samples_stored", timer=args.store, count=len(values), list_length=stored)

    # Chart uses an unsorted snapshot; summaries sort the original in place.
    snapshot = values.copy() if args.plot else None

    if args.set:
        set_summary = summarize_set(values)
        fields = set_fields(name, set_summary)
        output = (
            render_json(name, set_summary, rejected)
            if args.json
            else render_set_report(name, set_summary, rejected)
        )
        chart_quantiles: dict[str, float] = {}
    else:
        timer_summary = summarize_timer(values, quantiles)
        fields = timer_fields(name, timer_summary)
        output = (
            render_json(name, timer_summary, rejected)
            if args.json
            else render_timer_report(name, timer_summary, rejected)
        )
        chart_quantiles = timer_summary.quantiles
    print(output)

    if snapshot is not None:
        from src.reporter.chart import plot_histogram

        path = plot_histogram(
            snapshot, Path(args.plot), title=name, quantiles=chart_quantiles
        )
        log.info("chart_written", path=str(path))

    if args.log_file:
        get_json_file_logger(Path(args.log_file), metric=name).info(
            "summary", rejected=rejected, **fields
        )

    if args.flush:
        from src.common.redis import clear_samples

        try:
            clear_samples(args.redis_key)
        except redis.RedisError as exc:
            fail(f"cannot flush samples for {args.redis_key}: {exc}")
        log.info("samples_flushed", timer=args.redis_key)
