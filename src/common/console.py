"""ANSI colour codes and report formatting helpers."""

from __future__ import annotations

import sys
from typing import NoReturn


class C:
    """ANSI colour codes (no-op if not a tty)."""

    _tty = sys.stdout.isatty()
    RED = "\033[0;31m" if _tty else ""
    YELLOW = "\033[1;33m" if _tty else ""
    BOLD = "\033[1m" if _tty else ""
    NC = "\033[0m" if _tty else ""


def warn(msg: str) -> None:
    print(f"{C.YELLOW}[WARN]{C.NC} {msg}", file=sys.stderr)


def fail(msg: str) -> NoReturn:
    print(f"{C.RED}[FAIL]{C.NC} {msg}", file=sys.stderr)
    sys.exit(1)


# ── Report formatting ────────────────────────────────────────────────────────

WIDTH = 60
DIV = "─" * WIDTH
SEC = "═" * WIDTH


def header(title: str) -> str:
    return f"\n{SEC}\n  {C.BOLD}{title}{C.NC}\n{SEC}"


def section(title: str) -> str:
    return f"\n{DIV}\n  {title}\n{DIV}"


def row(label: str, value: float | int, width: int = 24) -> str:
    """One ``label  value`` line; ints without decimals, floats to 4 places."""
    if isinstance(value, int):
        return f"  {label:<{width}} {value:>16,}"
    return f"  {label:<{width}} {value:>16,.4f}"
