# src/cpnum/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub("", s)


def join_ints(values: Iterable[int], sep: str = " ") -> str:
    return sep.join(str(v) for v in values)


def format_factorization(pairs: Iterable[tuple[int, int]]) -> str:
    """
    Turn [(p, e), ...] into a tidy string like: 2^3 × 3 × 5^2
    """
    parts = [f"{p}^{e}" if e > 1 else f"{p}" for p, e in pairs]
    return " × ".join(parts) if parts else "1"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm."""
    MAX_SECONDS = 60
    if seconds < 1:
        return f"{round(seconds * 1000)} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    return f"{int(m)}:{s:06.3f}"
