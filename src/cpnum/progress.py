# src/cpnum/progress.py
from __future__ import annotations

import sys
import time
from typing import TextIO


class Progress:
    """Throttled single-line progress bar for long table builds (drawn on stderr)."""

    THROTTLE = 0.05

    def __init__(self, total: int, *, enabled: bool = True, stream: TextIO | None = None):
        self.total = max(1, int(total))
        self.stream = stream or sys.stderr
        self.enabled = enabled and self.stream.isatty()
        self.last_draw = 0.0
        self.spin = "|/-\\"
        self.i = 0

    def update(self, done: int, label: str = "") -> None:
        if not self.enabled:
            return
        now = time.perf_counter()
        if now - self.last_draw < self.THROTTLE:
            return
        self.last_draw = now
        self.i = (self.i + 1) % len(self.spin)
        frac = min(max(done / self.total, 0.0), 1.0)
        bar_len = 24
        fill = int(frac * bar_len)
        bar = "#" * fill + "-" * (bar_len - fill)
        self.stream.write(f"\r[{self.spin[self.i]}] [{bar}] {int(frac * 100):3d}%  {label[:40]}")
        self.stream.flush()

    def done(self) -> None:
        if not self.enabled:
            return
        self.stream.write("\r" + " " * 80 + "\r")
        self.stream.flush()
