# -----------------------------------------------------------------------------
#  scanner.py
#  Whitespace-token reader for contest-style input
# -----------------------------------------------------------------------------

from __future__ import annotations

import io
import sys
from collections.abc import Callable
from typing import TextIO, TypeVar

from cpnum.utility import InputExhaustedError, InvalidInputError, conv_name

T = TypeVar("T")


class Scanner:
    """
    Read whitespace-separated tokens from a text stream, one line at a time.

    Usage:
        sc = Scanner.from_string("3\\n10 20 30\\n")
        n = sc.next()            # 3
        xs = sc.dump(n)          # [10, 20, 30]

    Lines are pulled lazily, so interactive input works token by token.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdin
        self._buffer: list[str] = []     # current line's tokens, reversed

    @classmethod
    def from_string(cls, text: str) -> Scanner:
        return cls(io.StringIO(text))

    def _next_token(self, context: str = "") -> str:
        while not self._buffer:
            line = self.stream.readline()
            if not line:
                raise InputExhaustedError(f"Unexpected end of input{context}.")
            self._buffer = line.split()[::-1]
        return self._buffer.pop()

    @staticmethod
    def _convert(token: str, conv: Callable[[str], T], where: str) -> T:
        try:
            return conv(token)
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"Invalid input: failed to parse {token!r} as {conv_name(conv)}{where}."
            ) from None

    def next(self, conv: Callable[[str], T] = int) -> T:
        return self._convert(self._next_token(), conv, "")

    def dump(self, count: int, conv: Callable[[str], T] = int) -> list[T]:
        """Read exactly `count` tokens; errors name the failing entry."""
        if count < 0:
            raise InvalidInputError(f"Invalid input: cannot read {count} entries.")
        out: list[T] = []
        for i in range(1, count + 1):
            where = f" at entry {i} of {count}"
            out.append(self._convert(self._next_token(f" while reading entry {i} of {count}"), conv, where))
        return out

    def has_next(self) -> bool:
        """True if another token is available (may block on interactive input)."""
        try:
            self._buffer.append(self._next_token())
        except InputExhaustedError:
            return False
        return True
