# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable


class UserInputError(Exception):
    pass


class InvalidInputError(UserInputError, ValueError):
    """An argument outside the domain of the requested operation."""


class TableBoundsError(UserInputError, IndexError):
    """A query beyond the bound a table was built for."""


class InputExhaustedError(UserInputError, EOFError):
    pass


def require_non_negative(value: int, name: str) -> int:
    if value < 0:
        raise InvalidInputError(f"Invalid input: {name} must be non-negative, got {value}.")
    return value


def check_bound(n: int, bound: int, what: str) -> None:
    """Raise TableBoundsError unless 0 <= n <= bound."""
    if n < 0 or n > bound:
        raise TableBoundsError(
            f"{what} query for {n} is outside the precomputed range 0..{bound}. "
            "Rebuild the table with a larger bound (--max-n)."
        )


def tick(progress, done: int, label: str = "") -> None:
    # progress is an optional cpnum.progress.Progress; builders stay silent without one
    if progress is not None:
        progress.update(done, label)


def conv_name(conv: Callable[[str], object]) -> str:
    return getattr(conv, "__name__", type(conv).__name__)


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    """Flatten nested dicts into {'A.B': value} for debug listings."""
    out: dict[str, object] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
