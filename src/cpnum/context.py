from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter

from cpnum.combinatorics import FactorialTable, build_factorials
from cpnum.factor import FactorTable, build_factor_table
from cpnum.progress import Progress
from cpnum.sieve import PrimeTable, sieve

TABLE_KINDS = ("factorials", "primes", "factors")


@dataclass(frozen=True)
class TableCtx:
    # --- non-default fields FIRST ---
    modulus: int
    max_n: int                               # bound for primes / factors
    fact_max_n: int                          # bound for factorials

    # --- tables, None until requested ---
    factorials: FactorialTable | None = None
    primes: PrimeTable | None = None
    factors: FactorTable | None = None
    timings: tuple[tuple[str, float], ...] = ()   # (kind, seconds) per built table

    def require(self, kind: str):
        table = getattr(self, kind)
        if table is None:
            raise LookupError(f"{kind} table was not requested when this context was built")
        return table


def build_ctx(
    modulus: int,
    max_n: int,
    fact_max_n: int | None = None,
    *,
    need: tuple[str, ...] = TABLE_KINDS,
    show_progress: bool = False,
) -> TableCtx:
    """
    Build the requested tables once and hand them back in one immutable object.

    The context is the only owner of precomputed state; callers pass it (or a
    single table from it) into the query functions.
    """
    unknown = set(need) - set(TABLE_KINDS)
    if unknown:
        raise ValueError(f"Unknown table kind(s): {', '.join(sorted(unknown))}")
    fact_max_n = max_n if fact_max_n is None else fact_max_n

    built: dict[str, object] = {}
    timings: list[tuple[str, float]] = []
    for kind in TABLE_KINDS:
        if kind not in need:
            continue
        bound = fact_max_n if kind == "factorials" else max_n
        progress = Progress(bound, enabled=show_progress)
        t0 = perf_counter()
        try:
            if kind == "factorials":
                built[kind] = build_factorials(bound, modulus, progress=progress)
            elif kind == "primes":
                built[kind] = sieve(bound, progress=progress)
            else:
                built[kind] = build_factor_table(bound, progress=progress)
        finally:
            progress.done()
        timings.append((kind, perf_counter() - t0))

    return TableCtx(
        modulus=modulus,
        max_n=max_n,
        fact_max_n=fact_max_n,
        timings=tuple(timings),
        **built,
    )
