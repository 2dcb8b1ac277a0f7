# -----------------------------------------------------------------------------
#  factor.py
#  Largest-prime-factor table, factorization and divisor enumeration
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby

import gmpy2

from cpnum.utility import InvalidInputError, check_bound, require_non_negative, tick


@dataclass(frozen=True)
class FactorTable:
    """
    largest[i] is the largest prime factor of i for i >= 2; 0 for i in {0, 1}.

    Built by letting every prime overwrite all of its multiples in ascending
    order, so the last writer (the largest prime dividing i) wins. Dividing
    by it repeatedly still factors completely, from the top down.
    """
    bound: int
    largest: tuple[int, ...]


def build_factor_table(n: int, progress=None) -> FactorTable:
    require_non_negative(n, "factor table bound")
    largest = [0] * (n + 1)
    for i in range(2, n + 1):
        if largest[i] == 0:
            largest[i::i] = [i] * len(range(i, n + 1, i))
            tick(progress, i, "factor table")
    return FactorTable(bound=n, largest=tuple(largest))


def _check_query(n: int, table: FactorTable) -> None:
    if n < 1:
        raise InvalidInputError(f"Invalid input: can only factor positive integers, got {n}.")
    check_bound(n, table.bound, "Factorization")


def factorize(n: int, table: FactorTable) -> list[int]:
    """Prime factors of n with multiplicity, ascending. factorize(1) == []."""
    _check_query(n, table)
    out: list[int] = []
    largest = table.largest
    while n != 1:
        p = largest[n]
        out.append(p)
        n //= p
    # collected largest-first
    out.reverse()
    return out


def prime_factor_pairs(n: int, table: FactorTable) -> list[tuple[int, int]]:
    """[(p, e), ...] with ascending primes, e.g. 360 -> [(2, 3), (3, 2), (5, 1)]."""
    return [(p, len(list(run))) for p, run in groupby(factorize(n, table))]


def _collect_divisors(value: int, pairs: list[tuple[int, int]], cur: int, out: list[int]) -> None:
    if cur == len(pairs):
        out.append(value)
        return
    p, e = pairs[cur]
    # skip this prime entirely, then take it 1..e times
    _collect_divisors(value, pairs, cur + 1, out)
    for _ in range(e):
        value *= p
        _collect_divisors(value, pairs, cur + 1, out)


def get_all_divisors(n: int, table: FactorTable) -> list[int]:
    """
    All positive divisors of n (unordered), exactly prod(e_i + 1) of them.

    Recursion depth is the number of distinct primes of n, which stays tiny
    for any n a table can hold.
    """
    divisors: list[int] = []
    _collect_divisors(1, prime_factor_pairs(n, table), 0, divisors)
    return divisors


def divisor_count(pairs: list[tuple[int, int]]) -> int:
    """tau(n) = prod(e + 1)."""
    acc = gmpy2.mpz(1)
    for _, e in pairs:
        acc *= e + 1
    return int(acc)


def divisor_sum(pairs: list[tuple[int, int]]) -> int:
    """sigma(n) = prod((p^(e+1) - 1) / (p - 1))."""
    acc = gmpy2.mpz(1)
    for p, e in pairs:
        pz = gmpy2.mpz(p)
        acc *= (pz ** (e + 1) - 1) // (pz - 1)
    return int(acc)
