# -----------------------------------------------------------------------------
#  combinatorics.py
#  nCr mod P: precomputed-factorial and direct variants
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass

from cpnum.modular import MOD, mod_inverse
from cpnum.utility import InvalidInputError, check_bound, require_non_negative, tick

_TICK_EVERY = 1 << 14


@dataclass(frozen=True)
class FactorialTable:
    modulus: int
    max_n: int
    values: tuple[int, ...]      # values[i] = i! mod modulus

    def __getitem__(self, i: int) -> int:
        check_bound(i, self.max_n, "Factorial")
        return self.values[i]


def build_factorials(max_n: int, mod: int = MOD, progress=None) -> FactorialTable:
    """
    Factorials 0!..max_n! reduced mod `mod`, built once and shared read-only.

    max_n must stay below the modulus: from mod! on every entry is 0 and has
    no inverse.
    """
    require_non_negative(max_n, "factorial table bound")
    if max_n >= mod:
        raise InvalidInputError(
            f"Invalid input: factorial table bound {max_n} must be smaller than the modulus {mod}."
        )
    fact = [1] * (max_n + 1)
    for i in range(1, max_n + 1):
        fact[i] = fact[i - 1] * i % mod
        if i % _TICK_EVERY == 0:
            tick(progress, i, "factorials")
    return FactorialTable(modulus=mod, max_n=max_n, values=tuple(fact))


def ncr(n: int, r: int, table: FactorialTable) -> int:
    """C(n, r) mod P in O(log P) per query from a prebuilt FactorialTable."""
    if r < 0 or r > n:
        return 0
    mod = table.modulus
    if r == 0 or r == n:
        return 1 % mod
    fact = table.values
    check_bound(n, table.max_n, "nCr")
    ret = fact[n] * mod_inverse(fact[r], mod) % mod
    return ret * mod_inverse(fact[n - r], mod) % mod


def ncr_direct(n: int, r: int, mod: int = MOD) -> int:
    """
    C(n, r) mod P in O(r) without any table.

    Suits a handful of queries, or n too large for a factorial table. When n
    reaches the modulus the base-`mod` digits are combined by Lucas' theorem,
    so r! never has to be inverted for r >= mod.
    """
    if r < 0 or r > n:
        return 0
    if r == 0 or r == n:
        return 1 % mod
    if n >= mod:
        res = 1
        while r and res:
            res = res * ncr_direct(n % mod, r % mod, mod) % mod
            n //= mod
            r //= mod
        return res
    r = min(r, n - r)
    num = 1
    for j in range(n, n - r, -1):
        num = num * (j % mod) % mod
    den = 1
    for j in range(1, r + 1):
        den = den * j % mod
    return num * mod_inverse(den, mod) % mod
