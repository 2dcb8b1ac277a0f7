# -----------------------------------------------------------------------------
#  sieve.py
#  Sieve of Eratosthenes primality table
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass

from cpnum.utility import check_bound, require_non_negative, tick


@dataclass(frozen=True)
class PrimeTable:
    bound: int
    flags: tuple[bool, ...]      # flags[i] is True iff i is prime, 0 <= i <= bound

    def is_prime(self, k: int) -> bool:
        check_bound(k, self.bound, "Primality")
        return self.flags[k]

    def primes(self) -> list[int]:
        return [i for i, p in enumerate(self.flags) if p]

    def count(self) -> int:
        return sum(self.flags)


def sieve(n: int, progress=None) -> PrimeTable:
    """
    Build the primality table for 0..n in O(n log log n).

    Only i with i*i <= n need to strike; every composite <= n has a prime
    factor no larger than its square root.
    """
    require_non_negative(n, "sieve bound")
    flags = [True] * (n + 1)
    flags[0] = False
    if n >= 1:
        flags[1] = False

    i = 2
    while i * i <= n:
        if flags[i]:
            flags[i * i::i] = [False] * len(range(i * i, n + 1, i))
            tick(progress, i * i, "sieve")
        i += 1
    return PrimeTable(bound=n, flags=tuple(flags))
