# -----------------------------------------------------------------------------
#  gcd_lcm.py
#  Euclidean GCD and overflow-safe LCM
# -----------------------------------------------------------------------------

from __future__ import annotations

from cpnum.utility import require_non_negative


def gcd(a: int, b: int) -> int:
    """Iterative Euclid, O(log(min(a, b))). gcd(a, 0) == a."""
    require_non_negative(a, "a")
    require_non_negative(b, "b")
    while b:
        a %= b
        a, b = b, a
    return a


def lcm(a: int, b: int) -> int:
    g = gcd(a, b)
    if g == 0:
        return 0
    # divide first so the intermediate never exceeds the result
    return a // g * b
