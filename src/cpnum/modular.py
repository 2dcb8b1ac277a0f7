# -----------------------------------------------------------------------------
#  modular.py
#  Binary exponentiation, Fermat inverse and modular division
# -----------------------------------------------------------------------------

from __future__ import annotations

from cpnum.utility import InvalidInputError

MOD = 1_000_000_007


def _check_modulus(mod: int) -> None:
    if mod < 2:
        raise InvalidInputError(f"Invalid input: modulus must be >= 2, got {mod}.")


def bin_exp(a: int, b: int, mod: int = MOD) -> int:
    """
    Return a^b mod `mod` by repeated squaring, O(log b).

    The base is reduced first, so negative bases land in [0, mod).
    """
    _check_modulus(mod)
    if b < 0:
        raise InvalidInputError(f"Invalid input: exponent must be non-negative, got {b}.")
    res = 1
    a %= mod
    while b:
        if b & 1:
            res = res * a % mod
        a = a * a % mod
        b >>= 1
    return res


def binpow(base: int, exp: int) -> int:
    """Plain base^exp with the same square-and-multiply loop, no modulus."""
    if exp < 0:
        raise InvalidInputError(f"Invalid input: exponent must be non-negative, got {exp}.")
    res = 1
    while exp:
        if exp & 1:
            res *= base
        base *= base
        exp >>= 1
    return res


def mod_inverse(n: int, mod: int = MOD) -> int:
    """
    Inverse of n modulo a prime `mod` via Fermat's little theorem: n^(mod-2).

    The modulus is not re-checked for primality here; config.validate_modulus
    does that once for configured moduli.
    """
    _check_modulus(mod)
    if n % mod == 0:
        raise InvalidInputError(f"Invalid input: {n} has no inverse modulo {mod}.")
    return bin_exp(n, mod - 2, mod)


def mod_div(a: int, b: int, mod: int = MOD) -> int:
    return a % mod * mod_inverse(b, mod) % mod
