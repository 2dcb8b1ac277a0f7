from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("cpnum")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .combinatorics import FactorialTable, build_factorials, ncr, ncr_direct
from .context import TableCtx, build_ctx
from .factor import (
    FactorTable,
    build_factor_table,
    divisor_count,
    divisor_sum,
    factorize,
    get_all_divisors,
    prime_factor_pairs,
)
from .gcd_lcm import gcd, lcm
from .modular import MOD, bin_exp, binpow, mod_div, mod_inverse
from .scanner import Scanner
from .sieve import PrimeTable, sieve
from .utility import InputExhaustedError, InvalidInputError, TableBoundsError, UserInputError

__all__ = [
    "MOD",
    "FactorTable",
    "FactorialTable",
    "InputExhaustedError",
    "InvalidInputError",
    "PrimeTable",
    "Scanner",
    "TableBoundsError",
    "TableCtx",
    "UserInputError",
    "__version__",
    "bin_exp",
    "binpow",
    "build_ctx",
    "build_factor_table",
    "build_factorials",
    "divisor_count",
    "divisor_sum",
    "factorize",
    "gcd",
    "get_all_divisors",
    "lcm",
    "mod_div",
    "mod_inverse",
    "ncr",
    "ncr_direct",
    "prime_factor_pairs",
    "sieve",
]
