# src/cpnum/cli.py

"""
cpnum - number-theory templates for competitive programming

Description:
    One command per classic contest template: modular exponentiation,
    modular inverse and division, nCr mod P (factorial table or direct),
    gcd/lcm, sieve of Eratosthenes, factorization and divisor enumeration.
    Inputs come from the command line or, contest style, from stdin.

usage: see cpnum -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback
from collections.abc import Callable
from importlib.resources import files as pkg_files
from time import perf_counter
from typing import NamedTuple

from colorama import Fore, Style
from colorama import init as colorama_init

from cpnum import config as CONFIG
from cpnum.combinatorics import ncr, ncr_direct
from cpnum.context import TableCtx, build_ctx
from cpnum.factor import (
    divisor_count,
    divisor_sum,
    factorize,
    get_all_divisors,
    prime_factor_pairs,
)
from cpnum.fmt import format_duration, format_factorization, join_ints
from cpnum.gcd_lcm import gcd, lcm
from cpnum.modular import bin_exp, binpow, mod_div, mod_inverse
from cpnum.output_manager import OutputManager
from cpnum.runtime import APPLY, CFG, ensure_runtime_deps
from cpnum.runtime import current as _rt_current
from cpnum.runtime import reset as _rt_reset
from cpnum.scanner import Scanner
from cpnum.utility import UserInputError, flatten_dotted, typename
from cpnum.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

Handler = Callable[[list[int], argparse.Namespace, TableCtx], list[str]]


class Command(NamedTuple):
    name: str
    arity: int                       # integers consumed per case
    metavar: str
    help: str
    run: Handler


# ---- command handlers ----

def _run_binexp(v: list[int], args, ctx: TableCtx) -> list[str]:
    a, b = v
    return [str(binpow(a, b) if args.plain else bin_exp(a, b, ctx.modulus))]


def _run_modinv(v: list[int], args, ctx: TableCtx) -> list[str]:
    n, a, b = v
    return [str(mod_inverse(n, ctx.modulus)), str(mod_div(a, b, ctx.modulus))]


def _run_ncr(v: list[int], args, ctx: TableCtx) -> list[str]:
    n, r = v
    if args.direct:
        return [str(ncr_direct(n, r, ctx.modulus))]
    return [str(ncr(n, r, ctx.require("factorials")))]


def _run_gcdlcm(v: list[int], args, ctx: TableCtx) -> list[str]:
    a, b = v
    return [f"{gcd(a, b)} {lcm(a, b)}"]


def _run_divisors(v: list[int], args, ctx: TableCtx) -> list[str]:
    (n,) = v
    table = ctx.require("factors")
    if args.summary:
        pairs = prime_factor_pairs(n, table)
        return [f"{divisor_count(pairs)} {divisor_sum(pairs)}"]
    return [join_ints(get_all_divisors(n, table))]


def _run_factorize(v: list[int], args, ctx: TableCtx) -> list[str]:
    (n,) = v
    table = ctx.require("factors")
    if args.pretty:
        return [format_factorization(prime_factor_pairs(n, table))]
    return [join_ints(factorize(n, table))]


def _run_sieve(v: list[int], args, ctx: TableCtx) -> list[str]:
    primes = ctx.require("primes")
    if args.count:
        return [str(primes.count())]
    return [join_ints(primes.primes())]


COMMANDS: dict[str, Command] = {c.name: c for c in (
    Command("binexp", 2, "a b", "print a^b mod P", _run_binexp),
    Command("modinv", 3, "n a b", "print n^-1 mod P, then (a/b) mod P", _run_modinv),
    Command("ncr", 2, "n r", "print C(n, r) mod P", _run_ncr),
    Command("gcdlcm", 2, "a b", "print '<gcd> <lcm>'", _run_gcdlcm),
    Command("divisors", 1, "n", "print all divisors of n", _run_divisors),
    Command("factorize", 1, "n", "print the prime factors of n, ascending (n = 1 prints an empty line)", _run_factorize),
    Command("sieve", 0, "[N]", "print the primes up to N", _run_sieve),
)}

ADMIN_COMMANDS = ("init", "where", "profiles", "use")


def _tables_for(args: argparse.Namespace) -> tuple[str, ...]:
    if args.command == "ncr" and not args.direct:
        return ("factorials",)
    if args.command in ("divisors", "factorize"):
        return ("factors",)
    if args.command == "sieve":
        return ("primes",)
    return ()


# ---- diagnostics ----

def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"{Fore.CYAN}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if msg.startswith("Invalid input:"):
        msg = msg.replace("Invalid input:", f"{Fore.RED}Invalid input:{Style.RESET_ALL}", 1)
    elif not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


# ---- argparse ----

def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    admin commands:
      init      Create the workspace and copy the sample profiles if missing.
      where     Show the workspace and package paths.
      profiles  List profiles with their descriptions.
      use NAME  Make NAME the profile used when --profile is not given.

    Without positional integers a command reads them from stdin.
    With --cases the first integer is the number of test cases.
    """)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--profile", default=None, help="Profile name (default: last used, else 'default')")
    common.add_argument("--modulus", type=int, default=None, help="Prime modulus P (overrides the profile)")
    common.add_argument("--max-n", type=int, default=None, help="Bound for all precomputed tables")
    common.add_argument("--cases", action="store_true", help="Read a test-case count, then that many inputs")
    common.add_argument("--output", default=None, help="Also append results to this file")
    common.add_argument("--quiet", action="store_true", help="Do not print results to the screen")
    common.add_argument("--debug", action="store_true", help="Show table build timings and full tracebacks")

    p = argparse.ArgumentParser(
        prog="cpnum",
        description="Number-theory templates for competitive programming",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    sub = p.add_subparsers(dest="command", required=True, metavar="command")

    for cmd in COMMANDS.values():
        sp = sub.add_parser(cmd.name, parents=[common], help=cmd.help)
        sp.add_argument("values", nargs="*", type=int, metavar=cmd.metavar)
        if cmd.name == "binexp":
            sp.add_argument("--plain", action="store_true", help="No modulus: print the exact power")
        elif cmd.name == "ncr":
            sp.add_argument("--direct", action="store_true", help="O(r) per query, no factorial table")
        elif cmd.name == "divisors":
            sp.add_argument("--summary", action="store_true", help="Print '<count> <sum>' of the divisors")
        elif cmd.name == "factorize":
            sp.add_argument("--pretty", action="store_true", help="Print as p^e × q × ...")
        elif cmd.name == "sieve":
            sp.add_argument("--count", action="store_true", help="Print how many primes instead")

    sp = sub.add_parser("init", parents=[common], help="seed the workspace")
    sp.add_argument("--overwrite", action="store_true", help="Replace existing sample profiles")
    sub.add_parser("where", parents=[common], help="show workspace and package paths")
    sub.add_parser("profiles", parents=[common], help="list profiles")
    sp = sub.add_parser("use", parents=[common], help="remember the default profile")
    sp.add_argument("name")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _run_admin(args: argparse.Namespace) -> int:
    if args.command == "init":
        ws, copied = seed_workspace(overwrite=args.overwrite)
        suffix = " (overwrote existing files)" if args.overwrite else ""
        print(f"Workspace ready at: {ws}{suffix}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
    elif args.command == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('cpnum')}")
    elif args.command == "profiles":
        active = CONFIG.read_current_profile() or "default"
        for name, desc in CONFIG.list_profiles_with_descriptions():
            mark = "*" if name == active else " "
            print(f"{mark} {name:<16} {desc}")
    else:
        CONFIG.write_current_profile(args.name)
        print(f"Default profile: {args.name}")
    return 0


def _apply_profile(args: argparse.Namespace) -> None:
    # Choose profile: explicit → last-used → default
    name = args.profile
    if name and not CONFIG.has_profile(name):
        available = ", ".join(CONFIG.list_all_profiles()) or "(none)"
        raise UserInputError(f"Unknown profile: '{name}'. Available profiles: {available}")
    if not name:
        last = CONFIG.read_current_profile()
        name = last if last and CONFIG.has_profile(last) else "default"

    selected = CONFIG.load_settings(name)
    APPLY(selected)
    if args.debug:
        _rt_current().debug = True

    _debug(f"active profile: {selected.name} ({selected._source})")
    for k, v in sorted(flatten_dotted(selected.as_dict()).items(), key=lambda kv: kv[0].lower()):
        _debug(f"  {k:.<40} {CFG(k)!r} ({typename(v)})")


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_reset()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    if not ensure_runtime_deps(strict=True):
        return 1

    ensure_workspace_seeded()

    if args.command in ADMIN_COMMANDS:
        return _run_admin(args)

    cmd = COMMANDS[args.command]

    if args.command == "sieve":
        if len(args.values) > 1:
            parser.error("sieve takes at most one bound")
        if args.cases:
            parser.error("--cases is not supported by sieve")
    elif args.values and len(args.values) != cmd.arity:
        parser.error(f"{cmd.name} expects {cmd.arity} integer(s): {cmd.metavar}")
    if args.values and args.cases:
        parser.error("--cases reads from stdin; do not pass positional integers")

    _apply_profile(args)

    # profile moduli were validated on load
    modulus = rt.modulus
    if args.modulus is not None:
        modulus = CONFIG.validate_modulus(args.modulus, source="--modulus")
    max_n = args.max_n if args.max_n is not None else rt.max_n
    if args.max_n is not None:
        fact_max_n = args.max_n
    else:
        # factorials from modulus! on are 0 mod P; keep the profile bound below it
        fact_max_n = min(rt.fact_max_n, modulus - 1)
    if args.command == "sieve" and args.values:
        max_n = args.values[0]
    if max_n < 0 or fact_max_n < 0:
        raise UserInputError(f"Invalid input: table bounds must be non-negative, got {min(max_n, fact_max_n)}.")
    _debug(f"modulus={modulus} max_n={max_n} fact_max_n={fact_max_n}")

    # tables first, exactly once, before any case is answered
    need = _tables_for(args)
    ctx = build_ctx(
        modulus,
        max_n,
        fact_max_n,
        need=need,
        show_progress=rt.progress and not args.quiet,
    )
    for kind, secs in ctx.timings:
        _debug(f"built {kind} table in {format_duration(secs)}")

    scanner = Scanner(sys.stdin)
    if args.cases:
        cases = scanner.next()
        if cases < 0:
            raise UserInputError(f"Invalid input: number of test cases must be non-negative, got {cases}.")
    else:
        cases = 1

    target = args.output if args.output is not None else (CFG("OUTPUT.OUTPUT_FILE", "") or None)
    om = OutputManager(output_file=target, quiet=args.quiet)
    try:
        for case in range(1, cases + 1):
            if args.values or cmd.arity == 0:
                values = list(args.values)
            else:
                values = scanner.dump(cmd.arity)
            t0 = perf_counter()
            for line in cmd.run(values, args, ctx):
                om.write(line)
            _debug(f"case {case}: {cmd.name}{tuple(values)} in {format_duration(perf_counter() - t0)}")
    finally:
        om.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
