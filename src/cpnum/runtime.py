# runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style

from cpnum.modular import MOD

DEFAULT_MAX_N = 1_000_000


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False      # [debug] lines on stderr, full tracebacks
    progress: bool = True    # progress bar while building large tables

    def apply(self, settings: Any) -> None:
        self.profile_name = getattr(settings, "name", None) or "default"

        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            cfg = settings.as_dict()
        elif isinstance(settings, dict):
            cfg = settings
        else:
            cfg = {}
        self.settings = dict(cfg)

        # sync runtime flags from profile
        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

        prog = self.get("BEHAVIOUR.PROGRESS", None)
        if isinstance(prog, bool):
            self.progress = prog

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'TABLES.MAX_N'."""
        if not key:
            return default
        cur = self.settings
        if "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)

    @property
    def modulus(self) -> int:
        return int(self.get("MODULAR.MODULUS", MOD))

    @property
    def max_n(self) -> int:
        return int(self.get("TABLES.MAX_N", DEFAULT_MAX_N))

    @property
    def fact_max_n(self) -> int:
        return int(self.get("TABLES.FACT_MAX_N", self.max_n))


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("cpnum_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> Runtime:
    """Install a fresh Runtime (used between CLI invocations in one process)."""
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Verify core runtime deps are available without importing them here.
    If strict=True, prints a friendly error and returns False when missing.
    """
    required = ("sympy", "gmpy2")
    missing = [name for name in required if find_spec(name) is None]

    if not missing:
        return True

    msg = (
        f"{Fore.RED}{Style.BRIGHT}\nMissing dependencies:{Style.RESET_ALL} "
        + ", ".join(missing)
        + "\nInstall with: "
        + f"{Fore.YELLOW}pip install " + " ".join(missing) + f"{Style.RESET_ALL}"
    )
    print(msg)
    return not strict
