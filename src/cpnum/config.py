from __future__ import annotations

import tomllib as toml
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sympy import isprime

from cpnum.utility import UserInputError
from cpnum.workspace import ensure_workspace_seeded, workspace_dir

# Keys that must hold integers, with their smallest accepted value
_INT_KEYS = {
    ("MODULAR", "MODULUS"): 2,
    ("TABLES", "MAX_N"): 0,
    ("TABLES", "FACT_MAX_N"): 0,
}
_BOOL_KEYS = (("BEHAVIOUR", "DEBUG"), ("BEHAVIOUR", "PROGRESS"))
_STR_KEYS = (("OUTPUT", "OUTPUT_FILE"),)


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

    Added fields:
      - name:        resolved profile name (FILE.stem if not provided in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


# --- Metadata & validation -------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return data, name, description


def _validate(data: dict[str, Any], source: str) -> None:
    for (section, key), minimum in _INT_KEYS.items():
        value = (data.get(section) or {}).get(key)
        if value is None:
            continue
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise UserInputError(f"{source}: {section}.{key} must be an integer, got {value!r}.")
        if value < minimum:
            raise UserInputError(f"{source}: {section}.{key} must be >= {minimum}, got {value}.")

    for section, key in _BOOL_KEYS:
        value = (data.get(section) or {}).get(key)
        if value is not None and not isinstance(value, bool):
            raise UserInputError(f"{source}: {section}.{key} must be true or false, got {value!r}.")

    for section, key in _STR_KEYS:
        value = (data.get(section) or {}).get(key)
        if value is not None and not isinstance(value, str):
            raise UserInputError(f"{source}: {section}.{key} must be a string, got {value!r}.")

    modulus = (data.get("MODULAR") or {}).get("MODULUS")
    if modulus is not None:
        validate_modulus(modulus, source=source)


def validate_modulus(modulus: int, *, source: str = "modulus") -> int:
    """
    Modular inverses are computed with Fermat's little theorem, which only
    holds for a prime modulus.
    """
    if modulus < 2 or not isprime(modulus):
        raise UserInputError(f"{source}: modulus {modulus} is not prime.")
    return modulus


# --- Public API ------------------------------------------------------------


def list_all_profiles() -> list[str]:
    """Return the list of available profile *names* (filename stems)."""
    ensure_workspace_seeded()
    pdir = _profiles_dir()
    if not pdir.exists():
        return []
    return sorted(p.stem for p in pdir.glob("*.toml"))


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """
    Return [(name, description), ...] for all profiles.
    Unreadable profiles are listed under their file name with the error as description.
    """
    items: list[tuple[str, str]] = []
    for p in _profiles_dir().glob("*.toml"):
        try:
            raw = _load_toml(p)
        except UserInputError as e:
            items.append((p.stem, f"(unreadable: {e})"))
            continue
        _, nm, desc = _split_profile_data(raw, p.stem)
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name).exists()


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name (default 'default'), strip the [_PROFILE_] metadata,
    validate the numeric keys and return
    Settings(data=..., name=..., description=..., _source=path).
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if not path.exists():
        raise UserInputError(f"Profile '{name}' not found at {path}")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)
    _validate(data, path.name)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )


def _current_profile_path() -> Path:
    p = _profiles_dir()
    p.mkdir(parents=True, exist_ok=True)
    return p / ".current"


def read_current_profile() -> str | None:
    try:
        s = _current_profile_path().read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    return s[:-5] if s.lower().endswith(".toml") else (s or None)


def write_current_profile(name: str) -> None:
    nm = (name or "").strip()
    if nm.lower().endswith(".toml"):
        nm = nm[:-5]
    if not has_profile(nm):
        raise UserInputError(f"Profile '{nm}' not found.")
    _current_profile_path().write_text(nm, encoding="utf-8")
