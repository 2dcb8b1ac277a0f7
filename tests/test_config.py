# tests/test_config.py
from __future__ import annotations

import pytest

from cpnum import config as CONFIG
from cpnum.runtime import APPLY, CFG, current
from cpnum.utility import UserInputError
from cpnum.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir


def test_workspace_follows_env(isolated_workspace):
    assert workspace_dir() == isolated_workspace.resolve()


def test_seeding_copies_packaged_profiles(isolated_workspace):
    root, seeded, copied = ensure_workspace_seeded()
    assert seeded
    assert copied["profiles"] >= 1
    assert (root / "profiles" / "default.toml").is_file()
    # second run copies nothing new
    _, seeded_again, _ = ensure_workspace_seeded()
    assert not seeded_again


def test_seed_overwrite_restores_profile(isolated_workspace):
    ensure_workspace_seeded()
    path = isolated_workspace / "profiles" / "default.toml"
    path.write_text("broken = [", encoding="utf-8")
    seed_workspace(overwrite=True)
    assert "MODULUS" in path.read_text(encoding="utf-8")


def test_load_default_profile():
    ensure_workspace_seeded()
    s = CONFIG.load_settings(None)
    assert s.name == "default"
    assert s.description != "(no description)"
    assert "_PROFILE_" not in s.as_dict()
    assert s.as_dict()["MODULAR"]["MODULUS"] == 1_000_000_007


def test_apply_profile_to_runtime():
    ensure_workspace_seeded()
    APPLY(CONFIG.load_settings("ntt"))
    rt = current()
    assert rt.profile_name == "ntt"
    assert rt.modulus == 998_244_353
    assert rt.max_n == 200_000
    assert CFG("TABLES.FACT_MAX_N") == 200_000
    assert CFG("NOPE.MISSING", 42) == 42


def test_runtime_defaults_without_profile():
    rt = current()
    assert rt.modulus == 1_000_000_007
    assert rt.max_n == 1_000_000
    assert rt.fact_max_n == rt.max_n


def _write_profile(ws, name: str, body: str) -> None:
    pdir = ws / "profiles"
    pdir.mkdir(parents=True, exist_ok=True)
    (pdir / f"{name}.toml").write_text(body, encoding="utf-8")


def test_malformed_toml_reports_location(isolated_workspace):
    _write_profile(isolated_workspace, "bad", "[TABLES]\nMAX_N = \n")
    with pytest.raises(UserInputError, match="line 2"):
        CONFIG.load_settings("bad")


@pytest.mark.parametrize("body", [
    "[MODULAR]\nMODULUS = 1_000_000_008\n",
    "[MODULAR]\nMODULUS = 1\n",
    "[TABLES]\nMAX_N = -5\n",
    "[TABLES]\nMAX_N = \"big\"\n",
    "[BEHAVIOUR]\nDEBUG = 1\n",
    "[OUTPUT]\nOUTPUT_FILE = 5\n",
])
def test_invalid_values_are_rejected(isolated_workspace, body):
    _write_profile(isolated_workspace, "invalid", body)
    with pytest.raises(UserInputError):
        CONFIG.load_settings("invalid")


def test_profile_without_metadata_uses_file_name(isolated_workspace):
    _write_profile(isolated_workspace, "plain", "[TABLES]\nMAX_N = 10\n")
    s = CONFIG.load_settings("plain")
    assert s.name == "plain"
    assert s.description == "(no description)"


def test_missing_profile():
    with pytest.raises(UserInputError, match="not found"):
        CONFIG.load_settings("does-not-exist")


def test_current_profile_roundtrip():
    ensure_workspace_seeded()
    assert CONFIG.read_current_profile() is None
    CONFIG.write_current_profile("small.toml")
    assert CONFIG.read_current_profile() == "small"
    with pytest.raises(UserInputError):
        CONFIG.write_current_profile("nope")


def test_list_profiles():
    ensure_workspace_seeded()
    names = CONFIG.list_all_profiles()
    assert {"default", "ntt", "small"} <= set(names)
    described = dict(CONFIG.list_profiles_with_descriptions())
    assert described["ntt"].startswith("Modulus 998244353")


@pytest.mark.parametrize("m", [2, 13, 998_244_353, 1_000_000_007])
def test_validate_modulus_accepts_primes(m):
    assert CONFIG.validate_modulus(m) == m


@pytest.mark.parametrize("m", [0, 1, 4, 1_000_000_008])
def test_validate_modulus_rejects_composites(m):
    with pytest.raises(UserInputError):
        CONFIG.validate_modulus(m)
