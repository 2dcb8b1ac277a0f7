# tests/test_cli.py
from __future__ import annotations

import io

import pytest

from cpnum.cli import main


def run(argv, capsys, monkeypatch, stdin: str = ""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    code = main(argv)
    out, err = capsys.readouterr()
    return code, out, err


# --- one-shot commands, positional input -------------------------------------

CLI_CASES = [
    (["binexp", "2", "10"], "1024\n"),
    (["binexp", "2", "100", "--plain"], f"{2**100}\n"),
    (["binexp", "3", "4", "--modulus", "13"], f"{81 % 13}\n"),
    (["modinv", "2", "10", "4"], "500000004\n500000006\n"),
    (["ncr", "5", "2", "--max-n", "10"], "10\n"),
    (["ncr", "5", "2", "--direct"], "10\n"),
    (["ncr", "5", "7", "--direct"], "0\n"),
    (["gcdlcm", "48", "18"], "6 144\n"),
    (["factorize", "360", "--max-n", "400"], "2 2 2 3 3 5\n"),
    (["factorize", "360", "--max-n", "400", "--pretty"], "2^3 × 3^2 × 5\n"),
    (["divisors", "12", "--max-n", "20", "--summary"], "6 28\n"),
    (["sieve", "30"], "2 3 5 7 11 13 17 19 23 29\n"),
    (["sieve", "30", "--count"], "10\n"),
]


@pytest.mark.parametrize(("argv", "expected"), CLI_CASES)
def test_commands(argv, expected, capsys, monkeypatch):
    code, out, _ = run(argv, capsys, monkeypatch)
    assert code == 0
    assert out == expected


def test_divisors_output_is_complete(capsys, monkeypatch):
    code, out, _ = run(["divisors", "12", "--max-n", "20"], capsys, monkeypatch)
    assert code == 0
    assert sorted(int(x) for x in out.split()) == [1, 2, 3, 4, 6, 12]


# --- stdin input -------------------------------------------------------------

def test_reads_from_stdin(capsys, monkeypatch):
    code, out, _ = run(["gcdlcm"], capsys, monkeypatch, stdin="48\n18\n")
    assert code == 0
    assert out == "6 144\n"


def test_modinv_reads_three_numbers(capsys, monkeypatch):
    code, out, _ = run(["modinv"], capsys, monkeypatch, stdin="3\n6 3\n")
    assert code == 0
    assert out.splitlines() == ["333333336", "2"]


def test_cases_mode_answers_each_case(capsys, monkeypatch):
    code, out, _ = run(
        ["ncr", "--cases", "--max-n", "50"], capsys, monkeypatch,
        stdin="4\n5 2\n10 0\n3 5\n50 25\n",
    )
    assert code == 0
    assert out.splitlines() == ["10", "1", "0", str(126410606437752 % 1_000_000_007)]


def test_cases_mode_factorize(capsys, monkeypatch):
    code, out, _ = run(["factorize", "--cases", "--max-n", "100"], capsys, monkeypatch, stdin="3\n1\n97\n100\n")
    assert code == 0
    assert out.splitlines() == ["", "97", "2 2 5 5"]


def test_missing_stdin_input_is_user_error(capsys, monkeypatch):
    code, _, err = run(["binexp"], capsys, monkeypatch, stdin="2\n")
    assert code == 2
    assert "end of input" in err


def test_bad_stdin_token(capsys, monkeypatch):
    code, _, err = run(["binexp"], capsys, monkeypatch, stdin="2 x\n")
    assert code == 2
    assert "'x'" in err


# --- errors ------------------------------------------------------------------

def test_out_of_range_query(capsys, monkeypatch):
    code, _, err = run(["factorize", "101", "--max-n", "100"], capsys, monkeypatch)
    assert code == 2
    assert "0..100" in err


def test_inverse_of_zero(capsys, monkeypatch):
    code, _, err = run(["modinv", "0", "1", "1"], capsys, monkeypatch)
    assert code == 2
    assert "no inverse" in err


def test_composite_modulus_rejected(capsys, monkeypatch):
    code, _, err = run(["binexp", "2", "3", "--modulus", "10"], capsys, monkeypatch)
    assert code == 2
    assert "not prime" in err


def test_unknown_profile(capsys, monkeypatch):
    code, _, err = run(["binexp", "2", "3", "--profile", "nope"], capsys, monkeypatch)
    assert code == 2
    assert "Unknown profile" in err


def test_wrong_arity_is_usage_error(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    with pytest.raises(SystemExit) as exc:
        main(["ncr", "5"])
    assert exc.value.code == 2


def test_cases_with_positionals_is_usage_error(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    with pytest.raises(SystemExit):
        main(["gcdlcm", "1", "2", "--cases"])


# --- profiles, output, debug -------------------------------------------------

def test_profile_modulus_is_used(capsys, monkeypatch):
    code, out, _ = run(["binexp", "2", "23", "--profile", "ntt"], capsys, monkeypatch)
    assert code == 0
    assert out == f"{pow(2, 23, 998_244_353)}\n"


def test_use_remembers_profile(capsys, monkeypatch):
    code, out, _ = run(["use", "ntt"], capsys, monkeypatch)
    assert code == 0
    assert "ntt" in out
    code, out, _ = run(["binexp", "3", "998244352"], capsys, monkeypatch)
    assert out == "1\n"


def test_profiles_listing(capsys, monkeypatch):
    code, out, _ = run(["profiles"], capsys, monkeypatch)
    assert code == 0
    assert "default" in out and "ntt" in out and "small" in out


def test_where_and_init(isolated_workspace, capsys, monkeypatch):
    code, out, _ = run(["where"], capsys, monkeypatch)
    assert code == 0
    assert str(isolated_workspace.resolve()) in out
    code, out, _ = run(["init", "--overwrite"], capsys, monkeypatch)
    assert code == 0
    assert "overwrote" in out


def test_output_file_and_quiet(isolated_workspace, capsys, monkeypatch):
    code, out, _ = run(["gcdlcm", "4", "6", "--output", "runs/out.txt", "--quiet"], capsys, monkeypatch)
    assert code == 0
    assert out == ""
    saved = (isolated_workspace / "runs" / "out.txt").read_text(encoding="utf-8")
    assert saved == "2 12\n\n"


def test_debug_reports_table_builds(capsys, monkeypatch):
    code, out, err = run(["sieve", "50", "--count", "--debug"], capsys, monkeypatch)
    assert code == 0
    assert out == "15\n"
    assert "[debug]" in err
    assert "built primes table" in err


def test_modulus_flag_caps_profile_factorial_bound(capsys, monkeypatch):
    code, out, err = run(["ncr", "5", "2", "--modulus", "13"], capsys, monkeypatch)
    assert code == 0, err
    assert out == "10\n"


def test_factorize_one_prints_blank_line(capsys, monkeypatch):
    code, out, _ = run(["factorize", "1", "--max-n", "10"], capsys, monkeypatch)
    assert code == 0
    assert out == "\n"
    code, out, _ = run(["factorize", "1", "--max-n", "10", "--pretty"], capsys, monkeypatch)
    assert out == "1\n"
