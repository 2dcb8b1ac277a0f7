# tests/test_scanner.py
from __future__ import annotations

import io

import pytest

from cpnum.scanner import Scanner
from cpnum.utility import InputExhaustedError, InvalidInputError, UserInputError


def test_next_and_dump_across_lines():
    sc = Scanner.from_string("3\n10 20\n30\n2\nhello world\n")
    n = sc.next()
    assert sc.dump(n) == [10, 20, 30]
    m = sc.next()
    assert sc.dump(m, str) == ["hello", "world"]


def test_mixed_types():
    sc = Scanner.from_string("Alice 25 3.5\n")
    assert sc.next(str) == "Alice"
    assert sc.next() == 25
    assert sc.next(float) == 3.5


def test_test_case_pattern():
    sc = Scanner.from_string("3\n5\n1 2 3 4 5\n3\n10 20 30\n4\n100 200 300 400")
    sums = []
    for _ in range(sc.next()):
        size = sc.next()
        sums.append(sum(sc.dump(size)))
    assert sums == [15, 60, 1000]


def test_end_of_input():
    sc = Scanner.from_string("1\n")
    assert sc.next() == 1
    with pytest.raises(InputExhaustedError, match="Unexpected end of input"):
        sc.next()


def test_dump_insufficient_input_names_entry():
    sc = Scanner.from_string("5\n1 2 3")
    n = sc.next()
    with pytest.raises(InputExhaustedError, match="entry 4 of 5"):
        sc.dump(n)


@pytest.mark.parametrize("text", ["3\n1 abc 3", "3\n3.14 2.718 1.414"])
def test_dump_bad_token_names_token_and_type(text):
    sc = Scanner.from_string(text)
    n = sc.next()
    with pytest.raises(InvalidInputError) as exc:
        sc.dump(n)
    assert "as int" in str(exc.value)
    assert "of 3" in str(exc.value)


def test_errors_are_user_errors():
    with pytest.raises(UserInputError):
        Scanner.from_string("").next()
    with pytest.raises(EOFError):
        Scanner.from_string("   \n\n").next()
    with pytest.raises(ValueError):
        Scanner.from_string("x").next()


def test_negative_dump_count():
    with pytest.raises(InvalidInputError):
        Scanner.from_string("1 2").dump(-1)


def test_has_next_does_not_consume():
    sc = Scanner.from_string("7 8\n")
    assert sc.has_next()
    assert sc.next() == 7
    assert sc.has_next()
    assert sc.next() == 8
    assert not sc.has_next()


def test_reads_lazily_from_stream():
    stream = io.StringIO("1 2\n3\n")
    sc = Scanner(stream)
    assert sc.next() == 1
    # only the first line has been consumed from the stream
    assert stream.readline() == "3\n"
    assert sc.next() == 2
