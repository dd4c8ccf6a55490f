"""Tests for the grammar character classes."""

import pytest

from bibscan.charsets import is_escapable, is_label_char, is_space, is_value_char


def test_is_space():
    """Only space, tab, carriage return and newline count as whitespace."""
    for char in " \t\r\n":
        assert is_space(char)

    assert not is_space("a")
    assert not is_space("\v")
    assert not is_space("#")


@pytest.mark.parametrize("char", ["a", "Z", "é", "Ж", "-", "_"])
def test_is_label_char_accepts(char: str) -> None:
    assert is_label_char(char)


@pytest.mark.parametrize("char", ["1", " ", "{", "=", ",", "#", "."])
def test_is_label_char_rejects(char: str) -> None:
    assert not is_label_char(char)


def test_is_value_char_accepts_unicode_alphanumerics():
    """Letters and digits from any script are value characters."""
    for char in "aZ09öÀü漢٣":
        assert is_value_char(char), char


def test_is_value_char_punctuation_set():
    """The fixed punctuation set, including space and newline, is accepted."""
    for char in "-_.,;:/ ^$+*\n":
        assert is_value_char(char), repr(char)

    for char in '#{}"\\=@()\t\r':
        assert not is_value_char(char), repr(char)


def test_is_escapable():
    """Only quote, ``n`` and backslash may follow a backslash."""
    assert is_escapable('"')
    assert is_escapable("n")
    assert is_escapable("\\")
    assert not is_escapable("t")
    assert not is_escapable("{")
