"""Tests for the CSV tokenizer."""

import pytest

from ledgerkit.utils.csv_parser import parse_csv


def test_parse_simple_rows():
    """Test splitting plain comma-separated rows."""
    rows = parse_csv("code,name\n1000,Cash\n")

    assert rows == [("code", "name"), ("1000", "Cash")]


def test_parse_trims_fields():
    """Test that fields are trimmed."""
    rows = parse_csv("  code , name  \n")

    assert rows == [("code", "name")]


def test_parse_strips_bom():
    """Test that a leading byte-order marker is removed."""
    rows = parse_csv("\ufeffcode,name\n1000,Cash")

    assert rows[0] == ("code", "name")


def test_parse_quoted_comma():
    """Test that commas inside quotes do not split fields."""
    rows = parse_csv('1000,"Cash, Petty",Asset')

    assert rows == [("1000", "Cash, Petty", "Asset")]


def test_parse_escaped_quotes():
    """Test that doubled quotes inside quotes become one literal quote."""
    rows = parse_csv('1000,"The ""Main"" Account"')

    assert rows == [("1000", 'The "Main" Account')]


def test_parse_skips_blank_lines():
    """Test that blank and whitespace-only lines are dropped."""
    rows = parse_csv("code,name\n\n   \n1000,Cash\n\n")

    assert len(rows) == 2


def test_parse_windows_line_endings():
    """Test CRLF line endings."""
    rows = parse_csv("code,name\r\n1000,Cash\r\n")

    assert rows == [("code", "name"), ("1000", "Cash")]


def test_parse_empty_fields():
    """Test that empty fields are kept as empty strings."""
    rows = parse_csv("1000,,Asset,")

    assert rows == [("1000", "", "Asset", "")]


def test_parse_unterminated_quote_does_not_raise():
    """Test that an unterminated quote swallows the rest of the line."""
    rows = parse_csv('1000,"Cash, Petty,Asset')

    assert rows == [("1000", "Cash, Petty,Asset")]


def test_parse_multiline_quoted_field_is_split():
    """Test that quoted newlines are not supported: lines split first."""
    rows = parse_csv('1000,"Line one\nLine two",Asset')

    assert len(rows) == 2
    assert rows[0] == ("1000", "Line one")


def test_parse_empty_content():
    """Test that empty content yields no rows."""
    assert parse_csv("") == []
    assert parse_csv("\ufeff\n\n") == []


@pytest.mark.parametrize("separator", ["\x85", "\u2028", "\u2029", "\x0b", "\x0c", "\x1e"])
def test_parse_only_newline_ends_a_row(separator):
    """Test that other line-break characters stay inside their field."""
    rows = parse_csv(f'1000,"Petty{separator}cash",Asset')

    assert rows == [("1000", f"Petty{separator}cash", "Asset")]
