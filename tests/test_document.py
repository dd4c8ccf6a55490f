"""Tests for the document-level driver."""

import logging

import pytest

from bibscan.config import ParserConfig
from bibscan.document import find_entry_spans, parse_document
from bibscan.exceptions import FatalParseError

LIBRARY = """% leading text is ignored
@book{zebra,
  author = {Zebra, Alice},
  title = {Zebras and Their Stripes},
  year = {2020}
}

@article{alpha,
  author = "Alpha, Bob",
  note = {mail me # bob@example.org
  later}
}

@misc{beta,
  # commented out: @misc{ghost}
  title = {Beta Testing}
}
"""


def test_find_entry_spans_skips_at_signs_in_values_and_comments():
    """An ``@`` inside a value or comment does not start a new span."""
    spans = find_entry_spans(LIBRARY)

    assert len(spans) == 3
    starts = [LIBRARY[start : start + 6] for start, _ in spans]
    assert starts == ["@book{", "@artic", "@misc{"]
    assert spans[-1][1] == len(LIBRARY)
    assert spans[0][1] == spans[1][0]


def test_find_entry_spans_respects_quoted_braces():
    text = '@misc{a, t = "x \\" }"}\n@misc{b,}'
    spans = find_entry_spans(text)

    assert [text[start:stop].strip() for start, stop in spans] == [
        '@misc{a, t = "x \\" }"}',
        "@misc{b,}",
    ]


def test_find_entry_spans_empty():
    assert find_entry_spans("") == []
    assert find_entry_spans("no entries here") == []


def test_parse_document_in_order():
    entries = parse_document(LIBRARY)

    assert [entry.citation_key for entry in entries] == ["zebra", "alpha", "beta"]
    assert entries[1].fields["note"] == "mail me   later"
    assert entries[2].fields == {"title": "Beta Testing"}


def test_parse_document_with_thread_pool():
    """Parallel parsing returns the same entries in source order."""
    sequential = parse_document(LIBRARY)
    parallel = parse_document(LIBRARY, ParserConfig(max_workers=4))

    assert parallel == sequential


def test_parse_document_reports_absolute_offsets():
    text = "@misc{ok, a = {b}}\n@misc{bad, a = {b}"

    with pytest.raises(FatalParseError) as excinfo:
        parse_document(text)

    assert excinfo.value.line == 2
    assert excinfo.value.offset == len(text)


def test_parse_document_first_error_in_source_order():
    text = "@misc{one, a = {b (c)}}\n@misc{two, x {y}}\n"

    with pytest.raises(FatalParseError, match="closing `}`"):
        parse_document(text, ParserConfig(max_workers=2))


def test_parse_document_trailing_text_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    text = "@misc{k, a = {b}} stray words\n"

    with caplog.at_level(logging.WARNING, logger="bibscan.document"):
        entries = parse_document(text)

    assert [entry.citation_key for entry in entries] == ["k"]
    assert "Ignoring 11 characters after entry 'k'" in caplog.text


def test_parse_document_strict_trailing():
    text = "@misc{k, a = {b}} stray words\n"

    with pytest.raises(FatalParseError, match="after entry"):
        parse_document(text, ParserConfig(strict_trailing=True))


def test_stray_at_signs_outside_entries_are_ignored(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """An ``@`` in leading prose or between entries does not start an entry."""
    text = (
        "% contact me @ example\n"
        "@misc{k, a = {b}}\n"
        "written by someone@example.org\n"
        "@book{other, year = {2001}}\n"
    )

    assert [text[start : start + 6] for start, _ in find_entry_spans(text)] == [
        "@misc{",
        "@book{",
    ]

    with caplog.at_level(logging.WARNING, logger="bibscan.document"):
        entries = parse_document(text)

    assert [entry.citation_key for entry in entries] == ["k", "other"]
    assert "after entry 'k'" in caplog.text
