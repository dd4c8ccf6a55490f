"""Tests for the entry record and its JSON codec."""

import json

import pytest

from bibscan.exceptions import InvalidDataError
from bibscan.model import Entry, decode_entries, encode_entries
from bibscan.types import BibType


def test_entry_defaults_and_lookup():
    entry = Entry(type_label="PhDThesis", citation_key="doe-thesis")

    assert entry.fields == {}
    assert entry.get("title") is None
    assert entry.get("title", "untitled") == "untitled"
    assert entry.bib_type is BibType.PHDTHESIS


def test_entry_is_frozen():
    entry = Entry(type_label="book", citation_key="k", fields={"a": "b"})

    with pytest.raises(AttributeError):
        entry.citation_key = "other"  # type: ignore[misc]

    with pytest.raises(TypeError):
        hash(entry)


def test_encode_entries_layout():
    """Entries encode to a JSON array of objects."""
    entries = [Entry(type_label="book", citation_key="Cox-CFT", fields={"year": "2013"})]

    data = json.loads(encode_entries(entries))

    assert data == [{"type_label": "book", "citation_key": "Cox-CFT", "fields": {"year": "2013"}}]


def test_decode_entries():
    payload = '[{"type_label": "misc", "citation_key": "a-b", "fields": {"note": "Sömé"}}]'

    entries = decode_entries(payload)

    assert entries == [Entry(type_label="misc", citation_key="a-b", fields={"note": "Sömé"})]


def test_decode_entries_rejects_wrong_shape():
    with pytest.raises(InvalidDataError, match="Invalid entry data"):
        decode_entries('{"type_label": "misc"}')

    with pytest.raises(InvalidDataError, match="Invalid entry data"):
        decode_entries('[{"type_label": "misc", "citation_key": 3}]')

    with pytest.raises(InvalidDataError, match="Invalid entry data"):
        decode_entries("not json")


def test_decode_entries_rejects_invalid_labels():
    payload = '[{"type_label": "misc", "citation_key": "key 1"}]'

    with pytest.raises(InvalidDataError, match="Invalid citation_key 'key 1' at index 0"):
        decode_entries(payload)
