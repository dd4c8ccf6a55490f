"""Serialization of parsed entries and conversion to bibtexparser models."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import bibtexparser
from bibtexparser.library import Library
from bibtexparser.model import Entry as BibtexEntry
from bibtexparser.model import Field

from .model import Entry

logger = logging.getLogger(__name__)

_CLOSING = {"{": "}", '"': '"'}


def format_entry(entry: Entry, delimiter: str = "{", indent: str = "    ") -> str:
    """Render an entry as BibTeX source.

    Field values are written verbatim between ``delimiter`` and its closing
    counterpart, so parsing the output yields the same entry.

    Args:
        entry: Entry to render
        delimiter: ``{`` for braced values or ``"`` for quoted values
        indent: Prefix written before each field line

    Returns:
        BibTeX text without a trailing newline

    Raises:
        ValueError: If ``delimiter`` is not ``{`` or ``"``
    """
    if delimiter not in _CLOSING:
        raise ValueError(f"Unsupported delimiter: {delimiter!r}")
    closing = _CLOSING[delimiter]

    lines = [f"@{entry.type_label}{{{entry.citation_key},"]
    field_lines = [
        f"{indent}{name} = {delimiter}{value}{closing}" for name, value in entry.fields.items()
    ]
    if field_lines:
        lines.append(",\n".join(field_lines))
    lines.append("}")
    return "\n".join(lines)


def to_library(entries: Iterable[Entry]) -> Library:
    """Convert parsed entries into a bibtexparser ``Library``."""
    blocks = [
        BibtexEntry(
            entry_type=entry.type_label,
            key=entry.citation_key,
            fields=[Field(name, value) for name, value in entry.fields.items()],
        )
        for entry in entries
    ]
    return Library(blocks)


def from_library(library: Library) -> list[Entry]:
    """Convert the entries of a bibtexparser ``Library`` into :class:`Entry` values.

    Non-entry blocks (comments, preambles, strings) are skipped.
    """
    if library.failed_blocks:
        logger.warning(f"Skipping {len(library.failed_blocks)} blocks that bibtexparser failed on")

    return [
        Entry(
            type_label=block.entry_type,
            citation_key=block.key,
            fields={field.key: str(field.value) for field in block.fields},
        )
        for block in library.entries
    ]


def dumps(entries: Iterable[Entry]) -> str:
    """Write entries with bibtexparser's writer."""
    return str(bibtexparser.write_string(to_library(entries)))
