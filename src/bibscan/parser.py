"""Recursive-descent parser for single BibTeX entries.

The grammar recognized here is::

    entry      = space '@' label space '{' space label ',' field_list '}'
    field_list = gap [pair (gap ',' gap pair)*] [gap ','] gap
    pair       = space label space '=' space (quoted | braced)
    gap        = (space | comment)*

Parsers return tagged results internally; :func:`parse_entry` converts a
failure into :class:`~bibscan.exceptions.RecoverableParseError` or
:class:`~bibscan.exceptions.FatalParseError`.
"""

from __future__ import annotations

import logging

from .config import ParserConfig
from .exceptions import FatalParseError, ParseError, RecoverableParseError
from .model import Entry
from .result import Cursor, Failure, Ok, Result, fail
from .scanner import braced_string, label, quoted_string, skip_space, skip_space_and_comments
from .types import FieldMap

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ParserConfig()


def key_value(cursor: Cursor) -> Result[tuple[str, str]]:
    """Parse ``name = "value"`` or ``name = {value}``.

    An empty field name is a recoverable failure so that a field list can end
    there. Once a name has been scanned, a missing ``=`` or value is fatal.
    """
    start = skip_space(cursor)
    scanned = label(start)
    if isinstance(scanned, Failure):
        return scanned
    name = scanned.value
    if not name:
        return fail(start, "field name")

    cursor = skip_space(scanned.cursor)
    if cursor.peek() != "=":
        return fail(cursor, f"`=` after field name {name!r}", fatal=True)
    cursor = skip_space(cursor.advance())

    value = quoted_string(cursor)
    if isinstance(value, Failure) and not value.fatal:
        value = braced_string(cursor)
    if isinstance(value, Failure):
        if not value.fatal:
            return fail(cursor, f"quoted or braced value for field {name!r}", fatal=True)
        return value
    return Ok(value.cursor, (name, value.value))


def _separator(cursor: Cursor) -> Result[None]:
    gap = skip_space_and_comments(cursor)
    if isinstance(gap, Failure):
        return gap
    if gap.cursor.peek() != ",":
        return fail(cursor, "`,` between fields")
    return skip_space_and_comments(gap.cursor.advance())


def field_list(cursor: Cursor) -> Result[FieldMap]:
    """Parse comma-separated key-value pairs into a mapping.

    A trailing comma is accepted. Later duplicates overwrite earlier values.
    """
    fields: FieldMap = {}

    gap = skip_space_and_comments(cursor)
    if isinstance(gap, Failure):
        return gap
    cursor = gap.cursor

    pair = key_value(cursor)
    while isinstance(pair, Ok):
        name, value = pair.value
        if name in fields:
            logger.debug(f"Duplicate field {name!r} overrides earlier value")
        fields[name] = value
        cursor = pair.cursor

        sep = _separator(cursor)
        if isinstance(sep, Failure):
            if sep.fatal:
                return sep
            break
        cursor = sep.cursor
        pair = key_value(cursor)

    if isinstance(pair, Failure) and pair.fatal:
        return pair

    gap = skip_space_and_comments(cursor)
    if isinstance(gap, Failure):
        return gap
    return Ok(gap.cursor, fields)


def entry(cursor: Cursor, config: ParserConfig = _DEFAULT_CONFIG) -> Result[Entry]:
    """Parse one ``@type{key, field = value, ...}`` entry.

    Only a missing ``@`` is recoverable; every later failure is fatal.
    """
    cursor = skip_space(cursor)
    if cursor.peek() != "@":
        return fail(cursor, "`@` starting an entry")
    cursor = cursor.advance()

    type_label = label(cursor)
    if isinstance(type_label, Failure):
        return type_label
    if not type_label.value and not config.allow_empty_labels:
        return fail(cursor, "entry type", fatal=True)

    cursor = skip_space(type_label.cursor)
    if cursor.peek() != "{":
        return fail(cursor, "`{` after entry type", fatal=True)
    cursor = skip_space(cursor.advance())

    key = label(cursor)
    if isinstance(key, Failure):
        return key
    if not key.value and not config.allow_empty_labels:
        return fail(cursor, "citation key", fatal=True)

    cursor = key.cursor
    if cursor.peek() != ",":
        return fail(cursor, "`,` after citation key", fatal=True)

    fields = field_list(cursor.advance())
    if isinstance(fields, Failure):
        return fields.commit()

    cursor = fields.cursor
    if cursor.peek() != "}":
        return fail(cursor, "closing `}` of entry", fatal=True)

    parsed = Entry(type_label=type_label.value, citation_key=key.value, fields=fields.value)
    return Ok(cursor.advance(), parsed)


def parse_entry_at(cursor: Cursor, config: ParserConfig | None = None) -> tuple[Cursor, Entry]:
    """Parse one entry at ``cursor`` and return the cursor after it.

    Raises:
        RecoverableParseError: If the input does not start an entry
        FatalParseError: If the entry is malformed after its ``@``
    """
    result = entry(cursor, config or _DEFAULT_CONFIG)
    if isinstance(result, Failure):
        error_type: type[ParseError] = FatalParseError if result.fatal else RecoverableParseError
        error = error_type(result.offset, result.expected, cursor.text)
        if result.fatal:
            logger.debug(f"Fatal parse failure: {error}")
        raise error

    logger.debug(
        f"Parsed @{result.value.type_label}{{{result.value.citation_key}}} "
        f"with {len(result.value.fields)} fields"
    )
    return result.cursor, result.value


def parse_entry(
    text: str, offset: int = 0, *, config: ParserConfig | None = None
) -> tuple[str, Entry]:
    """Parse exactly one entry starting at ``offset`` in ``text``.

    Leading whitespace is skipped and anything after the closing brace is
    left unconsumed.

    Args:
        text: BibTeX source text
        offset: Position to start parsing from
        config: Parser options (default: :class:`ParserConfig` defaults)

    Returns:
        A tuple ``(remainder, entry)``

    Raises:
        RecoverableParseError: If the input does not start an entry
        FatalParseError: If the entry is malformed after its ``@``
    """
    cursor, parsed = parse_entry_at(Cursor(text, offset), config)
    return cursor.rest, parsed
