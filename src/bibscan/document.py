"""Document-level driver: split a bibliography into entry spans and parse them."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from .charsets import COMMENT_CHAR, ESCAPE_CHAR
from .config import ParserConfig
from .exceptions import FatalParseError
from .model import Entry
from .parser import parse_entry_at
from .result import Cursor, Failure
from .scanner import label, skip_space
from .types import Span

logger = logging.getLogger(__name__)


def _opens_entry(text: str, pos: int) -> bool:
    """Return ``True`` if the ``@`` at ``pos`` is followed by a type label and ``{``."""
    scanned = label(Cursor(text, pos + 1))
    if isinstance(scanned, Failure):
        return False
    return skip_space(scanned.cursor).peek() == "{"


def find_entry_spans(text: str) -> list[Span]:
    """Locate top-level ``@``-prefixed spans in ``text``.

    Brace depth and quoted strings are tracked, escapes are skipped and ``#``
    comments are jumped over, so an ``@`` inside a field value never starts a
    span. An ``@`` outside an entry only starts a span when a type label and
    ``{`` follow it; any other ``@`` is treated as stray text. Each span
    runs from its ``@`` to the start of the next span or the end of the text.

    Args:
        text: Full bibliography source

    Returns:
        List of ``(start, end)`` offsets in source order
    """
    starts: list[int] = []
    depth = 0
    in_quote = False
    pos = 0
    end = len(text)

    while pos < end:
        char = text[pos]
        if char == ESCAPE_CHAR:
            pos += 2
            continue
        if char == COMMENT_CHAR:
            newline = text.find("\n", pos)
            if newline == -1:
                break
            pos = newline + 1
            continue

        if in_quote:
            if char == '"':
                in_quote = False
        elif char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        elif char == '"' and depth > 0:
            in_quote = True
        elif char == "@" and depth == 0 and _opens_entry(text, pos):
            starts.append(pos)
        pos += 1

    if starts and text[: starts[0]].strip():
        logger.debug(f"Ignoring {starts[0]} characters before the first entry")

    spans = [(start, stop) for start, stop in zip(starts, starts[1:] + [end])]
    logger.debug(f"Found {len(spans)} entry spans")
    return spans


def _parse_span(text: str, span: Span, config: ParserConfig) -> Entry:
    start, stop = span
    cursor, parsed = parse_entry_at(Cursor(text, start), config)

    trailing = text[cursor.offset : stop]
    if trailing.strip():
        if config.strict_trailing:
            raise FatalParseError(cursor.offset, "`@` or end of input after entry", text)
        logger.warning(
            f"Ignoring {len(trailing.strip())} characters after entry {parsed.citation_key!r}"
        )
    return parsed


def parse_document(text: str, config: ParserConfig | None = None) -> list[Entry]:
    """Parse every entry in a bibliography.

    Spans are parsed independently against the full buffer, so error offsets
    are absolute. With ``config.max_workers > 1`` spans are parsed on a thread
    pool; results keep source order either way.

    Args:
        text: Full bibliography source
        config: Parser options (default: :class:`ParserConfig` defaults)

    Returns:
        Parsed entries in source order

    Raises:
        FatalParseError: For the first malformed entry in source order
    """
    config = config or ParserConfig()
    spans = find_entry_spans(text)

    if config.max_workers > 1 and len(spans) > 1:
        logger.info(f"Parsing {len(spans)} entries with {config.max_workers} workers")
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            entries = list(executor.map(lambda span: _parse_span(text, span, config), spans))
    else:
        logger.info(f"Parsing {len(spans)} entries")
        entries = [_parse_span(text, span, config) for span in spans]

    return entries
