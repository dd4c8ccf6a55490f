"""Scanner primitives and delimited string parsers.

Every parser takes a :class:`~bibscan.result.Cursor` and returns either
``Ok(cursor, value)`` with the cursor moved past the consumed prefix, or a
:class:`~bibscan.result.Failure`. Recoverable failures never consume input.
"""

from __future__ import annotations

from .charsets import (
    COMMENT_CHAR,
    ESCAPE_CHAR,
    is_escapable,
    is_label_char,
    is_space,
    is_value_char,
)
from .result import Cursor, Failure, Ok, Result, fail


def skip_space(cursor: Cursor) -> Cursor:
    """Consume zero or more whitespace characters."""
    text, pos = cursor.text, cursor.offset
    end = len(text)
    while pos < end and is_space(text[pos]):
        pos += 1
    return cursor.moved_to(pos)


def comment(cursor: Cursor) -> Result[None]:
    """Consume a ``#`` comment up to and including its terminating newline.

    A comment that reaches end of input without a newline is a fatal failure.
    """
    if cursor.peek() != COMMENT_CHAR:
        return fail(cursor, "comment")
    newline = cursor.text.find("\n", cursor.offset)
    if newline == -1:
        return Failure(len(cursor.text), "newline ending comment", fatal=True)
    return Ok(cursor.moved_to(newline + 1), None)


def skip_space_and_comments(cursor: Cursor) -> Result[None]:
    """Consume any mix of whitespace and full-line comments."""
    while True:
        cursor = skip_space(cursor)
        result = comment(cursor)
        if isinstance(result, Failure):
            if result.fatal:
                return result
            return Ok(cursor, None)
        cursor = result.cursor


def label(cursor: Cursor) -> Result[str]:
    """Scan a label, optionally followed by one full-line comment.

    The empty label is a successful match; callers decide whether to accept it.
    """
    text, pos = cursor.text, cursor.offset
    end = len(text)
    while pos < end and is_label_char(text[pos]):
        pos += 1
    value = text[cursor.offset : pos]
    cursor = cursor.moved_to(pos)

    trailing = comment(cursor)
    if isinstance(trailing, Failure):
        if trailing.fatal:
            return trailing
        return Ok(cursor, value)
    return Ok(trailing.cursor, value)


def value_run(cursor: Cursor) -> Ok[str]:
    """Scan a maximal run of value characters and escape sequences.

    Escapes are kept in their escaped form. A backslash that does not start a
    recognized escape ends the run.
    """
    text, pos = cursor.text, cursor.offset
    end = len(text)
    while pos < end:
        char = text[pos]
        if char == ESCAPE_CHAR:
            if pos + 1 < end and is_escapable(text[pos + 1]):
                pos += 2
                continue
            break
        if not is_value_char(char):
            break
        pos += 1
    return Ok(cursor.moved_to(pos), text[cursor.offset : pos])


def string_body(cursor: Cursor) -> Result[str]:
    """Assemble value runs separated by full-line comments into one value.

    Comment text and its newline are dropped and the adjoining runs are joined
    directly.
    """
    first = value_run(cursor)
    pieces = [first.value]
    cursor = first.cursor
    while True:
        eaten = comment(cursor)
        if isinstance(eaten, Failure):
            if eaten.fatal:
                return eaten
            break
        run = value_run(eaten.cursor)
        pieces.append(run.value)
        cursor = run.cursor
    return Ok(cursor, "".join(pieces))


def _delimited(cursor: Cursor, opening: str, closing: str) -> Result[str]:
    if cursor.peek() != opening:
        return fail(cursor, f"opening `{opening}`")
    body = string_body(cursor.advance())
    if isinstance(body, Failure):
        return body.commit()
    if body.cursor.peek() != closing:
        return fail(body.cursor, f"closing `{closing}`", fatal=True)
    return Ok(body.cursor.advance(), body.value)


def quoted_string(cursor: Cursor) -> Result[str]:
    """Parse a ``"..."`` string; fatal once the opening quote is matched."""
    return _delimited(cursor, '"', '"')


def braced_string(cursor: Cursor) -> Result[str]:
    """Parse a ``{...}`` string; fatal once the opening brace is matched."""
    return _delimited(cursor, "{", "}")
