"""Parse positions and tagged parser results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable position inside a source buffer."""

    text: str
    offset: int = 0

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    @property
    def rest(self) -> str:
        """Unconsumed suffix of the buffer."""
        return self.text[self.offset :]

    def peek(self) -> str:
        """Return the next character, or ``""`` at end of input."""
        return self.text[self.offset : self.offset + 1]

    def advance(self, count: int = 1) -> Cursor:
        return Cursor(self.text, min(self.offset + count, len(self.text)))

    def moved_to(self, offset: int) -> Cursor:
        return Cursor(self.text, offset)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful parse: the cursor after the consumed prefix and the value."""

    cursor: Cursor
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed parse.

    ``fatal`` failures were raised after a delimiter or separator was matched
    and must not be backtracked past.
    """

    offset: int
    expected: str
    fatal: bool = False

    def commit(self) -> Failure:
        """Return this failure promoted to a fatal one."""
        if self.fatal:
            return self
        return Failure(self.offset, self.expected, fatal=True)


Result = Union[Ok[T], Failure]


def fail(cursor: Cursor, expected: str, *, fatal: bool = False) -> Failure:
    return Failure(cursor.offset, expected, fatal)
