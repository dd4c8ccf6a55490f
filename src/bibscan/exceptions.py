"""Custom exception types for bibscan operations."""


class BibscanError(Exception):
    """Base exception for all bibscan operations."""


class ConfigurationError(BibscanError):
    """Raised when parser configuration values are invalid."""


class InvalidDataError(BibscanError):
    """Raised when serialized entry data fails validation."""


class ParseError(BibscanError):
    """Raised when BibTeX text cannot be parsed.

    Args:
        offset: Absolute offset of the failure in ``text``
        expected: Tag naming the construct that was expected at ``offset``
        text: Source buffer the offset refers to
    """

    def __init__(self, offset: int, expected: str, text: str = "") -> None:
        self.offset = offset
        self.expected = expected
        self.text = text
        super().__init__(f"expected {expected} at line {self.line}, column {self.column}")

    @property
    def line(self) -> int:
        """1-based line number of the failure."""
        return self.text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        """1-based column number of the failure."""
        return self.offset - (self.text.rfind("\n", 0, self.offset) + 1) + 1

    def render(self) -> str:
        """Render the failing source line with a caret under the failure."""
        start = self.text.rfind("\n", 0, self.offset) + 1
        end = self.text.find("\n", self.offset)
        if end == -1:
            end = len(self.text)
        source_line = self.text[start:end]
        caret = " " * (self.column - 1) + "^"
        return f"{self.line}:{self.column}: expected {self.expected}\n{source_line}\n{caret}"


class RecoverableParseError(ParseError):
    """Raised when parsing fails before any delimiter was committed to."""


class FatalParseError(ParseError):
    """Raised when parsing fails after a delimiter or separator was matched."""
