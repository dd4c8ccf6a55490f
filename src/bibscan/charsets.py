"""Character classes recognized by the BibTeX grammar.

Each class is exposed as a predicate over a single character so the accepted
sets can be tested directly.
"""

SPACE_CHARS = " \t\r\n"
LABEL_SYMBOLS = "-_"
VALUE_SYMBOLS = "-_.,;:/ ^$+*\n"
ESCAPE_CHAR = "\\"
ESCAPABLE_CHARS = '"n\\'
COMMENT_CHAR = "#"


def is_space(char: str) -> bool:
    """Return ``True`` for space, tab, carriage return and newline."""
    return char in SPACE_CHARS


def is_label_char(char: str) -> bool:
    """Return ``True`` for characters allowed in entry types, keys and field names."""
    return char.isalpha() or char in LABEL_SYMBOLS


def is_value_char(char: str) -> bool:
    """Return ``True`` for characters allowed unescaped inside a field value.

    Letters and digits from any script are accepted, plus a fixed set of
    punctuation that includes the space and newline characters.
    """
    return char.isalnum() or char in VALUE_SYMBOLS


def is_escapable(char: str) -> bool:
    """Return ``True`` if ``char`` may follow a backslash inside a value."""
    return char in ESCAPABLE_CHARS
