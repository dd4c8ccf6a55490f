"""Type definitions for bibscan data structures."""

from __future__ import annotations

from enum import Enum


class BibType(Enum):
    """Common BibTeX entry types."""

    ARTICLE = "article"
    BOOK = "book"
    INCOLLECTION = "incollection"
    INPROCEEDINGS = "inproceedings"
    MISC = "misc"
    REPORT = "report"
    THESIS = "thesis"
    PHDTHESIS = "phdthesis"
    MASTERSTHESIS = "mastersthesis"

    @classmethod
    def from_label(cls, label: str) -> BibType | None:
        """Resolve an entry type label case-insensitively.

        Returns ``None`` for labels outside the enumeration.
        """
        try:
            return cls(label.lower())
        except ValueError:
            return None


# Type aliases for common data structures
FieldMap = dict[str, str]
Span = tuple[int, int]
