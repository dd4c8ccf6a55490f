"""Entry record and its JSON codec."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import msgspec

from .charsets import is_label_char
from .exceptions import InvalidDataError
from .types import BibType, FieldMap

logger = logging.getLogger(__name__)


class Entry(msgspec.Struct, frozen=True):
    """One parsed bibliographic record.

    Attributes cannot be reassigned, but entries are not hashable since
    ``fields`` is a dict.

    Attributes:
        type_label: Entry type as written after ``@`` (e.g. ``book``)
        citation_key: Key used to cite the entry
        fields: Mapping of field names to assembled field values
    """

    type_label: str
    citation_key: str
    fields: FieldMap = msgspec.field(default_factory=dict)

    @property
    def bib_type(self) -> BibType | None:
        """Known entry type for ``type_label``, or ``None`` if it is not one."""
        return BibType.from_label(self.type_label)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.fields.get(name, default)


_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder(type=list[Entry])


def encode_entries(entries: Iterable[Entry]) -> bytes:
    """Serialize entries to a JSON array."""
    return _encoder.encode(list(entries))


def decode_entries(data: bytes | str) -> list[Entry]:
    """Decode a JSON array produced by :func:`encode_entries`.

    Raises:
        InvalidDataError: If the payload is not a list of entries or a
            type label or citation key contains characters outside the label set
    """
    try:
        entries = _decoder.decode(data)
    except msgspec.DecodeError as exc:
        raise InvalidDataError(f"Invalid entry data: {exc}") from exc

    for index, entry in enumerate(entries):
        for name in ("type_label", "citation_key"):
            label = getattr(entry, name)
            if not all(is_label_char(c) for c in label):
                raise InvalidDataError(f"Invalid {name} {label!r} at index {index}")

    logger.debug(f"Decoded {len(entries)} entries")
    return entries
