"""Record model: tags, elements and the datasets they come from."""

from dataclasses import dataclass
from typing import Any

_MAX_TAG_PART = 0xFFFF


@dataclass(frozen=True, order=True)
class TagKey:
    """Identity of a tag, independent of the file it was read from."""

    group: int
    element: int

    def __post_init__(self) -> None:
        for part in (self.group, self.element):
            if not 0 <= part <= _MAX_TAG_PART:
                msg = f"Tag part out of range: {part!r}"
                raise ValueError(msg)

    @classmethod
    def from_hex(cls, text: str) -> "TagKey":
        """Parse the eight hex digits used as keys by the DICOM JSON model."""
        cleaned = text.strip().replace(",", "").strip("()")
        if len(cleaned) != 8:
            msg = f"Expected 8 hex digits for a tag, got {text!r}"
            raise ValueError(msg)
        return cls(group=int(cleaned[:4], 16), element=int(cleaned[4:], 16))

    def __str__(self) -> str:
        return f"({self.group:04x},{self.element:04x})"


@dataclass
class Element:
    """One tag occurrence in a dataset.

    Only ``value`` is ever replaced after parsing (value editing); the tag is
    the element's identity.
    """

    tag: TagKey
    name: str
    vr: str
    length: int
    value: Any


@dataclass(frozen=True)
class DatasetEntry:
    """The elements of one source file, in file order."""

    filename: str
    elements: tuple[Element, ...] = ()
