"""Label text for tree nodes and the text form of element values."""

from typing import Any

from dcmview.config import ELLIPSIS, SEQUENCE_VR, VALUE_DISPLAY_LIMIT
from dcmview.models.record import Element


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, Element):
        return f"{value.tag}={value_text(value)}"
    if isinstance(value, (list, tuple)):
        parts = [_text(v) for v in value]
        if value and all(isinstance(v, (list, tuple)) for v in value):
            # Sequence items: one bracketed group per item.
            return "".join(f"[{p}]" for p in parts)
        if any(isinstance(v, Element) for v in value):
            return ", ".join(parts)
        return "\\".join(parts)
    return str(value)


def value_text(element: Element) -> str:
    """Full text form of a value, used to compare values across files.

    Multi-valued elements are joined with a backslash, the DICOM value separator.
    """
    return _text(element.value)


def display_value(element: Element, *, limit: int = VALUE_DISPLAY_LIMIT) -> str:
    """Value text as shown in a label: sequences blank, long values cut."""
    if element.vr == SEQUENCE_VR:
        return ""
    text = value_text(element).replace("\n", " ")
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def group_label(group: int) -> str:
    return f"{group:04x}"


def tag_label(element: Element) -> str:
    return " ".join(part for part in (f"{element.tag.element:04x}", element.name) if part)


def element_label(element: Element, *, limit: int = VALUE_DISPLAY_LIMIT) -> str:
    """Label of an element leaf: element id, name, VR, length and value."""
    label = f"{tag_label(element)} ({element.vr}, {element.length})"
    value = display_value(element, limit=limit)
    if value:
        label += f": {value}"
    return label


def occurrence_label(filename: str, element: Element, *, limit: int = VALUE_DISPLAY_LIMIT) -> str:
    """Label of one file's occurrence of a tag in the by-tag views."""
    value = display_value(element, limit=limit)
    return f"{filename}: {value}" if value else filename
