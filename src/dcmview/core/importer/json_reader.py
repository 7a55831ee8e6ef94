"""Parse DICOM JSON model objects into dataset entries."""

import base64
import binascii
from typing import Any

from dcmview.config import SEQUENCE_VR
from dcmview.errors import RecordFormatError
from dcmview.models.record import DatasetEntry, Element, TagKey
from dcmview.protocols import TagDictionary


def value_length(value: Any) -> int:
    """Length of a value: bytes for binary data, items for sequences, characters otherwise."""
    if value is None:
        return 0
    if isinstance(value, (bytes, bytearray)):
        return len(value)
    if isinstance(value, tuple):
        if value and all(isinstance(v, tuple) for v in value):
            return len(value)
        return len("\\".join(str(v) for v in value))
    return len(str(value))


def _person_name(raw: Any) -> str:
    if isinstance(raw, dict):
        return str(raw.get("Alphabetic", ""))
    return "" if raw is None else str(raw)


def _element_value(
    vr: str, attr: dict[str, Any], dictionary: TagDictionary | None
) -> Any:
    if "InlineBinary" in attr:
        try:
            return base64.b64decode(attr["InlineBinary"], validate=True)
        except binascii.Error as e:
            msg = f"Invalid InlineBinary data: {e}"
            raise RecordFormatError(msg) from e
    if "BulkDataURI" in attr:
        return f"<bulk data: {attr['BulkDataURI']}>"

    raw_values = attr.get("Value")
    if not raw_values:
        return None
    if vr == SEQUENCE_VR:
        return tuple(parse_elements(item, dictionary=dictionary) for item in raw_values)
    if vr == "PN":
        values = [_person_name(v) for v in raw_values]
    else:
        values = list(raw_values)
    return values[0] if len(values) == 1 else tuple(values)


def parse_elements(
    data: dict[str, Any], *, dictionary: TagDictionary | None = None
) -> tuple[Element, ...]:
    """Parse one DICOM JSON object (a dataset or a sequence item) into elements.

    Elements are returned in ascending tag order.
    """
    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise RecordFormatError(msg)

    elements: list[Element] = []
    for key, attr in data.items():
        try:
            tag = TagKey.from_hex(key)
        except ValueError as e:
            msg = f"Invalid tag key {key!r}: {e}"
            raise RecordFormatError(msg) from e
        if not isinstance(attr, dict) or "vr" not in attr:
            msg = f"Attribute {key} has no value representation"
            raise RecordFormatError(msg)

        vr = str(attr["vr"])
        value = _element_value(vr, attr, dictionary)
        name = attr.get("keyword") or attr.get("name")
        if not name and dictionary is not None:
            name = dictionary.lookup(tag)
        elements.append(
            Element(tag=tag, name=name or "", vr=vr, length=value_length(value), value=value)
        )

    elements.sort(key=lambda e: e.tag)
    return tuple(elements)


def parse_dataset_json(
    data: Any, *, filename: str, dictionary: TagDictionary | None = None
) -> DatasetEntry:
    """Parse a DICOM JSON dataset into a DatasetEntry.

    A single-element list (as returned by QIDO/WADO metadata endpoints) is
    accepted as well.
    """
    if isinstance(data, list) and len(data) == 1:
        data = data[0]
    return DatasetEntry(filename=filename, elements=parse_elements(data, dictionary=dictionary))
