"""Convert pydicom datasets into dataset entries."""

from pathlib import Path
from typing import Any

import pydicom
from pydicom.dataelem import DataElement
from pydicom.dataset import Dataset
from pydicom.errors import InvalidDicomError
from pydicom.multival import MultiValue

from dcmview.config import SEQUENCE_VR
from dcmview.core.importer.json_reader import value_length
from dcmview.errors import RecordFormatError
from dcmview.models.record import DatasetEntry, Element, TagKey
from dcmview.protocols import TagDictionary


def _convert_value(value: Any) -> Any:
    if value is None or isinstance(value, (bytes, int, float, str)):
        return value
    if isinstance(value, (list, tuple, MultiValue)):
        return tuple(_convert_value(v) for v in value)
    return str(value)


def _convert_element(elem: DataElement, dictionary: TagDictionary) -> Element:
    tag = TagKey(group=elem.tag.group, element=elem.tag.element)
    if elem.VR == SEQUENCE_VR:
        value: Any = tuple(_convert_dataset(item, dictionary) for item in elem.value)
    else:
        value = _convert_value(elem.value)
    return Element(
        tag=tag,
        name=dictionary.lookup(tag) or "",
        vr=str(elem.VR),
        length=value_length(value),
        value=value,
    )


def _convert_dataset(ds: Dataset, dictionary: TagDictionary) -> tuple[Element, ...]:
    return tuple(_convert_element(elem, dictionary) for elem in ds)


def dataset_to_entry(ds: Dataset, *, filename: str, dictionary: TagDictionary) -> DatasetEntry:
    """Convert a pydicom dataset, file meta information first."""
    elements: list[Element] = []
    file_meta = getattr(ds, "file_meta", None)
    if file_meta is not None:
        elements.extend(_convert_dataset(file_meta, dictionary))
    elements.extend(_convert_dataset(ds, dictionary))
    return DatasetEntry(filename=filename, elements=tuple(elements))


def read_dicom_file(path: Path, *, dictionary: TagDictionary) -> DatasetEntry:
    """Read a binary DICOM file with pydicom.

    pydicom decodes elements lazily, so a damaged file may only fail while its
    dataset is being converted; both steps report a ``RecordFormatError``.
    """
    try:
        ds = pydicom.dcmread(path)
        return dataset_to_entry(ds, filename=path.name, dictionary=dictionary)
    except (InvalidDicomError, OSError, ValueError, EOFError) as e:
        msg = f"Cannot read DICOM file {path}: {e}"
        raise RecordFormatError(msg) from e
