"""Load record files from a path into dataset entries."""

import json
from pathlib import Path

from loguru import logger

from dcmview.core.dictionary import PydicomTagDictionary
from dcmview.core.importer.json_reader import parse_dataset_json
from dcmview.core.importer.pydicom_reader import read_dicom_file
from dcmview.errors import ConfigurationError, RecordFormatError
from dcmview.models.record import DatasetEntry
from dcmview.protocols import TagDictionary

JSON_SUFFIX = ".json"


def read_entry(path: Path, *, dictionary: TagDictionary) -> DatasetEntry:
    """Read one file: DICOM JSON for ``.json`` files, binary DICOM otherwise."""
    if path.suffix.lower() == JSON_SUFFIX:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            msg = f"Cannot read DICOM JSON file {path}: {e}"
            raise RecordFormatError(msg) from e
        return parse_dataset_json(data, filename=path.name, dictionary=dictionary)
    return read_dicom_file(path, dictionary=dictionary)


def load_entries(
    path: Path,
    *,
    dictionary: TagDictionary | None = None,
) -> tuple[str, list[DatasetEntry]]:
    """Load a single file or every regular file of a directory.

    Args:
        path: File or directory to load.
        dictionary: Tag name source (defaults to the pydicom dictionary).

    Returns:
        Tuple of (root label, entries). Directory entries are in file name order.
    """
    tags = dictionary or PydicomTagDictionary()
    if not path.exists():
        msg = f"Path not found: {path}"
        raise ConfigurationError(msg)

    if not path.is_dir():
        entry = read_entry(path, dictionary=tags)
        logger.debug("Loaded {} ({} elements)", path.name, len(entry.elements))
        return str(path), [entry]

    entries: list[DatasetEntry] = []
    skipped = 0
    for file_path in sorted(path.iterdir()):
        if not file_path.is_file():
            continue
        try:
            entry = read_entry(file_path, dictionary=tags)
        except RecordFormatError as e:
            logger.warning("Skipping {}: {}", file_path.name, e)
            skipped += 1
            continue
        entries.append(entry)
        logger.debug("Loaded {} ({} elements)", file_path.name, len(entry.elements))

    logger.debug("Loaded {} files from {}, skipped {}", len(entries), path, skipped)
    if not entries:
        msg = f"no records to display in {path}"
        raise ConfigurationError(msg)
    return str(path), entries
