"""Tag names from the pydicom data dictionary."""

from pydicom.datadict import keyword_for_tag

from dcmview.models.record import TagKey


class PydicomTagDictionary:
    """Resolve tag keywords (``PatientName``) through pydicom's static dictionary."""

    def lookup(self, tag: TagKey) -> str | None:
        keyword = keyword_for_tag((tag.group << 16) | tag.element)
        return keyword or None
