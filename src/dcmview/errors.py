"""Exceptions raised by dcmview."""


class DcmviewError(Exception):
    """Base class for all dcmview errors."""


class ConfigurationError(DcmviewError):
    """Input or settings that cannot be turned into a tree."""


class RecordFormatError(DcmviewError):
    """A record file that cannot be read into a dataset entry."""
