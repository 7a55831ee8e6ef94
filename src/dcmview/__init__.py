"""Terminal browser for DICOM tags: tree projections, navigation and search."""

from dcmview.core.tree.builder import build_tree
from dcmview.errors import ConfigurationError, DcmviewError, RecordFormatError
from dcmview.models.node import GroupingMode, Node, TreeView
from dcmview.models.record import DatasetEntry, Element, TagKey
from dcmview.session import BrowserSession

__all__ = [
    "BrowserSession",
    "ConfigurationError",
    "DatasetEntry",
    "DcmviewError",
    "Element",
    "GroupingMode",
    "Node",
    "RecordFormatError",
    "TagKey",
    "TreeView",
    "build_tree",
]
