"""Tests for the three tree projections."""

from collections import Counter

import pytest

from dcmview.core.tree.builder import build_tree, distinct_values
from dcmview.core.tree.navigation import walk
from dcmview.errors import ConfigurationError
from dcmview.models.node import GroupingMode, Node
from dcmview.models.record import DatasetEntry, TagKey
from tests.unit.fakes import labels, make_element, make_entry, shape


def test_empty_input_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="no records to display"):
        build_tree("root", [], GroupingMode.BY_FILE)


def test_new_tree_is_fully_collapsed(two_entries: list[DatasetEntry]) -> None:
    root = build_tree("series", two_entries, GroupingMode.BY_TAG)
    assert not any(node.expanded for node, _parent, _depth in walk(root))


# --- By file ---


def test_single_file_groups_in_first_appearance_order(
    single_entry: list[DatasetEntry],
) -> None:
    root = build_tree("ignored", single_entry, GroupingMode.BY_FILE)

    assert root.label == "single.dcm"
    assert labels(root.children) == ["0008", "0010"]
    group_0008, group_0010 = root.children
    assert len(group_0008.children) == 2
    assert len(group_0010.children) == 1
    assert group_0010.children[0].label == "0010 PatientName (PN, 8): Doe^John"


def test_by_file_opens_new_group_whenever_group_changes() -> None:
    """The builder does not sort: a group seen again later gets a second node."""
    entry = make_entry(
        "odd.dcm",
        make_element(0x0010, 0x0010, "x"),
        make_element(0x0008, 0x0060, "CT"),
        make_element(0x0010, 0x0020, "y"),
    )
    root = build_tree("root", [entry], GroupingMode.BY_FILE)
    assert labels(root.children) == ["0010", "0008", "0010"]


def test_by_file_with_two_files(two_entries: list[DatasetEntry]) -> None:
    root = build_tree("series", two_entries, GroupingMode.BY_FILE)

    assert root.label == "series"
    assert labels(root.children) == ["A.dcm", "B.dcm"]
    file_a, file_b = root.children
    assert labels(file_a.children) == ["0008", "0010"]
    assert labels(file_b.children) == ["0008", "0010", "0020"]


def test_by_file_leaves_reference_every_element_under_its_group(
    two_entries: list[DatasetEntry],
) -> None:
    root = build_tree("series", two_entries, GroupingMode.BY_FILE)

    leaves: list[tuple[Node, Node]] = [
        (node, parent)
        for node, parent, _depth in walk(root)
        if node.is_leaf and parent is not None
    ]
    referenced = Counter(id(node.reference) for node, _parent in leaves)
    expected = Counter(id(e) for entry in two_entries for e in entry.elements)
    assert referenced == expected

    for node, parent in leaves:
        assert node.reference is not None
        assert parent.label == f"{node.reference.tag.group:04x}"


def test_two_files_one_tag_each_by_file() -> None:
    entries = [
        make_entry("A.dcm", make_element(0x0010, 0x0010, "Doe^John", name="PatientName")),
        make_entry("B.dcm", make_element(0x0010, 0x0010, "Smith^Jane", name="PatientName")),
    ]
    root = build_tree("dir", entries, GroupingMode.BY_FILE)

    assert labels(root.children) == ["A.dcm", "B.dcm"]
    for file_node in root.children:
        assert labels(file_node.children) == ["0010"]
        assert len(file_node.children[0].children) == 1


# --- By tag ---


def test_single_file_by_tag_modes_match_by_file(single_entry: list[DatasetEntry]) -> None:
    by_file = build_tree("root", single_entry, GroupingMode.BY_FILE)
    by_tag = build_tree("root", single_entry, GroupingMode.BY_TAG)
    by_tag_diff = build_tree("root", single_entry, GroupingMode.BY_TAG_DIFF)

    assert shape(by_tag) == shape(by_file)
    assert shape(by_tag_diff) == shape(by_file)


def test_by_tag_groups_tags_across_files(two_entries: list[DatasetEntry]) -> None:
    root = build_tree("series", two_entries, GroupingMode.BY_TAG)

    assert root.label == "series"
    assert labels(root.children) == ["0008", "0010", "0020"]
    group_0010 = root.children[1]
    assert labels(group_0010.children) == ["0010 PatientName", "0020 PatientID"]

    patient_name = group_0010.children[0]
    assert patient_name.reference is two_entries[0].elements[1]
    assert labels(patient_name.children) == ["A.dcm: Doe^John", "B.dcm: Smith^Jane"]
    assert patient_name.children[1].reference is two_entries[1].elements[1]


def test_by_tag_groups_follow_first_sighting_not_numeric_order() -> None:
    entries = [
        make_entry("A.dcm", make_element(0x0020, 0x000D, "1")),
        make_entry("B.dcm", make_element(0x0008, 0x0060, "CT"), make_element(0x0020, 0x000D, "2")),
    ]
    root = build_tree("dir", entries, GroupingMode.BY_TAG)
    assert labels(root.children) == ["0020", "0008"]


def test_tag_node_has_reference_and_children(two_entries: list[DatasetEntry]) -> None:
    root = build_tree("series", two_entries, GroupingMode.BY_TAG)
    modality = root.children[0].children[0]
    assert modality.reference is not None
    assert not modality.is_leaf
    assert labels(modality.children) == ["A.dcm: CT", "B.dcm: CT"]


# --- By tag, differing values only ---


def test_diff_mode_keeps_only_tags_with_several_values(
    two_entries: list[DatasetEntry],
) -> None:
    root = build_tree("series", two_entries, GroupingMode.BY_TAG_DIFF)

    tags = {
        node.reference.tag
        for node, _parent, depth in walk(root)
        if depth == 2 and node.reference is not None
    }
    values = distinct_values(two_entries)
    assert tags == {tag for tag, seen in values.items() if len(seen) > 1}
    assert tags == {TagKey(0x0010, 0x0010)}


def test_diff_mode_keeps_empty_group_headers(two_entries: list[DatasetEntry]) -> None:
    root = build_tree("series", two_entries, GroupingMode.BY_TAG_DIFF)

    assert labels(root.children) == ["0008", "0010", "0020"]
    assert root.children[0].children == []
    assert root.children[2].children == []


def test_diff_mode_two_files_one_tag() -> None:
    entries = [
        make_entry("A.dcm", make_element(0x0010, 0x0010, "Doe^John", name="PatientName")),
        make_entry("B.dcm", make_element(0x0010, 0x0010, "Smith^Jane", name="PatientName")),
    ]
    root = build_tree("dir", entries, GroupingMode.BY_TAG_DIFF)

    assert labels(root.children) == ["0010"]
    (tag_node,) = root.children[0].children
    assert tag_node.reference is not None
    assert tag_node.reference.tag == TagKey(0x0010, 0x0010)
    assert labels(tag_node.children) == ["A.dcm: Doe^John", "B.dcm: Smith^Jane"]


def test_diff_mode_compares_full_values_not_cut_labels() -> None:
    """Values that only differ past the display limit still count as different."""
    entries = [
        make_entry("A.dcm", make_element(0x0008, 0x1030, "x" * 10 + "a")),
        make_entry("B.dcm", make_element(0x0008, 0x1030, "x" * 10 + "b")),
    ]
    root = build_tree("dir", entries, GroupingMode.BY_TAG_DIFF, limit=5)
    tag_node = root.children[0].children[0]
    assert labels(tag_node.children) == ["A.dcm: xxxxx...", "B.dcm: xxxxx..."]
