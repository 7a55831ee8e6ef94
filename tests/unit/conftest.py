"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from loguru import logger

from dcmview.models.node import Node, TreeView
from dcmview.models.record import DatasetEntry
from tests.unit.fakes import make_element, make_entry


@pytest.fixture
def caplog(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def single_entry() -> list[DatasetEntry]:
    """One file with groups 0008, 0008, 0010."""
    return [
        make_entry(
            "single.dcm",
            make_element(0x0008, 0x0016, "1.2.840.10008.5.1.4.1.1.2", name="SOPClassUID", vr="UI"),
            make_element(0x0008, 0x0060, "CT", name="Modality", vr="CS"),
            make_element(0x0010, 0x0010, "Doe^John", name="PatientName", vr="PN"),
        )
    ]


@pytest.fixture
def two_entries() -> list[DatasetEntry]:
    """Two files sharing some tags; only PatientName differs between them."""
    return [
        make_entry(
            "A.dcm",
            make_element(0x0008, 0x0060, "CT", name="Modality", vr="CS"),
            make_element(0x0010, 0x0010, "Doe^John", name="PatientName", vr="PN"),
            make_element(0x0010, 0x0020, "123", name="PatientID"),
        ),
        make_entry(
            "B.dcm",
            make_element(0x0008, 0x0060, "CT", name="Modality", vr="CS"),
            make_element(0x0010, 0x0010, "Smith^Jane", name="PatientName", vr="PN"),
            make_element(0x0010, 0x0020, "123", name="PatientID"),
            make_element(0x0020, 0x000D, "1.2.3", name="StudyInstanceUID", vr="UI"),
        ),
    ]


@pytest.fixture
def nav_tree() -> TreeView:
    """A small hand-built tree, everything collapsed.

    root
      a (a1, a2)
      b (b1)
      c (c1, c2)
    """
    a = Node("a", [Node("a1"), Node("a2")])
    b = Node("b", [Node("b1")])
    c = Node("c", [Node("c1"), Node("c2")])
    return TreeView(root=Node("root", [a, b, c]))
