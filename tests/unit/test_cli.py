"""Tests for the dcmview CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dcmview.cli import app

runner = CliRunner()


def _dataset(patient: str) -> dict[str, object]:
    return {
        "00080060": {"vr": "CS", "Value": ["CT"]},
        "00100010": {"vr": "PN", "Value": [{"Alphabetic": patient}]},
    }


@pytest.fixture
def series(tmp_path: Path) -> Path:
    (tmp_path / "a.json").write_text(json.dumps(_dataset("Doe^John")))
    (tmp_path / "b.json").write_text(json.dumps(_dataset("Smith^Jane")))
    return tmp_path


def test_tree_by_file(series: Path) -> None:
    result = runner.invoke(app, ["tree", str(series)])
    assert result.exit_code == 0, result.output

    lines = result.output.splitlines()
    assert lines[0] == str(series)
    assert "  a.json" in lines
    assert "      0060 Modality (CS, 2): CT" in lines
    assert "      0010 PatientName (PN, 10): Smith^Jane" in lines


def test_tree_tag_diff_hides_equal_tags(series: Path) -> None:
    result = runner.invoke(app, ["tree", str(series), "--mode", "tag-diff"])
    assert result.exit_code == 0, result.output

    assert "0010 PatientName" in result.output
    assert "a.json: Doe^John" in result.output
    assert "Modality" not in result.output


def test_tree_json_with_max_depth(series: Path) -> None:
    result = runner.invoke(app, ["tree", str(series), "--json", "--max-depth", "1"])
    assert result.exit_code == 0, result.output

    parsed = json.loads(result.output)
    assert parsed["label"] == str(series)
    assert [child["label"] for child in parsed["children"]] == ["a.json", "b.json"]
    assert parsed["children"][0]["child_count"] == 2


def test_tree_value_limit(series: Path) -> None:
    result = runner.invoke(app, ["tree", str(series), "--value-limit", "3"])
    assert result.exit_code == 0, result.output
    assert "0010 PatientName (PN, 10): Smi..." in result.output


def test_search_lists_matches(series: Path) -> None:
    result = runner.invoke(app, ["search", str(series), "smith"])
    assert result.exit_code == 0, result.output
    assert "Found 1 results:" in result.output
    assert "Smith^Jane" in result.output
    assert "in " in result.output


def test_search_json(series: Path) -> None:
    result = runner.invoke(app, ["search", str(series), "patientname", "--json"])
    assert result.exit_code == 0, result.output

    parsed = json.loads(result.output)
    assert parsed["count"] == 2
    assert {r["tag"] for r in parsed["results"]} == {"(0010,0010)"}
    assert "b.json" in parsed["results"][1]["path"]


def test_missing_path_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["tree", str(tmp_path / "nope")])
    assert result.exit_code == 1


def test_bad_mode_is_rejected(series: Path) -> None:
    result = runner.invoke(app, ["tree", str(series), "--mode", "sideways"])
    assert result.exit_code != 0


def test_browse_help() -> None:
    result = runner.invoke(app, ["browse", "--help"])
    assert result.exit_code == 0
    assert "interactively" in result.output
