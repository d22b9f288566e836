from __future__ import annotations

from pathlib import Path

from utils.helpers import bool_label, ensure_output_directory, safe_get, workspace_id_from_filename


def test_ensure_output_directory_creates_parent_path(tmp_path: Path) -> None:
    output_file = tmp_path / "nested" / "folder" / "report.html"
    ensure_output_directory(str(output_file))
    assert output_file.parent.is_dir()
    assert not output_file.exists()


def test_ensure_output_directory_creates_directory_itself(tmp_path: Path) -> None:
    output_dir = tmp_path / "output"
    ensure_output_directory(output_dir, is_dir=True)
    ensure_output_directory(output_dir, is_dir=True)
    assert output_dir.is_dir()


def test_workspace_id_from_filename() -> None:
    assert workspace_id_from_filename("GTM-ABC_workspace42.json") == "42"
    assert workspace_id_from_filename("GTM-ABC_workspace_latest.json") == "1"
    assert workspace_id_from_filename("GTM-ABC.json") == "1"


def test_safe_get_and_bool_label() -> None:
    assert safe_get({"a": 1}, "a") == 1
    assert safe_get(None, "a", "x") == "x"
    assert safe_get(["a"], "a") is None
    assert bool_label(True) == "TRUE"
    assert bool_label(False) == "FALSE"
