from __future__ import annotations

import json
from pathlib import Path

import pytest

from utils.config import ReportConfig, load_report_config


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GTM_REPORT_CONFIG_JSON", raising=False)


def test_defaults_without_file_or_env() -> None:
    config = load_report_config(None)
    assert config == ReportConfig()
    assert config.exports_dir == "exports"
    assert config.output_dir == "output"
    assert config.formats == ("html", "xlsx")
    assert config.workbook_filename == "containers.xlsx"


def test_load_from_yaml_wrapped_in_report_key(tmp_path: Path) -> None:
    config_path = tmp_path / "settings.yaml"
    config_path.write_text(
        """
report:
  exports_dir: in
  output_dir: out
  formats: [xlsx]
  ad_network_source: type
""".lstrip(),
        encoding="utf-8",
    )

    config = load_report_config(str(config_path))
    assert config.exports_dir == "in"
    assert config.output_dir == "out"
    assert config.formats == ("xlsx",)
    assert config.ad_network_source == "type"


def test_default_yaml_location_is_used(tmp_path: Path) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "report.yaml").write_text("formats: html\n", encoding="utf-8")
    assert load_report_config(None).formats == ("html",)


def test_load_from_env(monkeypatch) -> None:
    monkeypatch.setenv(
        "GTM_REPORT_CONFIG_JSON",
        json.dumps({"output_dir": "reports", "formats": "html, xlsx"}),
    )
    config = load_report_config(None)
    assert config.output_dir == "reports"
    assert config.formats == ("html", "xlsx")


def test_invalid_env_json_raises(monkeypatch) -> None:
    monkeypatch.setenv("GTM_REPORT_CONFIG_JSON", "{oops")
    with pytest.raises(ValueError):
        load_report_config(None)


def test_unknown_keys_and_formats_raise(tmp_path: Path) -> None:
    bad_key = tmp_path / "bad_key.yaml"
    bad_key.write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ValueError, match="colour"):
        load_report_config(str(bad_key))

    bad_format = tmp_path / "bad_format.yaml"
    bad_format.write_text("formats: [pdf]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="pdf"):
        load_report_config(str(bad_format))


def test_explicit_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_report_config(str(tmp_path / "missing.yaml"))


def test_with_overrides_ignores_none_and_validates() -> None:
    config = ReportConfig().with_overrides(output_dir="elsewhere", formats=None)
    assert config.output_dir == "elsewhere"
    assert config.formats == ("html", "xlsx")

    assert ReportConfig().with_overrides(formats=["html", "html"]).formats == ("html",)

    with pytest.raises(ValueError):
        ReportConfig().with_overrides(ad_network_source="notes")
