"""Report configuration helpers.

Settings are resolved from (in order):
- an explicit YAML file passed via `--config-path`,
- `config/report.yaml` when it exists,
- a JSON payload in `GTM_REPORT_CONFIG_JSON`,
- built-in defaults.

The YAML file may either be a raw mapping or wrap its settings under a
top-level `report:` key:

```yaml
report:
  exports_dir: exports
  output_dir: output
  formats: [html, xlsx]
  ad_network_source: name_or_type
```
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from utils.lookups import AD_NETWORK_SOURCES

DEFAULT_REPORT_CONFIG = "config/report.yaml"
REPORT_CONFIG_ENV_VAR = "GTM_REPORT_CONFIG_JSON"

SUPPORTED_FORMATS = ("html", "xlsx")


@dataclass(frozen=True)
class ReportConfig:
    """Where to read exports from, where to write reports, and in which formats."""

    exports_dir: str = "exports"
    output_dir: str = "output"
    formats: tuple[str, ...] = field(default=SUPPORTED_FORMATS)
    workbook_filename: str = "containers.xlsx"
    ad_network_source: str = "name_or_type"

    def with_overrides(self, **overrides: Any) -> "ReportConfig":
        """Return a copy with every non-None override applied and validated."""
        applied = {k: v for k, v in overrides.items() if v is not None}
        if not applied:
            return self
        return _validate(replace(self, **_coerce(applied)))


def load_report_config(config_path: str | None) -> ReportConfig:
    """Load report settings from YAML, the environment, or defaults.

    Args:
        config_path: Optional explicit YAML path.

    Returns:
        A validated ReportConfig.

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
        ValueError: If the settings are malformed.
    """
    if config_path and not Path(config_path).exists():
        raise FileNotFoundError(f"Report config not found: {config_path}")

    settings = _load_settings_from_file(config_path)
    if settings is None:
        settings = _load_settings_from_env()
    if settings is None:
        return ReportConfig()

    unknown = sorted(set(settings) - {f.name for f in fields(ReportConfig)})
    if unknown:
        raise ValueError(f"Unknown report config keys: {', '.join(unknown)}")

    return _validate(ReportConfig(**_coerce(settings)))


def _resolve_config_path(config_path: str | None) -> Path | None:
    if config_path:
        return Path(config_path)

    default_path = Path(DEFAULT_REPORT_CONFIG)
    if default_path.exists():
        return default_path

    return None


def _load_settings_from_file(config_path: str | None) -> dict[str, Any] | None:
    path_to_load = _resolve_config_path(config_path)
    if not path_to_load or not path_to_load.exists():
        return None

    with open(path_to_load, "r", encoding="utf-8") as config_file:
        raw_data = yaml.safe_load(config_file) or {}

    if not isinstance(raw_data, dict):
        raise ValueError("Report config must be a mapping.")

    settings = raw_data.get("report", raw_data)
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ValueError("Report config must be a mapping.")
    return settings


def _load_settings_from_env() -> dict[str, Any] | None:
    env_payload = os.getenv(REPORT_CONFIG_ENV_VAR)
    if not env_payload:
        return None

    try:
        parsed = json.loads(env_payload)
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Failed to parse {REPORT_CONFIG_ENV_VAR} environment variable as JSON.",
        ) from exc

    if not isinstance(parsed, dict):
        raise ValueError(f"{REPORT_CONFIG_ENV_VAR} must contain a JSON object.")
    return parsed


def _coerce(settings: dict[str, Any]) -> dict[str, Any]:
    cleaned = dict(settings)
    formats = cleaned.get("formats")
    if isinstance(formats, str):
        formats = [f for f in formats.split(",") if f.strip()]
    if isinstance(formats, (list, tuple)):
        cleaned["formats"] = tuple(dict.fromkeys(str(f).strip() for f in formats))
    for key in ("exports_dir", "output_dir", "workbook_filename", "ad_network_source"):
        if key in cleaned and cleaned[key] is not None:
            cleaned[key] = str(cleaned[key])
    return cleaned


def _validate(config: ReportConfig) -> ReportConfig:
    if not isinstance(config.formats, tuple) or not config.formats:
        raise ValueError("At least one report format is required.")
    unsupported = [f for f in config.formats if f not in SUPPORTED_FORMATS]
    if unsupported:
        raise ValueError(
            f"Unsupported report format(s): {', '.join(unsupported)}. "
            f"Choose from: {', '.join(SUPPORTED_FORMATS)}",
        )
    if config.ad_network_source not in AD_NETWORK_SOURCES:
        raise ValueError(
            f"ad_network_source must be one of: {', '.join(AD_NETWORK_SOURCES)}",
        )
    if not config.workbook_filename.strip():
        raise ValueError("workbook_filename must not be empty.")
    return config
