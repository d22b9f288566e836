"""Batch workflow: read every container export in a folder and emit reports.

Exports are processed one at a time in file-name order. A file that cannot
be read or parsed, or that lacks the container identifiers, is reported and
skipped while the rest of the batch still runs. Only a missing or unreadable
exports folder stops the run.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from exporters.base import ReportEmitter
from managers.container_manager import (
    ContainerExportError,
    ContainerManager,
    ContainerReport,
    RowOptions,
)
from utils.helpers import ensure_output_directory


@dataclass
class RunSummary:
    """Outcome of a report run."""

    processed: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)
    written: list[Path] = field(default_factory=list)


def list_export_files(exports_dir: str | Path) -> list[Path]:
    """Return `*.json` files directly inside `exports_dir`, sorted by name.

    Raises:
        FileNotFoundError: If `exports_dir` does not exist.
        NotADirectoryError: If `exports_dir` is not a directory.
    """
    directory = Path(exports_dir)
    if not directory.exists():
        raise FileNotFoundError(f"Exports folder not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Exports path is not a folder: {directory}")
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.name.endswith(".json")),
        key=lambda p: p.name,
    )


def load_export(path: Path) -> dict[str, Any]:
    """Parse one export file as UTF-8 JSON.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the file is not valid JSON.
        ContainerExportError: If the document is not a JSON object.
    """
    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ContainerExportError(f"Expected a JSON object in file: {path.name}")
    return data


class ReportWorkflowManager:
    """Drives exports through the ContainerManager into every configured emitter."""

    def __init__(self, emitters: Iterable[ReportEmitter]):
        self.emitters = list(emitters)

    def _reports_for(
        self, export: dict[str, Any], source_name: str
    ) -> dict[RowOptions, ContainerReport]:
        # One report per distinct set of row options; emitters sharing options share rows.
        reports: dict[RowOptions, ContainerReport] = {}
        for emitter in self.emitters:
            options = emitter.row_options
            if options not in reports:
                reports[options] = ContainerManager(options).build_report(export, source_name)
        return reports

    def process_file(self, path: Path, summary: RunSummary) -> None:
        """Build and emit the reports for a single export, recording skips in `summary`."""
        print(f"Processing file: {path.name}")
        try:
            export = load_export(path)
            reports = self._reports_for(export, path.name)
        except json.JSONDecodeError as error:
            reason = f"Invalid JSON in file: {path.name} ({error})"
        except (ContainerExportError, UnicodeDecodeError) as error:
            reason = str(error)
        except OSError as error:
            reason = f"Could not read file: {path.name} ({error})"
        else:
            for emitter in self.emitters:
                emitter.write(reports[emitter.row_options])
            summary.processed.append(path.name)
            return

        summary.skipped[path.name] = reason
        print(f"Skipping {path.name}: {reason}", file=sys.stderr)

    def run(self, exports_dir: str | Path, output_dir: str | Path) -> RunSummary:
        """Process every export in `exports_dir` and write reports to `output_dir`."""
        ensure_output_directory(output_dir, is_dir=True)
        files = list_export_files(exports_dir)

        summary = RunSummary()
        for path in files:
            self.process_file(path, summary)

        for emitter in self.emitters:
            summary.written.extend(emitter.close())

        print(
            f"Done. Processed {len(summary.processed)} export(s), "
            f"skipped {len(summary.skipped)}, wrote {len(summary.written)} file(s).",
        )
        return summary
