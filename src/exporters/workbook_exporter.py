"""Collect container reports into a single Excel workbook, one sheet per container."""

from __future__ import annotations

import re
from pathlib import Path

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from exporters.base import ReportEmitter, cell_text
from exporters.html_exporter import HTML_COLUMNS
from managers.container_manager import ContainerReport, RowOptions
from utils.helpers import ensure_output_directory

DEFAULT_WORKBOOK_FILENAME = "containers.xlsx"

WORKBOOK_COLUMNS = tuple(c for c in HTML_COLUMNS if c != "IP Address") + ("URL",)

_INVALID_SHEET_CHARS = re.compile(r"[\\/*?:\[\]]")
_MAX_SHEET_TITLE = 31
_MAX_COLUMN_WIDTH = 60
_WRAPPED_COLUMNS = {"Triggering Conditions"}


def new_workbook() -> Workbook:
    """Return an empty workbook (openpyxl's default sheet removed)."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    return workbook


def sheet_title_for(public_id: str, existing: list[str]) -> str:
    """Excel-safe, unique sheet title derived from a container's public id."""
    base = _INVALID_SHEET_CHARS.sub("_", sheet_text(public_id)).strip() or "Container"
    title = base[:_MAX_SHEET_TITLE]
    taken = {name.lower() for name in existing}
    suffix = 2
    while title.lower() in taken:
        tail = f" ({suffix})"
        title = base[: _MAX_SHEET_TITLE - len(tail)] + tail
        suffix += 1
    return title


def sheet_text(value: str) -> str:
    """Drop control characters that worksheets cannot store."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def append_container_sheet(
    workbook: Workbook,
    report: ContainerReport,
    columns: tuple[str, ...] = WORKBOOK_COLUMNS,
) -> Workbook:
    """Add a sheet for `report` to `workbook` and return the workbook."""
    sheet = workbook.create_sheet(title=sheet_title_for(report.public_id, workbook.sheetnames))

    sheet.append(list(columns))
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    sheet.freeze_panes = "A2"

    for row in report.rows:
        sheet.append([sheet_text(cell_text(row, column)) for column in columns])
        for cell in sheet[sheet.max_row]:
            # Names such as "=== Meta ===" are text, not formulas.
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"

    for index, column in enumerate(columns, start=1):
        letter = get_column_letter(index)
        values = [str(c.value or "") for c in sheet[letter]]
        longest = max(len(line) for value in values for line in value.split("\n"))
        sheet.column_dimensions[letter].width = min(_MAX_COLUMN_WIDTH, longest + 2)
        if column in _WRAPPED_COLUMNS:
            for cell in sheet[letter][1:]:
                cell.alignment = Alignment(wrap_text=True, vertical="top")

    return workbook


class WorkbookReportEmitter(ReportEmitter):
    """Adds one sheet per container and saves `<output_dir>/containers.xlsx` on close."""

    columns = WORKBOOK_COLUMNS
    default_row_options = RowOptions(
        unknown_folder="Unknown Folder",
        unknown_trigger="Unknown Trigger ({id})",
    )

    def __init__(
        self,
        output_dir: str | Path,
        row_options: RowOptions | None = None,
        *,
        filename: str = DEFAULT_WORKBOOK_FILENAME,
    ):
        super().__init__(output_dir, row_options)
        self.filename = filename
        self.workbook = new_workbook()

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.filename

    def render(self, report: ContainerReport, workbook: Workbook) -> Workbook:
        return append_container_sheet(workbook, report, self.columns)

    def write(self, report: ContainerReport) -> None:
        self.workbook = self.render(report, self.workbook)
        print(f"Added sheet for {report.public_id} to workbook")

    def close(self) -> list[Path]:
        if not self.workbook.sheetnames:
            print("No containers processed; workbook not written.")
            return list(self.written)

        ensure_output_directory(self.output_path)
        self.workbook.save(self.output_path)
        self.written.append(self.output_path)
        print(f"Workbook saved to {self.output_path}")
        return list(self.written)
