"""Render a container report as a standalone HTML table."""

from __future__ import annotations

from html import escape
from pathlib import Path

from exporters.base import ReportEmitter, cell_text
from managers.container_manager import ContainerReport, ReportRow

HTML_COLUMNS = (
    "Tag Name",
    "Tag Type",
    "Triggering Conditions",
    "Folder",
    "Last Edited",
    "Status (Active/Paused)",
    "Ad Network",
    "Integration (CAPI/Pixel/Dual)",
    "User ID",
    "Segment Anonymous ID",
    "City, State, Zip Code, Country",
    "IP Address",
    "Order ID",
    "Order Amount ($)",
    "Product Details (Ecommerce)",
)

_CSS = """
body { font-family: Arial, Helvetica, sans-serif; font-size: 13px; margin: 16px; }
table { border-collapse: collapse; width: 100%; }
th { background: #f1f3f4; position: sticky; top: 0; }
th, td { border: 1px solid #dadce0; padding: 4px 8px; text-align: left; vertical-align: top; }
tr:nth-child(even) td { background: #fafafa; }
a { color: #1a73e8; text-decoration: none; }
""".strip()


def _firing_conditions_html(row: ReportRow) -> str:
    html = escape(", ".join(row.firing_triggers))
    if row.blocking_triggers:
        exceptions = escape(", ".join(row.blocking_triggers))
        block = f"<strong>Exceptions:</strong><br>{exceptions}"
        html = f"{html}<br>{block}" if html else block
    return html


def _tag_name_html(row: ReportRow) -> str:
    name = escape(row.tag_name)
    if not row.url:
        return name
    return f'<a href="{escape(row.url)}" target="_blank">{name}</a>'


def _cell_html(row: ReportRow, column: str) -> str:
    if column == "Tag Name":
        return _tag_name_html(row)
    if column == "Triggering Conditions":
        return _firing_conditions_html(row)
    return escape(cell_text(row, column))


def render_html_report(report: ContainerReport, columns: tuple[str, ...] = HTML_COLUMNS) -> str:
    """Return a complete HTML document with one table row per tag."""
    parts = [
        "<!DOCTYPE html>",
        '<html><head><meta charset="utf-8">',
        f"<title>Tags Table - {escape(report.public_id)}</title>",
        f"<style>\n{_CSS}\n</style>",
        "</head><body>",
        f"<h1>{escape(report.public_id)}</h1>",
        '<table border="1">',
        "<tr>" + "".join(f"<th>{escape(column)}</th>" for column in columns) + "</tr>",
    ]
    for row in report.rows:
        parts.append("<tr>" + "".join(f"<td>{_cell_html(row, c)}</td>" for c in columns) + "</tr>")
    parts.append("</table></body></html>")
    return "\n".join(parts) + "\n"


class HtmlReportEmitter(ReportEmitter):
    """Writes `<output_dir>/<publicId>.html` for every container."""

    columns = HTML_COLUMNS

    def render(self, report: ContainerReport) -> str:
        return render_html_report(report, self.columns)

    def write(self, report: ContainerReport) -> None:
        output_path = self.output_path_for(report)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the bytes identical across platforms.
        with open(output_path, "w", encoding="utf-8", newline="") as handle:
            handle.write(self.render(report))
        self.written.append(output_path)
        print(f"Table generated and saved to {output_path}")

    def output_path_for(self, report: ContainerReport) -> Path:
        return self.output_dir / f"{report.public_id}.html"
