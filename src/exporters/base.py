"""Common interface and column layout for container report emitters."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from managers.container_manager import ContainerReport, ReportRow, RowOptions
from utils.helpers import bool_label

# Header -> ReportRow attribute. "Triggering Conditions" is rendered per format.
COLUMN_FIELDS: dict[str, str] = {
    "Tag Name": "tag_name",
    "Tag Type": "tag_type",
    "Triggering Conditions": "firing_conditions",
    "Folder": "folder",
    "Last Edited": "last_edited",
    "Status (Active/Paused)": "status",
    "Ad Network": "ad_network",
    "Integration (CAPI/Pixel/Dual)": "integration",
    "User ID": "user_id",
    "Segment Anonymous ID": "anonymous_id",
    "City, State, Zip Code, Country": "location",
    "IP Address": "ip_address",
    "Order ID": "order_id",
    "Order Amount ($)": "order_amount",
    "Product Details (Ecommerce)": "product_details",
    "URL": "url",
}


def cell_text(row: ReportRow, column: str) -> str:
    """Return the plain-text value of `column` for `row`."""
    value: Any = getattr(row, COLUMN_FIELDS[column])
    if isinstance(value, bool):
        return bool_label(value)
    return str(value)


class ReportEmitter:
    """Base class for report formats.

    The workflow hands every ContainerReport to `write()` and calls `close()`
    once all exports were processed.
    """

    columns: tuple[str, ...] = ()
    default_row_options = RowOptions()

    def __init__(self, output_dir: str | Path, row_options: RowOptions | None = None):
        self.output_dir = Path(output_dir)
        self.row_options = row_options or self.default_row_options
        self.written: list[Path] = []

    def render(self, report: ContainerReport, *args: Any) -> Any:
        raise NotImplementedError

    def write(self, report: ContainerReport) -> None:
        raise NotImplementedError

    def close(self) -> list[Path]:
        """Flush pending output and return every path written by this emitter."""
        return list(self.written)
