"""Turn a parsed GTM container export into report rows.

A container export looks like:

    {"containerVersion": {"accountId": ..., "containerId": ...,
                          "container": {"publicId": ..., "folders": ...},
                          "tag": [...], "trigger": [...]}}

Every tag becomes one ReportRow, in the order the export lists them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from managers.tag_manager import classify_tag
from managers.trigger_manager import FolderManager, TriggerManager
from utils.helpers import safe_get, workspace_id_from_filename
from utils.lookups import LAST_EDITED_PLACEHOLDER

TAG_URL_TEMPLATE = (
    "https://tagmanager.google.com/#/container/accounts/{account_id}"
    "/containers/{container_id}/workspaces/{workspace_id}/tags/{tag_id}"
)

_REQUIRED_IDS_MISSING_ERROR = "Missing accountId, containerId, or publicId in file: {source}"


class ContainerExportError(ValueError):
    """Raised when a container export lacks the identifiers needed for a report."""


@dataclass(frozen=True)
class RowOptions:
    """Fallbacks that differ between report formats."""

    ad_network_source: str = "name_or_type"
    # None keeps the raw folder id for folders missing from the export.
    unknown_folder: str | None = None
    unknown_trigger: str = "{id}"


@dataclass(frozen=True)
class ReportRow:
    """One report line describing a single tag."""

    tag_name: str
    url: str
    tag_type: str
    firing_triggers: tuple[str, ...]
    blocking_triggers: tuple[str, ...]
    folder: str
    last_edited: str
    status: str
    ad_network: str
    integration: str
    user_id: bool
    anonymous_id: bool
    location: bool
    ip_address: bool
    order_id: bool
    order_amount: bool
    product_details: bool

    @property
    def firing_conditions(self) -> str:
        """Firing trigger names, followed by an "Exceptions:" block when blocked."""
        text = ", ".join(self.firing_triggers)
        if self.blocking_triggers:
            exceptions = "Exceptions:\n" + ", ".join(self.blocking_triggers)
            text = f"{text}\n{exceptions}" if text else exceptions
        return text


@dataclass(frozen=True)
class ContainerReport:
    """All rows of one container export, plus the identifiers used to build them."""

    source_name: str
    account_id: str
    container_id: str
    public_id: str
    workspace_id: str
    rows: tuple[ReportRow, ...]


def build_tag_url(account_id: str, container_id: str, workspace_id: str, tag_id: Any) -> str:
    """Deep link to a tag's edit page; empty when any identifier is missing."""
    if not (account_id and container_id and workspace_id and tag_id):
        return ""
    return TAG_URL_TEMPLATE.format(
        account_id=account_id,
        container_id=container_id,
        workspace_id=workspace_id,
        tag_id=tag_id,
    )


def _is_paused(tag: dict[str, Any]) -> bool:
    paused = tag.get("paused")
    if isinstance(paused, str):
        return paused.strip().lower() == "true"
    return bool(paused)


class ContainerManager:
    """Builds ContainerReports from parsed container exports."""

    def __init__(self, options: RowOptions | None = None):
        self.options = options or RowOptions()

    def build_report(self, export: dict[str, Any], source_name: str) -> ContainerReport:
        """Validate `export` and derive one ReportRow per tag.

        Args:
            export: Parsed JSON document of a container export.
            source_name: File name of the export; also the source of the workspace id.

        Raises:
            ContainerExportError: If accountId, containerId or publicId is missing.
        """
        version = safe_get(export, "containerVersion", {}) or {}
        container = safe_get(version, "container", {}) or {}

        account_id = safe_get(version, "accountId")
        container_id = safe_get(version, "containerId")
        public_id = safe_get(container, "publicId")
        if not account_id or not container_id or not public_id:
            raise ContainerExportError(_REQUIRED_IDS_MISSING_ERROR.format(source=source_name))

        folders = FolderManager(
            safe_get(container, "folders"),
            safe_get(container, "folder"),
            safe_get(version, "folder"),
            unknown_label=self.options.unknown_folder,
        )
        triggers = TriggerManager(
            safe_get(version, "trigger", []),
            unknown_format=self.options.unknown_trigger,
        )
        workspace_id = workspace_id_from_filename(source_name)

        tags = safe_get(version, "tag", []) or []
        rows = tuple(
            self._build_row(
                tag,
                account_id=str(account_id),
                container_id=str(container_id),
                workspace_id=workspace_id,
                folders=folders,
                triggers=triggers,
            )
            for tag in tags
            if isinstance(tag, dict)
        )

        return ContainerReport(
            source_name=source_name,
            account_id=str(account_id),
            container_id=str(container_id),
            public_id=str(public_id),
            workspace_id=workspace_id,
            rows=rows,
        )

    def _build_row(
        self,
        tag: dict[str, Any],
        *,
        account_id: str,
        container_id: str,
        workspace_id: str,
        folders: FolderManager,
        triggers: TriggerManager,
    ) -> ReportRow:
        classification = classify_tag(tag, self.options.ad_network_source)

        return ReportRow(
            tag_name=str(tag.get("name") or ""),
            url=build_tag_url(account_id, container_id, workspace_id, tag.get("tagId")),
            tag_type=classification.tag_type,
            firing_triggers=triggers.trigger_names_for(tag.get("firingTriggerId")),
            blocking_triggers=triggers.trigger_names_for(tag.get("blockingTriggerId")),
            folder=folders.folder_name(tag.get("parentFolderId")),
            last_edited=LAST_EDITED_PLACEHOLDER,
            status="Paused" if _is_paused(tag) else "Active",
            ad_network=classification.ad_network,
            integration=classification.integration,
            user_id=classification.user_id,
            anonymous_id=classification.anonymous_id,
            location=classification.location,
            ip_address=True,
            order_id=classification.order_id,
            order_amount=classification.order_amount,
            product_details=classification.product_details,
        )
