#!/usr/bin/env python3
"""Download a GTM container export into the exports folder.

Fetches the latest container version through the Tag Manager API and stores
it in the same shape as a manual "Export Container" download, named
`<publicId>_workspace<N>.json` so tag links in the reports point at the
right workspace.
"""

from __future__ import annotations

import argparse
import json
import pathlib
import sys
from typing import Any

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

SRC_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from utils.auth import AUTH_METHODS, READONLY_SCOPES, get_credentials  # noqa: E402
from utils.google_api import execute_with_retry  # noqa: E402
from utils.helpers import DEFAULT_WORKSPACE_ID, ensure_output_directory  # noqa: E402

EXPORT_FORMAT_VERSION = 2


def fetch_latest_container_version(
    service: Any, account_id: str, container_id: str
) -> dict[str, Any]:
    """Return the latest container version resource."""
    version_path = f"accounts/{account_id}/containers/{container_id}/versions/latest"
    request = service.accounts().containers().versions().latest(path=version_path)
    return execute_with_retry(request.execute)


def export_filename(container_version: dict[str, Any], workspace_id: str) -> str:
    container = container_version.get("container") or {}
    public_id = container.get("publicId") or container_version.get("containerId") or "container"
    return f"{public_id}_workspace{workspace_id}.json"


def write_container_export(
    service: Any,
    account_id: str,
    container_id: str,
    exports_dir: str,
    *,
    workspace_id: str = DEFAULT_WORKSPACE_ID,
) -> pathlib.Path:
    """Fetch the latest version and write it as a container export file.

    Returns:
        Path of the written export.
    """
    container_version = fetch_latest_container_version(service, account_id, container_id)
    payload = {
        "exportFormatVersion": EXPORT_FORMAT_VERSION,
        "containerVersion": container_version,
    }

    output_path = pathlib.Path(exports_dir) / export_filename(container_version, workspace_id)
    ensure_output_directory(output_path)
    with open(output_path, "w", encoding="utf-8") as handle:
        handle.write(json.dumps(payload, indent=2, ensure_ascii=False))
    return output_path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Download the latest version of a GTM container as an export JSON file.",
    )
    parser.add_argument("--account-id", required=True, help="GTM Account ID (e.g., 2824463661)")
    parser.add_argument("--container-id", required=True, help="GTM Container ID (e.g., 51955729)")
    parser.add_argument(
        "--workspace-id",
        default=DEFAULT_WORKSPACE_ID,
        help="Workspace used for tag links in reports (default: 1)",
    )
    parser.add_argument(
        "--exports-dir",
        default="exports",
        help="Folder to write the export to (default: exports)",
    )
    parser.add_argument(
        "--auth",
        choices=AUTH_METHODS,
        default="user",
        help="Auth method: service (Service Account), user (OAuth), or adc (gcloud / ADC). Default: user",
    )
    parser.add_argument(
        "--credentials",
        help=(
            "Path to Service Account JSON (for --auth service) or OAuth client_secrets.json "
            "(for --auth user). Not required for --auth adc."
        ),
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        credentials = get_credentials(args.auth, args.credentials, READONLY_SCOPES)
        service = build("tagmanager", "v2", credentials=credentials, cache_discovery=False)
        output_path = write_container_export(
            service,
            args.account_id,
            args.container_id,
            args.exports_dir,
            workspace_id=args.workspace_id,
        )
        print(f"Wrote container export to {output_path}")
    except HttpError as error:
        print(f"GTM API error: {error}", file=sys.stderr)
        raise
    except Exception as error:
        print(f"Error: {error}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
