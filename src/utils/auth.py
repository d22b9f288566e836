"""Authentication helpers for downloading container exports from the GTM API."""

from __future__ import annotations

import os
from typing import Iterable

from google.auth import default as google_auth_default
from google.oauth2 import service_account
from google_auth_oauthlib.flow import InstalledAppFlow

READONLY_SCOPES = ("https://www.googleapis.com/auth/tagmanager.readonly",)
AUTH_METHODS = ("service", "user", "adc")


def get_credentials(
    auth_method: str,
    credentials_path: str | None,
    scopes: Iterable[str] = READONLY_SCOPES,
):
    """
    Return read-only Google credentials for the Tag Manager API.

    Parameters
    ----------
    auth_method:
        One of "service", "user", or "adc".
    credentials_path:
        Service Account key or OAuth client secrets file. Ignored for ADC.
    scopes:
        OAuth scopes to request; report generation only ever needs read access.
    """
    scopes_list = list(scopes)

    if auth_method not in AUTH_METHODS:
        raise ValueError(f"auth must be one of: {', '.join(AUTH_METHODS)}")

    if auth_method == "adc":
        credentials, _ = google_auth_default(scopes=scopes_list)
        return credentials

    _require_credentials_file(credentials_path)
    if auth_method == "service":
        return service_account.Credentials.from_service_account_file(
            credentials_path,
            scopes=scopes_list,
        )

    flow = InstalledAppFlow.from_client_secrets_file(credentials_path, scopes_list)
    return flow.run_local_server(port=0)


def _require_credentials_file(path: str | None) -> None:
    if not path or not os.path.exists(path):
        raise FileNotFoundError(
            "Credentials file not found. Provide --credentials /path/to/file.json",
        )
