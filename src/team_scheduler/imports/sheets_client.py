from __future__ import annotations

import json
from typing import Any, List, Optional, Protocol

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core.exceptions import IntegrationError
from ..logging_config import get_logger

logger = get_logger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


class SheetsGateway(Protocol):
    """Read-only spreadsheet access used by the sheet import."""

    def list_sheet_names(self, spreadsheet_id: str) -> List[str]:
        raise NotImplementedError

    def get_values(self, spreadsheet_id: str, cell_range: str) -> List[List[Any]]:
        raise NotImplementedError


def load_service_account_credentials(
    *,
    credentials_json: Optional[str] = None,
    credentials_path: Optional[str] = None,
) -> service_account.Credentials:
    """Inline JSON wins over a key file path."""
    try:
        if credentials_json:
            info = json.loads(credentials_json)
            return service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
        if credentials_path:
            return service_account.Credentials.from_service_account_file(credentials_path, scopes=SHEETS_SCOPES)
    except (ValueError, OSError, GoogleAuthError) as e:
        raise IntegrationError(f"Invalid Google service account credentials: {e}")

    raise IntegrationError(
        "Google credentials are not configured. Set GOOGLE_CREDENTIALS_JSON or GOOGLE_APPLICATION_CREDENTIALS."
    )


class GoogleSheetsClient(SheetsGateway):
    """Sheets API v4 client; the API service is built on first use."""

    def __init__(self, *, credentials_json: Optional[str] = None, credentials_path: Optional[str] = None):
        self._credentials_json = credentials_json
        self._credentials_path = credentials_path
        self._service = None

    def _sheets(self):
        if self._service is None:
            credentials = load_service_account_credentials(
                credentials_json=self._credentials_json,
                credentials_path=self._credentials_path,
            )
            self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return self._service.spreadsheets()

    def list_sheet_names(self, spreadsheet_id: str) -> List[str]:
        try:
            response = self._sheets().get(spreadsheetId=spreadsheet_id, fields="sheets.properties.title").execute()
        except (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            logger.error("Failed to read sheet names", spreadsheet_id=spreadsheet_id, error=str(e))
            raise IntegrationError(f"Failed to read sheet names: {e}")
        return [s["properties"]["title"] for s in response.get("sheets", [])]

    def get_values(self, spreadsheet_id: str, cell_range: str) -> List[List[Any]]:
        logger.info("Reading sheet values", spreadsheet_id=spreadsheet_id, range=cell_range)
        try:
            response = self._sheets().values().get(spreadsheetId=spreadsheet_id, range=cell_range).execute()
        except (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            logger.error("Failed to read sheet values", spreadsheet_id=spreadsheet_id, range=cell_range, error=str(e))
            raise IntegrationError(f"Failed to read sheet data: {e}")
        return response.get("values", [])
