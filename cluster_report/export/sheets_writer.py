# sheets_writer.py
# ==================================================
# Google Sheets sink: clear the tab, then write the grid
# ==================================================

import logging
from typing import List, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from cluster_report.ingestion.errors import SinkError

logger = logging.getLogger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Lets Sheets parse numeric-looking strings ("3", "4.14") as numbers
VALUE_INPUT_OPTION = "USER_ENTERED"


def build_sheets_service(credentials_file: str):
    """Build a Sheets v4 client from a service-account JSON file."""
    try:
        credentials = service_account.Credentials.from_service_account_file(
            credentials_file,
            scopes=SHEETS_SCOPES
        )
    except (OSError, ValueError) as exc:
        raise SinkError(f"Unable to load service account credentials from {credentials_file}: {exc}") from exc

    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


class SheetsWriter:
    """
    Replaces the contents of one spreadsheet tab.

    The write happens in two calls (clear, then update). If the second
    call fails the tab is left empty.
    """

    def __init__(self, spreadsheet_id: str, sheet_name: str, service=None, credentials_file: Optional[str] = None):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self._service = service
        self._credentials_file = credentials_file

    @property
    def service(self):
        if self._service is None:
            if not self._credentials_file:
                raise SinkError("No Sheets service or credentials file configured")
            self._service = build_sheets_service(self._credentials_file)
        return self._service

    def write(self, values: List[List[str]]) -> int:
        """Clear the whole tab and write `values` from A1. Returns rows written."""
        sheet_values = self.service.spreadsheets().values()

        try:
            sheet_values.clear(
                spreadsheetId=self.spreadsheet_id,
                range=self.sheet_name,
                body={}
            ).execute()
        except (HttpError, GoogleAuthError, OSError) as exc:
            raise SinkError(f"Failed to clear sheet {self.sheet_name!r}: {exc}") from exc

        try:
            sheet_values.update(
                spreadsheetId=self.spreadsheet_id,
                range=f"{self.sheet_name}!A1",
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": values}
            ).execute()
        except (HttpError, GoogleAuthError, OSError) as exc:
            raise SinkError(f"Failed to update sheet {self.sheet_name!r}: {exc}") from exc

        logger.info("✅ Wrote %d rows to sheet %r", len(values), self.sheet_name)
        return len(values)
