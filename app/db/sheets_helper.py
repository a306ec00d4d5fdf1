import json
from typing import Any, List

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error
from loguru import logger

from app.core.config import SheetsConfig
from app.core.exceptions import BackendUnavailable, BackendWriteFailed, ConfigurationError
from app.db.models.record import COLUMNS, HEADER_ROWS

VALUE_INPUT_OPTION = "RAW"

LAST_COLUMN = chr(ord("A") + len(COLUMNS) - 1)


class SheetsSession:
    """Authorized handle on the `values` resource of one spreadsheet tab."""

    def __init__(self, values, spreadsheet_id: str, sheet_name: str):
        self._values = values
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name

    @property
    def data_range(self) -> str:
        return f"{self.sheet_name}!A{HEADER_ROWS + 1}:{LAST_COLUMN}"

    @property
    def append_range(self) -> str:
        return f"{self.sheet_name}!A:{LAST_COLUMN}"

    def row_range(self, row_number: int) -> str:
        return f"{self.sheet_name}!A{row_number}:{LAST_COLUMN}{row_number}"

    def read_rows(self) -> List[List[Any]]:
        try:
            result = self._values.get(
                spreadsheetId=self.spreadsheet_id,
                range=self.data_range,
            ).execute()
        except (HttpError, HttpLib2Error, google.auth.exceptions.GoogleAuthError, OSError) as e:
            logger.error(f"Failed to read range {self.data_range}: {e}")
            raise BackendUnavailable(f"Could not read {self.data_range}") from e

        rows = result.get("values") or []
        logger.debug(f"Read {len(rows)} rows from {self.data_range}")
        return rows

    def append_row(self, row: List[Any]) -> None:
        try:
            self._values.append(
                spreadsheetId=self.spreadsheet_id,
                range=self.append_range,
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": [row]},
            ).execute()
        except (HttpError, HttpLib2Error, google.auth.exceptions.GoogleAuthError, OSError) as e:
            logger.error(f"Failed to append row to {self.append_range}: {e}")
            raise BackendWriteFailed(f"Could not append to {self.append_range}") from e

        logger.debug(f"Appended row to {self.append_range}")

    def update_row(self, row_number: int, row: List[Any]) -> None:
        target = self.row_range(row_number)
        try:
            self._values.update(
                spreadsheetId=self.spreadsheet_id,
                range=target,
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": [row]},
            ).execute()
        except (HttpError, HttpLib2Error, google.auth.exceptions.GoogleAuthError, OSError) as e:
            logger.error(f"Failed to update {target}: {e}")
            raise BackendWriteFailed(f"Could not update {target}") from e

        logger.debug(f"Updated {target}")


class SheetsHelper:
    """
    Builds authorized Sheets sessions from validated settings.
    Configuration presence is checked once, here; the credential bundle itself
    is parsed and authorized on every `connect()`.
    """

    def __init__(self, config: SheetsConfig):
        missing = config.missing_fields()
        if missing:
            raise ConfigurationError(missing)

        self.spreadsheet_id: str = config.spreadsheet_id
        self.sheet_name: str = config.sheet_name
        self.scopes: List[str] = list(config.scopes)
        self._credentials_json: str = config.credentials_json.get_secret_value()
        logger.info(f"SheetsHelper initialized for tab '{self.sheet_name}'.")

    def _load_credentials(self) -> service_account.Credentials:
        try:
            info = json.loads(self._credentials_json)
            return service_account.Credentials.from_service_account_info(info, scopes=self.scopes)
        except (ValueError, KeyError, TypeError) as e:
            raise BackendUnavailable("Service-account credentials could not be parsed") from e

    def connect(self) -> SheetsSession:
        credentials = self._load_credentials()
        try:
            credentials.refresh(Request())
            service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        except (google.auth.exceptions.GoogleAuthError, HttpError, HttpLib2Error, OSError) as e:
            logger.error(f"Sheets authorization failed: {e}")
            raise BackendUnavailable("Could not authorize against Google Sheets") from e

        logger.debug("Authorized Sheets session.")
        return SheetsSession(service.spreadsheets().values(), self.spreadsheet_id, self.sheet_name)
