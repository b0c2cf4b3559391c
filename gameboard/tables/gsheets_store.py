# gameboard/tables/gsheets_store.py
from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Sequence

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import DateTimeOption, ValueInputOption, ValueRenderOption, rowcol_to_a1
from gspread_formatting import CellFormat, TextFormat, format_cell_range

from gameboard.errors import StorageUnavailableError
from gameboard.tables import pad_rows

log = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

# Cells are written and read as typed values; display formatting and
# formula parsing never touch them.
VALUE_INPUT_OPTION = ValueInputOption.raw
READ_OPTIONS = {
    "value_render_option": ValueRenderOption.unformatted,
    "date_time_render_option": DateTimeOption.serial_number,
}

NEW_SHEET_ROWS = 200
NEW_SHEET_COLS = 10

BOLD = CellFormat(textFormat=TextFormat(bold=True))
PLAIN = CellFormat(textFormat=TextFormat(bold=False))


def _cell_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class GoogleSheetStore:
    """
    TableAccess over the worksheets of one Google spreadsheet.

    gspread is blocking, so every call runs in a worker thread.
    """

    def __init__(self, spreadsheet: gspread.Spreadsheet) -> None:
        self.spreadsheet = spreadsheet

    @classmethod
    def from_service_account(cls, service_account_file: str, spreadsheet_id: str) -> "GoogleSheetStore":
        if not spreadsheet_id:
            raise StorageUnavailableError("No spreadsheet id configured")
        try:
            creds = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
            client = gspread.authorize(creds)
            spreadsheet = client.open_by_key(spreadsheet_id)
        except FileNotFoundError as e:
            raise StorageUnavailableError(
                f"Service account file not found: {service_account_file}"
            ) from e
        except gspread.exceptions.SpreadsheetNotFound as e:
            raise StorageUnavailableError(f"Spreadsheet not found: {spreadsheet_id}") from e
        except gspread.exceptions.APIError as e:
            raise StorageUnavailableError(f"Google Sheets API error: {e}") from e

        log.info("Opened spreadsheet %s", spreadsheet.title)
        return cls(spreadsheet)

    @classmethod
    async def connect(cls, service_account_file: str, spreadsheet_id: str) -> "GoogleSheetStore":
        return await asyncio.to_thread(cls.from_service_account, service_account_file, spreadsheet_id)

    async def _call(self, fn, *args, **kwargs):
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except gspread.exceptions.WorksheetNotFound as e:
            raise StorageUnavailableError(f"Sheet {e} does not exist") from e
        except gspread.exceptions.APIError as e:
            raise StorageUnavailableError(f"Google Sheets API error: {e}") from e

    def _worksheet(self, name: str) -> gspread.Worksheet:
        return self.spreadsheet.worksheet(name)

    # ------------------------
    # blocking helpers
    # ------------------------

    def _has_sheet(self, name: str) -> bool:
        try:
            self._worksheet(name)
        except gspread.exceptions.WorksheetNotFound:
            return False
        return True

    def _create_sheet(self, name: str) -> None:
        if self._has_sheet(name):
            return
        self.spreadsheet.add_worksheet(title=name, rows=str(NEW_SHEET_ROWS), cols=str(NEW_SHEET_COLS))
        log.info("Created worksheet %s", name)

    def _read_all(self, name: str) -> list[list[Any]]:
        return pad_rows(self._worksheet(name).get_all_values(**READ_OPTIONS))

    def _read_row(self, name: str, row: int) -> list[Any]:
        return self._worksheet(name).row_values(row, **READ_OPTIONS)

    def _write_row(self, name: str, row: int, values: Sequence[Any], bold: bool) -> None:
        ws = self._worksheet(name)
        width = max(len(values), ws.col_count)
        if ws.col_count < width:
            ws.resize(cols=width)

        # whole row is replaced, stale trailing cells included
        padded = [_cell_value(v) for v in values] + [""] * (width - len(values))
        row_range = f"{rowcol_to_a1(row, 1)}:{rowcol_to_a1(row, width)}"
        ws.update(values=[padded], range_name=row_range, value_input_option=VALUE_INPUT_OPTION)
        format_cell_range(ws, row_range, BOLD if bold else PLAIN)

    def _write_cell(self, name: str, row: int, col: int, value: Any) -> None:
        self._worksheet(name).update(
            values=[[_cell_value(value)]],
            range_name=rowcol_to_a1(row, col),
            value_input_option=VALUE_INPUT_OPTION,
        )

    def _write_column(self, name: str, col: int, start_row: int, values: Sequence[Any]) -> None:
        if not values:
            return
        ws = self._worksheet(name)
        end_row = start_row + len(values) - 1
        if ws.row_count < end_row:
            ws.resize(rows=end_row)
        col_range = f"{rowcol_to_a1(start_row, col)}:{rowcol_to_a1(end_row, col)}"
        ws.update(
            values=[[_cell_value(v)] for v in values],
            range_name=col_range,
            value_input_option=VALUE_INPUT_OPTION,
        )

    def _append_row(self, name: str, values: Sequence[Any]) -> None:
        self._worksheet(name).append_row(
            [_cell_value(v) for v in values],
            value_input_option=VALUE_INPUT_OPTION,
        )

    # ------------------------
    # TableAccess
    # ------------------------

    async def has_sheet(self, name: str) -> bool:
        return await self._call(self._has_sheet, name)

    async def create_sheet(self, name: str) -> None:
        await self._call(self._create_sheet, name)

    async def read_all(self, name: str) -> list[list[Any]]:
        return await self._call(self._read_all, name)

    async def read_row(self, name: str, row: int) -> list[Any]:
        return await self._call(self._read_row, name, row)

    async def write_row(self, name: str, row: int, values: Sequence[Any], *, bold: bool = False) -> None:
        await self._call(self._write_row, name, row, values, bold)

    async def write_cell(self, name: str, row: int, col: int, value: Any) -> None:
        await self._call(self._write_cell, name, row, col, value)

    async def write_column(self, name: str, col: int, start_row: int, values: Sequence[Any]) -> None:
        await self._call(self._write_column, name, col, start_row, values)

    async def append_row(self, name: str, values: Sequence[Any]) -> None:
        await self._call(self._append_row, name, values)
