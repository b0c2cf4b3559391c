# gameboard/tables/__init__.py
"""
Table access port.

Services only ever see a `TableAccess`: named sheets of loosely typed
cells, addressed with 1-based row/column numbers the way a spreadsheet is.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Sequence

if TYPE_CHECKING:
    from gameboard.config.settings import Settings
    from gameboard.database.session import Database


class TableAccess(Protocol):
    async def has_sheet(self, name: str) -> bool: ...

    async def create_sheet(self, name: str) -> None: ...

    async def read_all(self, name: str) -> list[list[Any]]: ...

    async def read_row(self, name: str, row: int) -> list[Any]: ...

    async def write_row(self, name: str, row: int, values: Sequence[Any], *, bold: bool = False) -> None: ...

    async def write_cell(self, name: str, row: int, col: int, value: Any) -> None: ...

    async def write_column(self, name: str, col: int, start_row: int, values: Sequence[Any]) -> None: ...

    async def append_row(self, name: str, values: Sequence[Any]) -> None: ...


def pad_rows(rows: list[list[Any]]) -> list[list[Any]]:
    """Pads short rows with "" so the range is rectangular."""
    width = max((len(r) for r in rows), default=0)
    return [list(r) + [""] * (width - len(r)) for r in rows]


async def build_table_store(settings: "Settings", db: "Database | None" = None) -> TableAccess:
    """
    Backend selected by settings.storage_backend.
    """
    if settings.storage_backend == "gsheets":
        from gameboard.tables.gsheets_store import GoogleSheetStore

        return await GoogleSheetStore.connect(
            settings.service_account_file,
            settings.spreadsheet_id or "",
        )

    from gameboard.tables.sql_store import SqlTableStore

    if db is None:
        raise RuntimeError("SQL storage backend needs a Database")
    return SqlTableStore(db)


__all__ = ["TableAccess", "build_table_store", "pad_rows"]
