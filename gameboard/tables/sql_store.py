# gameboard/tables/sql_store.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any, AsyncIterator, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from gameboard.database.models import Sheet, SheetRow
from gameboard.database.session import Database
from gameboard.database.tx import transactional
from gameboard.errors import StorageUnavailableError
from gameboard.tables import pad_rows

log = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    # cells are stored in a JSON column
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _with_cell(cells: Sequence[Any], col: int, value: Any) -> list[Any]:
    out = list(cells)
    if len(out) < col:
        out.extend([""] * (col - len(out)))
    out[col - 1] = _jsonable(value)
    return out


class SqlTableStore:
    """
    TableAccess over the sheets/sheet_rows tables.

    Every call opens its own session; writes run in one transaction.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self.db.session() as session:
                yield session
        except DBAPIError as e:
            raise StorageUnavailableError(f"Table store unavailable: {e}") from e

    @staticmethod
    async def _sheet_id(session: AsyncSession, name: str) -> int:
        res = await session.execute(select(Sheet.id).where(Sheet.name == name))
        sheet_id = res.scalar_one_or_none()
        if sheet_id is None:
            raise StorageUnavailableError(f"Sheet {name!r} does not exist")
        return int(sheet_id)

    @staticmethod
    async def _get_row(session: AsyncSession, sheet_id: int, row: int) -> SheetRow | None:
        res = await session.execute(
            select(SheetRow).where(
                SheetRow.sheet_id == sheet_id,
                SheetRow.row_index == row,
            )
        )
        return res.scalar_one_or_none()

    async def _get_or_create_row(self, session: AsyncSession, sheet_id: int, row: int) -> SheetRow:
        existing = await self._get_row(session, sheet_id, row)
        if existing is not None:
            return existing

        created = SheetRow(sheet_id=sheet_id, row_index=row, cells=[], is_bold=False)
        session.add(created)
        await session.flush()
        return created

    # ------------------------
    # TableAccess
    # ------------------------

    async def has_sheet(self, name: str) -> bool:
        async with self._session() as session:
            res = await session.execute(select(Sheet.id).where(Sheet.name == name))
            return res.scalar_one_or_none() is not None

    async def create_sheet(self, name: str) -> None:
        async with self._session() as session:
            async with transactional(session):
                res = await session.execute(select(Sheet.id).where(Sheet.name == name))
                if res.scalar_one_or_none() is not None:
                    return
                session.add(Sheet(name=name))
        log.info("Created sheet %s", name)

    async def read_all(self, name: str) -> list[list[Any]]:
        async with self._session() as session:
            sheet_id = await self._sheet_id(session, name)
            res = await session.execute(
                select(SheetRow.row_index, SheetRow.cells)
                .where(SheetRow.sheet_id == sheet_id)
                .order_by(SheetRow.row_index.asc())
            )
            stored = {int(idx): list(cells or []) for idx, cells in res.all()}

        if not stored:
            return []

        last = max(stored)
        return pad_rows([stored.get(i, []) for i in range(1, last + 1)])

    async def read_row(self, name: str, row: int) -> list[Any]:
        async with self._session() as session:
            sheet_id = await self._sheet_id(session, name)
            found = await self._get_row(session, sheet_id, row)
            return list(found.cells or []) if found else []

    async def write_row(self, name: str, row: int, values: Sequence[Any], *, bold: bool = False) -> None:
        async with self._session() as session:
            async with transactional(session):
                sheet_id = await self._sheet_id(session, name)
                target = await self._get_or_create_row(session, sheet_id, row)
                target.cells = [_jsonable(v) for v in values]
                target.is_bold = bold

    async def write_cell(self, name: str, row: int, col: int, value: Any) -> None:
        async with self._session() as session:
            async with transactional(session):
                sheet_id = await self._sheet_id(session, name)
                target = await self._get_or_create_row(session, sheet_id, row)
                target.cells = _with_cell(target.cells or [], col, value)

    async def write_column(self, name: str, col: int, start_row: int, values: Sequence[Any]) -> None:
        async with self._session() as session:
            async with transactional(session):
                sheet_id = await self._sheet_id(session, name)
                for offset, value in enumerate(values):
                    target = await self._get_or_create_row(session, sheet_id, start_row + offset)
                    target.cells = _with_cell(target.cells or [], col, value)

    async def append_row(self, name: str, values: Sequence[Any]) -> None:
        async with self._session() as session:
            async with transactional(session):
                sheet_id = await self._sheet_id(session, name)
                res = await session.execute(
                    select(func.max(SheetRow.row_index)).where(SheetRow.sheet_id == sheet_id)
                )
                last = res.scalar_one_or_none() or 0
                session.add(
                    SheetRow(
                        sheet_id=sheet_id,
                        row_index=int(last) + 1,
                        cells=[_jsonable(v) for v in values],
                        is_bold=False,
                    )
                )
