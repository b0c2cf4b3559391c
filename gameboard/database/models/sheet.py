# gameboard/database/models/sheet.py
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gameboard.database.base import Base


class Sheet(Base):
    """
    A named table of rows, addressed like a spreadsheet tab.
    """
    __tablename__ = "sheets"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())

    rows: Mapped[list["SheetRow"]] = relationship(
        "SheetRow",
        back_populates="sheet",
        cascade="all, delete-orphan",
        order_by="SheetRow.row_index",
    )


class SheetRow(Base):
    """
    One row of a sheet. row_index is 1-based; row 1 is the header.
    """
    __tablename__ = "sheet_rows"
    __table_args__ = (
        UniqueConstraint("sheet_id", "row_index", name="uq_sheet_rows_sheet_row"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    sheet_id: Mapped[int] = mapped_column(ForeignKey("sheets.id", ondelete="CASCADE"), index=True)

    row_index: Mapped[int] = mapped_column(Integer)
    cells: Mapped[list[Any]] = mapped_column(JSON, default=list)
    is_bold: Mapped[bool] = mapped_column(Boolean, default=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )

    sheet: Mapped["Sheet"] = relationship("Sheet", back_populates="rows")
