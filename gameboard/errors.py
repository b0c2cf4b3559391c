# gameboard/errors.py
from __future__ import annotations


class GameboardError(Exception):
    """Base class for every error raised by gameboard."""


class SchemaError(GameboardError):
    """
    A required column is missing from a sheet's header row.
    """

    def __init__(self, sheet: str, column: str) -> None:
        self.sheet = sheet
        self.column = column
        super().__init__(f"Sheet {sheet!r} is missing required column {column!r}")


class ValidationError(GameboardError, ValueError):
    """Caller supplied a blank name or a non-numeric score delta."""


class StorageUnavailableError(GameboardError, RuntimeError):
    """The backing table store (database or spreadsheet) cannot be used."""
