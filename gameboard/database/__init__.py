# gameboard/database/__init__.py
from __future__ import annotations

from .session import Database

__all__ = ["Database"]
