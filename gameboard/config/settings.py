# gameboard/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

STORAGE_BACKENDS = ("sql", "gsheets")


def _require(env: dict[str, str], key: str) -> str:
    v = env.get(key)
    if v is None or not v.strip():
        raise RuntimeError(f"Missing required environment variable: {key}")
    return v.strip()


def _to_int(value: str, key_name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid integer for {key_name}: {value!r}") from e


def _int_in_range(raw: str | None, key_name: str, default: int, lo: int, hi: int) -> int:
    raw = (raw or "").strip()
    if not raw:
        return default
    value = _to_int(raw, key_name)
    if not lo <= value <= hi:
        raise RuntimeError(f"{key_name} must be between {lo} and {hi}, got {value}")
    return value


def _check_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise RuntimeError(f"Unknown TIMEZONE: {name!r}") from e
    return name


@dataclass(frozen=True, slots=True)
class Settings:
    # --- required ---
    bot_token: str

    # --- storage ---
    storage_backend: str = "sql"  # sql | gsheets
    database_url: str = "sqlite+aiosqlite:///./gameboard.db"
    service_account_file: str = "service_account.json"
    spreadsheet_id: Optional[str] = None

    # --- scheduler / time ---
    timezone: str = "UTC"
    flip_hour: int = 0
    flip_minute: int = 5

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast for required or malformed fields.
        """
        load_dotenv()
        env = os.environ

        bot_token = _require(env, "BOT_TOKEN")

        storage_backend = (env.get("STORAGE_BACKEND") or "sql").strip().lower() or "sql"
        if storage_backend not in STORAGE_BACKENDS:
            raise RuntimeError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {storage_backend!r}"
            )

        database_url = (env.get("DATABASE_URL") or "sqlite+aiosqlite:///./gameboard.db").strip()
        service_account_file = (
            env.get("GOOGLE_SERVICE_ACCOUNT_FILE") or "service_account.json"
        ).strip()

        spreadsheet_id = (env.get("SPREADSHEET_ID") or "").strip() or None
        if storage_backend == "gsheets" and spreadsheet_id is None:
            raise RuntimeError("Missing required environment variable: SPREADSHEET_ID")

        timezone = _check_timezone((env.get("TIMEZONE") or "UTC").strip() or "UTC")
        flip_hour = _int_in_range(env.get("FLIP_HOUR"), "FLIP_HOUR", 0, 0, 23)
        flip_minute = _int_in_range(env.get("FLIP_MINUTE"), "FLIP_MINUTE", 5, 0, 59)

        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        return cls(
            bot_token=bot_token,
            storage_backend=storage_backend,
            database_url=database_url,
            service_account_file=service_account_file,
            spreadsheet_id=spreadsheet_id,
            timezone=timezone,
            flip_hour=flip_hour,
            flip_minute=flip_minute,
            environment=environment,
        )
