# gameboard/handlers/common.py
from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from gameboard.utils.reply import reply_safe

router = Router(name="common")

HELP_TEXT = (
    "📌 Available commands:\n"
    "/games — this week's games\n"
    "/leaderboard — current standings\n"
    "/score &lt;name&gt; &lt;points&gt; — add points (negative to subtract)\n"
    "/help — this message"
)


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    await reply_safe(
        message,
        "👋 Welcome!\n\n"
        "A new game goes live every Friday.\n"
        "Use /help to see commands.",
    )


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await reply_safe(message, HELP_TEXT)
