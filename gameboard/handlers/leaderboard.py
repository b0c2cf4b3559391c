from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from aiogram.utils.text_decorations import html_decoration as hd

from gameboard.errors import ValidationError
from gameboard.keyboards.main import BTN_LEADERBOARD
from gameboard.services.leaderboard import LeaderboardEntry, LeaderboardStore
from gameboard.utils.reply import reply_safe

log = logging.getLogger(__name__)
router = Router(name="leaderboard")

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def _fmt_score(score: int | float) -> str:
    if isinstance(score, float):
        return f"{score:g}"
    return str(score)


def render_leaderboard(entries: list[LeaderboardEntry], highlight: str | None = None) -> str:
    """
    Highest score first. Ties keep storage order.
    """
    lines = ["🏆 <b>Leaderboard</b>", ""]

    if not entries:
        lines.append("ℹ️ No scores yet.")
        return "\n".join(lines)

    ranked = sorted(entries, key=lambda e: e.score, reverse=True)
    for i, entry in enumerate(ranked, start=1):
        medal = MEDALS.get(i, f"{i}.")
        you = " ⬅️" if highlight is not None and entry.name == highlight else ""
        lines.append(f"{medal} {hd.quote(entry.name)} — <b>{_fmt_score(entry.score)}</b> pts{you}")

    return "\n".join(lines)


def parse_score_args(raw: str | None) -> tuple[str, str] | None:
    # "/score Ann Lee 5" -> ("Ann Lee", "5")
    parts = (raw or "").strip().rsplit(maxsplit=1)
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


@router.message(F.text == BTN_LEADERBOARD)
@router.message(Command("leaderboard"))
async def leaderboard_cmd(message: Message, leaderboard: LeaderboardStore) -> None:
    entries = await leaderboard.get_leaderboard()
    await reply_safe(message, render_leaderboard(entries))


@router.message(Command("score"))
async def score_cmd(message: Message, command: CommandObject, leaderboard: LeaderboardStore) -> None:
    parsed = parse_score_args(command.args)
    if parsed is None:
        await reply_safe(message, "Usage: /score &lt;name&gt; &lt;points&gt;")
        return

    name, delta = parsed
    try:
        entries = await leaderboard.record_score(name, delta)
    except ValidationError as e:
        await reply_safe(message, f"❌ {hd.quote(str(e))}")
        return

    await reply_safe(message, render_leaderboard(entries, highlight=name.strip()))
