from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from aiogram.utils.text_decorations import html_decoration as hd

from gameboard.keyboards.main import BTN_GAMES
from gameboard.services.games import GameRecord, GameScheduler
from gameboard.utils.reply import reply_safe

router = Router(name="games")


def render_game(game: GameRecord) -> str:
    lines = [f"🎮 <b>{hd.quote(game.title or 'Untitled game')}</b>"]
    if game.week_start:
        lines.append(f"📅 Week of {game.week_start}")
    if game.prompt:
        lines.append("")
        lines.append(hd.quote(game.prompt))
    if game.instructions:
        lines.append("")
        lines.append(f"📝 {hd.quote(game.instructions)}")
    if game.input_placeholder:
        lines.append(f"✏️ <i>{hd.quote(game.input_placeholder)}</i>")
    return "\n".join(lines)


@router.message(F.text == BTN_GAMES)
@router.message(Command("games"))
async def games_cmd(message: Message, games: GameScheduler) -> None:
    active = await games.get_active_games()
    if not active:
        await reply_safe(message, "ℹ️ No games this week. Check back on Friday!")
        return

    await reply_safe(message, "\n\n".join(render_game(g) for g in active))
