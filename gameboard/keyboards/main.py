# gameboard/keyboards/main.py
from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

BTN_GAMES = "🎮 Games"
BTN_LEADERBOARD = "🏆 Leaderboard"


def main_menu_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=BTN_GAMES), KeyboardButton(text=BTN_LEADERBOARD)],
        ],
        resize_keyboard=True,
        input_field_placeholder="Choose an action…",
        selective=False,
        one_time_keyboard=False,
    )
