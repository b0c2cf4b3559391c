from aiogram import Router

from gameboard.handlers.games import router as games_router
from gameboard.handlers.leaderboard import router as leaderboard_router
from gameboard.handlers.common import router as common_router

router = Router()

router.include_router(games_router)
router.include_router(leaderboard_router)
router.include_router(common_router)  # ✅ LAST = fallback only
