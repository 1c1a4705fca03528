from aiogram import Router

from santadraft.bot.handlers import drafts, start

router = Router()
router.include_router(start.router)
router.include_router(drafts.router)
