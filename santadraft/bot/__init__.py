from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from santadraft.services.drafts import DraftService


def build_bot(token: str) -> Bot:
    return Bot(token=token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))


def build_dispatcher(service: DraftService) -> Dispatcher:
    from santadraft.bot.handlers import router as handlers_router

    dp = Dispatcher()
    dp["service"] = service
    dp.include_router(handlers_router)
    return dp
