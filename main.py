from __future__ import annotations

import asyncio

import uvloop
from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand, BotCommandScopeDefault
from aiohttp import web
from loguru import logger

from santadraft.bot import build_bot, build_dispatcher
from santadraft.core.config import Settings, load_settings
from santadraft.core.logging import setup_logging
from santadraft.db import DraftStore
from santadraft.services.drafts import DraftService
from santadraft.services.rate_limit import RateLimiter, rate_limiter
from santadraft.web import create_app


USERS_COMMANDS: dict[str, str] = {
    "start": "start",
    "draft": "create a draft",
    "drafts": "list drafts",
    "ticket": "show your recipient",
}


async def set_default_commands(bot: Bot) -> None:
    await bot.set_my_commands(
        [
            BotCommand(command=command, description=description)
            for command, description in USERS_COMMANDS.items()
        ],
        scope=BotCommandScopeDefault(),
    )


async def on_startup(bot: Bot) -> None:
    logger.info("bot starting...")

    await set_default_commands(bot)

    bot_info = await bot.get_me()

    logger.info("Name     - {name}", name=bot_info.full_name)
    logger.info("Username - @{username}", username=bot_info.username)
    logger.info("ID       - {id}", id=bot_info.id)

    logger.info("bot started")


async def on_shutdown(bot: Bot, dispatcher: Dispatcher) -> None:
    logger.info("bot stopping...")

    await dispatcher.storage.close()
    await bot.session.close()

    logger.info("bot stopped")


async def start_web(settings: Settings, service: DraftService) -> web.AppRunner:
    limiter = RateLimiter(settings.rate_limit_calls, settings.rate_limit_period)
    runner = web.AppRunner(create_app(service, limiter))
    await runner.setup()
    site = web.TCPSite(runner, settings.web_host, settings.web_port)
    await site.start()
    logger.info("API listening on {host}:{port}", host=settings.web_host, port=settings.web_port)
    return runner


async def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)
    rate_limiter.configure(settings.rate_limit_calls, settings.rate_limit_period)

    store = DraftStore(settings.database_url)
    service = DraftService(store, max_attempts=settings.solver_max_attempts)
    runner = await start_web(settings, service)

    try:
        if settings.bot_token:
            bot = build_bot(settings.bot_token)
            dp = build_dispatcher(service)
            dp.startup.register(on_startup)
            dp.shutdown.register(on_shutdown)
            await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
        else:
            logger.warning("BOT_TOKEN is not set, running the HTTP API only")
            await asyncio.Event().wait()
    finally:
        await runner.cleanup()
        store.close()


if __name__ == "__main__":
    if not getattr(asyncio, "debug", False):
        uvloop.install()

    asyncio.run(main())
