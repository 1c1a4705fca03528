from __future__ import annotations

from loguru import logger

from santadraft.services.rate_limit import rate_limiter


def check_rate_limit(user_id: int, action: str) -> bool:
    key = f"{user_id}:{action}"
    result = rate_limiter.allow(key)
    return result.allowed


def log_handler_exception(action: str, user_id: int | None, chat_id: int | None, error: Exception) -> None:
    logger.bind(action=action, user_id=user_id, chat_id=chat_id).exception(
        "Handler error: {error}", error=str(error)
    )


def clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
