import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from santadraft.db.session import IN_MEMORY_URL
from santadraft.services.assignment import DEFAULT_MAX_ATTEMPTS

load_dotenv()


@dataclass(frozen=True)
class Settings:
    bot_token: Optional[str]
    database_url: str
    log_level: str
    log_path: str
    web_host: str
    web_port: int
    solver_max_attempts: int
    rate_limit_calls: int
    rate_limit_period: int


def _int_env(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}.")
    return value


def load_settings() -> Settings:
    return Settings(
        bot_token=os.getenv("BOT_TOKEN") or None,
        database_url=os.getenv("DATABASE_URL") or IN_MEMORY_URL,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_path=os.getenv("LOG_PATH", "logs/santa_draft.log"),
        web_host=os.getenv("WEB_HOST", "0.0.0.0"),
        web_port=_int_env("WEB_PORT", 8080),
        solver_max_attempts=_int_env("SOLVER_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
        rate_limit_calls=_int_env("RATE_LIMIT_CALLS", 5),
        rate_limit_period=_int_env("RATE_LIMIT_PERIOD", 10),
    )

