"""Bootstrap: logging setup and bot wiring."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from ircbot.bot import Bot
from ircbot.core.config import BotSettings
from ircbot.irc.client import Client

if TYPE_CHECKING:
    from ircbot.core.config import BotConfig
    from ircbot.irc.base import ClientInterface

LOG_FILE_NAME = "ircbot.log"


def _formatter(renderer: structlog.types.Processor) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )


def configure_logging(settings: BotSettings, *, log_dir: Path | None = None) -> None:
    """Route structlog and stdlib records through the console and optional JSON file.

    Loggers named in ``settings.quiet_loggers`` never log below WARNING.
    """
    level = logging.getLevelNamesMapping()[settings.log_level]

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_formatter(structlog.dev.ConsoleRenderer()))
    root_logger.addHandler(console_handler)

    log_dir = log_dir or settings.log_dir
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
        )
        file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        root_logger.addHandler(file_handler)

    for name in settings.quiet_loggers:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_bot(
    config: BotConfig,
    settings: BotSettings | None = None,
    client: ClientInterface | None = None,
) -> Bot:
    if settings is None:
        settings = BotSettings()

    configure_logging(settings)
    logger = structlog.get_logger()

    bot = Bot(config)
    if client is None:
        client = Client(parser=bot.parser, encoding=settings.encoding)
    bot.client = client

    logger.info(
        "bot_built",
        log_level=settings.log_level,
        log_dir=str(settings.log_dir) if settings.log_dir else None,
        custom_client=not isinstance(client, Client),
    )
    return bot
