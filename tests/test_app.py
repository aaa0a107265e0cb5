"""Tests for the build_bot() bootstrap function."""

from __future__ import annotations

import json
import logging
import logging.handlers
from unittest.mock import MagicMock, patch

import pytest
import structlog
from conftest import StaticPlugin, noop

from ircbot.app import build_bot, configure_logging
from ircbot.bot import Bot
from ircbot.core.config import BotSettings
from ircbot.irc.client import Client


def _patched_build_bot(*args, **kwargs):
    """Call build_bot with logging setup patched to avoid side effects."""
    with patch("ircbot.app.configure_logging"):
        return build_bot(*args, **kwargs)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    quiet_levels = {
        name: logging.getLogger(name).level for name in ("asyncio", "noisy")
    }
    yield
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestBuildBot:
    def test_returns_bot_with_default_client(self, connection):
        config = {"plugins": [StaticPlugin({"foo": noop})], "connections": [connection]}
        bot = _patched_build_bot(config)
        assert isinstance(bot, Bot)
        assert bot.config is config
        assert isinstance(bot.client, Client)

    def test_default_client_uses_settings_encoding(self):
        bot = _patched_build_bot({}, BotSettings(encoding="latin-1"))
        assert bot.client._encoding == "latin-1"

    def test_default_client_shares_bot_parser(self):
        bot = _patched_build_bot({})
        assert bot.client._parser is bot.parser

    def test_custom_client(self):
        client = MagicMock()
        bot = _patched_build_bot({}, client=client)
        assert bot.client is client
        assert bot.logger is client.logger

    def test_configures_logging_with_settings(self):
        settings = BotSettings(log_level="debug")
        with patch("ircbot.app.configure_logging") as configure:
            build_bot({}, settings)
        configure.assert_called_once_with(settings)


class TestConfigureLogging:
    def test_console_only_by_default(self, restore_logging):
        configure_logging(BotSettings(log_level="warning"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        formatter = root.handlers[0].formatter
        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)

    def test_rotating_file_handler(self, restore_logging, tmp_path):
        settings = BotSettings(log_max_bytes=1024, log_backup_count=2)
        log_dir = tmp_path / "logs"

        configure_logging(settings, log_dir=log_dir)

        file_handlers = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024
        assert file_handlers[0].backupCount == 2
        assert (log_dir / "ircbot.log").exists()

    def test_log_dir_from_settings(self, restore_logging, tmp_path):
        configure_logging(BotSettings(log_dir=tmp_path))
        assert (tmp_path / "ircbot.log").exists()

    def test_quiet_loggers_capped_at_warning(self, restore_logging):
        configure_logging(BotSettings(log_level="debug", quiet_loggers=["noisy"]))
        assert logging.getLogger("noisy").level == logging.WARNING
        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_loggers_follow_stricter_root_level(self, restore_logging):
        configure_logging(BotSettings(log_level="error"))
        assert logging.getLogger("asyncio").level == logging.ERROR

    def test_stdlib_records_carry_logger_name(self, restore_logging, tmp_path):
        configure_logging(BotSettings(log_dir=tmp_path))
        logging.getLogger("ircbot.test").warning("plain stdlib record")
        for handler in logging.getLogger().handlers:
            handler.flush()
        line = (tmp_path / "ircbot.log").read_text().strip().splitlines()[-1]
        record = json.loads(line)
        assert record["logger"] == "ircbot.test"
        assert record["level"] == "warning"
        assert record["event"] == "plain stdlib record"
