"""Shared fixtures for bot, dispatcher and client tests."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest

from ircbot.connection import Connection
from ircbot.core.config import BotSettings
from ircbot.irc.client import Client, WriteStream


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Prevent .env file and shell env from leaking into tests."""
    monkeypatch.setitem(BotSettings.model_config, "env_file", None)
    for key in list(os.environ):
        if key.startswith("IRCBOT_"):
            monkeypatch.delenv(key, raising=False)


class StaticPlugin:
    """Plugin returning whatever subscription mapping it was built with."""

    def __init__(self, events) -> None:
        self._events = events
        self.calls = 0

    def get_subscribed_events(self):
        self.calls += 1
        return self._events


class RecordingPlugin:
    """Plugin recording every (channel, args) it is called with."""

    def __init__(self, *event_names: str, label: str = "plugin") -> None:
        self.event_names = event_names
        self.label = label
        self.calls: list[tuple[str, tuple]] = []

    def get_subscribed_events(self):
        return {name: self._handler(name) for name in self.event_names}

    def _handler(self, name: str):
        def handle(*args):
            self.calls.append((name, args))

        handle.__name__ = f"{self.label}:{name}"
        return handle


def noop(*args) -> None:
    pass


@pytest.fixture
def valid_plugin():
    return StaticPlugin({"received.privmsg": noop})


@pytest.fixture
def make_connection():
    def _make(nickname: str = "ircbot", **kwargs) -> Connection:
        kwargs.setdefault("server_hostname", "irc.example.net")
        kwargs.setdefault("username", nickname)
        return Connection(nickname=nickname, **kwargs)

    return _make


@pytest.fixture
def connection(make_connection):
    return make_connection()


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def write():
    return MagicMock(spec=WriteStream)


@pytest.fixture
def mock_logger():
    return MagicMock()
