"""Tests for the plugins shipped with the bot."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ircbot.exceptions import PluginError
from ircbot.irc.events import ServerEvent, UserEvent
from ircbot.plugins.builtin.autojoin import AutoJoinPlugin
from ircbot.plugins.builtin.pong import PongPlugin


class TestPongPlugin:
    def test_subscribes_to_ping(self):
        plugin = PongPlugin()
        assert plugin.get_subscribed_events() == {"received.ping": plugin.on_ping}

    def test_answers_ping(self, write):
        event = UserEvent(command="PING", params=["irc.example.net"])
        PongPlugin().on_ping(event, write)
        write.pong.assert_called_once_with("irc.example.net")

    def test_ping_without_params(self, write):
        PongPlugin().on_ping(UserEvent(command="PING"), write)
        write.pong.assert_called_once_with("")


class TestAutoJoinPlugin:
    def test_subscriptions(self):
        plugin = AutoJoinPlugin("#a")
        assert plugin.get_subscribed_events() == {
            "received.rpl_endofmotd": plugin.join_channels,
            "received.err_nomotd": plugin.join_channels,
        }

    def test_comma_separated_channels(self):
        assert AutoJoinPlugin("#a,#b,").channels == ["#a", "#b"]

    def test_joins_with_keys(self, write):
        plugin = AutoJoinPlugin(["#a", "#b"], keys=["k1", "k2"])
        plugin.set_logger(MagicMock())
        plugin.join_channels(ServerEvent(code="RPL_ENDOFMOTD"), write)
        write.join.assert_called_once_with(["#a", "#b"], ["k1", "k2"])

    @pytest.mark.parametrize("channels", ["", [], ","])
    def test_requires_channels(self, channels):
        with pytest.raises(PluginError, match="at least one channel"):
            AutoJoinPlugin(channels)

    def test_keys_must_match_channels(self):
        with pytest.raises(PluginError, match="one to one"):
            AutoJoinPlugin(["#a", "#b"], keys=["k1"])

    def test_comma_separated_keys(self, write):
        plugin = AutoJoinPlugin("#a,#b", "k1,k2")
        assert plugin.keys == ["k1", "k2"]
        plugin.set_logger(MagicMock())
        plugin.join_channels(ServerEvent(code="ERR_NOMOTD"), write)
        write.join.assert_called_once_with(["#a", "#b"], ["k1", "k2"])
