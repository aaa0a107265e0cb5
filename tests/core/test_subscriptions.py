"""Tests for the per-plugin subscription table."""

from __future__ import annotations

import pytest
from conftest import StaticPlugin, noop

from ircbot.core.subscriptions import SubscriptionTable, plugin_class_name

_PREFIX = "Plugin of class conftest.StaticPlugin"


@pytest.fixture
def table():
    return SubscriptionTable()


class TestSubscriptionTable:
    def test_derive_valid_mapping(self, table):
        plugin = StaticPlugin({"received.privmsg": noop, "sent.all": noop})
        result = table.derive(plugin)
        assert result.ok
        assert table.events_for(plugin) == {"received.privmsg": noop, "sent.all": noop}

    def test_declaration_called_once(self, table):
        plugin = StaticPlugin({"received.privmsg": noop})
        table.derive(plugin)
        table.events_for(plugin)
        table.events_for(plugin)
        assert plugin.calls == 1

    def test_empty_mapping_is_valid(self, table):
        plugin = StaticPlugin({})
        assert table.derive(plugin).ok
        assert plugin in table
        assert table.events_for(plugin) == {}

    @pytest.mark.parametrize("value", ["foo", None, ["received.all"], 42])
    def test_non_mapping_rejected(self, table, value):
        result = table.derive(StaticPlugin(value))
        assert result.kind == "plugin"
        assert result.message == (
            f"{_PREFIX} has getSubscribedEvents() implementation"
            " that does not return an array"
        )

    @pytest.mark.parametrize(
        ("events", "key"),
        [
            ({0: noop}, "0"),
            ({("a", "b"): noop}, "('a', 'b')"),
            ({"foo": "foo"}, "foo"),
            ({"ok": noop, "bar": None}, "bar"),
        ],
    )
    def test_bad_entries_name_the_key(self, table, events, key):
        result = table.derive(StaticPlugin(events))
        assert result.message == (
            f"{_PREFIX} returns non-string event name or invalid callback"
            f' for event "{key}"'
        )

    def test_rejected_plugin_not_recorded(self, table):
        plugin = StaticPlugin({"foo": 1})
        table.derive(plugin)
        assert plugin not in table
        assert table.events_for(plugin) == {}

    def test_bound_methods_accepted(self, table):
        class Handler:
            def on_join(self, event, write):
                pass

        handler = Handler()
        plugin = StaticPlugin({"received.join": handler.on_join})
        assert table.derive(plugin).ok

    def test_events_for_returns_copy(self, table):
        plugin = StaticPlugin({"received.privmsg": noop})
        table.derive(plugin)
        table.events_for(plugin).clear()
        assert table.events_for(plugin) == {"received.privmsg": noop}

    def test_rederive_replaces_entry(self, table):
        plugin = StaticPlugin({"received.privmsg": noop})
        table.derive(plugin)
        plugin._events = {"received.join": noop}
        table.derive(plugin)
        assert table.events_for(plugin) == {"received.join": noop}
        assert len(table) == 1

    def test_clear(self, table):
        table.derive(StaticPlugin({}))
        table.clear()
        assert len(table) == 0

    def test_plugin_class_name_is_qualified(self):
        assert plugin_class_name(StaticPlugin({})) == "conftest.StaticPlugin"
