"""Per-plugin subscription table: event name -> handler, derived once per setup."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog

from ircbot.core.validation import ValidationResult

if TYPE_CHECKING:
    from ircbot.plugins.base import EventCallback, PluginInterface

logger = structlog.get_logger()


def plugin_class_name(plugin: Any) -> str:
    cls = type(plugin)
    return f"{cls.__module__}.{cls.__qualname__}"


class SubscriptionTable:
    def __init__(self) -> None:
        # id(plugin) -> (plugin, events); the plugin is held so its id stays unique
        self._entries: dict[int, tuple[PluginInterface, dict[str, EventCallback]]] = {}

    def derive(self, plugin: PluginInterface) -> ValidationResult:
        """Call ``get_subscribed_events()`` once and record the mapping if valid."""
        events = plugin.get_subscribed_events()
        name = plugin_class_name(plugin)
        if not isinstance(events, Mapping):
            return ValidationResult.plugin_error(
                f"Plugin of class {name} has getSubscribedEvents()"
                " implementation that does not return an array"
            )
        for event_name, callback in events.items():
            if not isinstance(event_name, str) or not callable(callback):
                return ValidationResult.plugin_error(
                    f"Plugin of class {name} returns non-string event name"
                    f' or invalid callback for event "{event_name}"'
                )
        self._entries[id(plugin)] = (plugin, dict(events))
        logger.debug("plugin_subscriptions_derived", plugin=name, events=list(events))
        return ValidationResult.success()

    def events_for(self, plugin: PluginInterface) -> dict[str, EventCallback]:
        entry = self._entries.get(id(plugin))
        if entry is None or entry[0] is not plugin:
            return {}
        return dict(entry[1])

    def __contains__(self, plugin: object) -> bool:
        entry = self._entries.get(id(plugin))
        return entry is not None and entry[0] is plugin

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
