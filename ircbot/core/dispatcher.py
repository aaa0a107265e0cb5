"""Dispatcher: turns client channel firings into routed plugin handler calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from ircbot.core.classifier import channel_names
from ircbot.core.config import CONNECTIONS_KEY, PLUGINS_KEY, config_list
from ircbot.core.connections import ConnectionRegistry, connection_label
from ircbot.core.events import RECEIVED, SENT, EventBus
from ircbot.core.subscriptions import SubscriptionTable, plugin_class_name
from ircbot.core.validation import ValidationResult, validate_config
from ircbot.irc.converter import ParserConverter
from ircbot.irc.parser import Parser
from ircbot.plugins.base import InjectablePlugin

if TYPE_CHECKING:
    from ircbot.core.config import BotConfig
    from ircbot.irc.base import ClientInterface, ConverterInterface, ParserInterface
    from ircbot.irc.client import WriteStream
    from ircbot.irc.events import Event
    from ircbot.plugins.base import PluginInterface

logger = structlog.get_logger()


class Dispatcher:
    def __init__(
        self,
        parser: ParserInterface | None = None,
        converter: ConverterInterface | None = None,
    ) -> None:
        self.parser: ParserInterface = parser or Parser()
        self.converter: ConverterInterface = converter or ParserConverter()
        self.event_bus = EventBus()
        self.subscriptions = SubscriptionTable()
        self.connections = ConnectionRegistry()
        self._client: ClientInterface | None = None

    def validate(self, config: BotConfig) -> ValidationResult:
        self.subscriptions.clear()
        return validate_config(config, self.subscriptions)

    def setup(
        self, config: BotConfig, client: ClientInterface, bot_logger: Any
    ) -> None:
        """Build the routing topology from a config that passed ``validate()``.

        Safe to call again with the same config: buses and the registry are
        rebuilt, and only the most recent client stays wired to the dispatcher.
        """
        self.event_bus.clear()
        self.connections.clear()

        for plugin in config_list(config, PLUGINS_KEY):
            self._inject(plugin, client, bot_logger)
            self._subscribe(self.event_bus, plugin)

        for connection in config_list(config, CONNECTIONS_KEY):
            bus = self.connections.register(connection)
            for plugin in connection.get_plugins():
                self._inject(plugin, client, bot_logger)
                self._subscribe(bus, plugin)

        self._wire(client)
        logger.info(
            "dispatcher_ready",
            global_channels=self.event_bus.event_names,
            connection_count=len(self.connections),
        )

    def _inject(
        self, plugin: PluginInterface, client: ClientInterface, bot_logger: Any
    ) -> None:
        if not isinstance(plugin, InjectablePlugin):
            return
        plugin.set_event_emitter(client)
        plugin.set_logger(bot_logger)

    def _subscribe(self, bus: EventBus, plugin: PluginInterface) -> None:
        if plugin not in self.subscriptions:
            # Not part of the validated config; derive now
            self.subscriptions.derive(plugin).raise_for_error()
        events = self.subscriptions.events_for(plugin)
        for event_name, callback in events.items():
            bus.subscribe(event_name, callback)
        logger.debug(
            "plugin_subscribed",
            plugin=plugin_class_name(plugin),
            events=list(events),
        )

    def _wire(self, client: ClientInterface) -> None:
        if self._client is client:
            return
        if self._client is not None:
            self._client.unsubscribe(RECEIVED, self.on_received)
            self._client.unsubscribe(SENT, self.on_sent)
            logger.info("client_unwired")
        client.subscribe(RECEIVED, self.on_received)
        client.subscribe(SENT, self.on_sent)
        self._client = client

    def on_received(
        self,
        message: Any,
        write: WriteStream,
        connection: Any,
        client_logger: Any = None,
    ) -> None:
        event = self.converter.convert(message)
        self.dispatch(RECEIVED, event, connection, write)

    def on_sent(self, message: Any, connection: Any, client_logger: Any = None) -> None:
        parsed = self.parser.parse(message)
        if parsed is None:
            logger.debug("sent_line_unparsable", line=message)
            return
        event = self.converter.convert(parsed)
        self.dispatch(SENT, event, connection)

    def dispatch(
        self,
        direction: str,
        event: Event,
        connection: Any,
        write: WriteStream | None = None,
    ) -> None:
        """Fan *event* out globally, then on the connection it occurred on."""
        event.connection = connection
        all_channel, subtype_channel = channel_names(direction, event)
        args: tuple[Any, ...] = (event, write) if direction == RECEIVED else (event,)

        logger.debug(
            "event_dispatch",
            channel=subtype_channel,
            connection=connection_label(connection),
        )

        self.event_bus.emit(all_channel, *args)
        self.event_bus.emit(subtype_channel, *args)

        scoped = self.connections.get(event.connection)
        if scoped is not None:
            scoped.emit(all_channel, *args)
            scoped.emit(subtype_channel, *args)
