"""Bot: validates configuration, builds the dispatch topology, runs the client."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog

from ircbot.core.config import CONNECTIONS_KEY, PLUGINS_KEY, config_list
from ircbot.core.dispatcher import Dispatcher
from ircbot.irc.client import Client

if TYPE_CHECKING:
    from ircbot.core.config import BotConfig
    from ircbot.core.events import EventBus
    from ircbot.irc.base import ClientInterface, ConverterInterface, ParserInterface

logger = structlog.get_logger()


class Bot:
    def __init__(
        self,
        config: BotConfig | None = None,
        *,
        client: ClientInterface | None = None,
        logger: Any = None,
        parser: ParserInterface | None = None,
        converter: ConverterInterface | None = None,
    ) -> None:
        self._config: BotConfig = config if config is not None else {}
        self._client = client
        self._logger = logger
        self._dispatcher = Dispatcher(parser=parser, converter=converter)

    @property
    def config(self) -> BotConfig:
        return self._config

    @config.setter
    def config(self, value: BotConfig) -> None:
        self._config = value

    @property
    def client(self) -> ClientInterface:
        if self._client is None:
            self._client = Client(parser=self.parser)
        return self._client

    @client.setter
    def client(self, value: ClientInterface) -> None:
        self._client = value

    @property
    def logger(self) -> Any:
        """The injected logger, falling back to the client's."""
        if self._logger is None:
            return self.client.logger
        return self._logger

    @logger.setter
    def logger(self, value: Any) -> None:
        self._logger = value

    @property
    def parser(self) -> ParserInterface:
        return self._dispatcher.parser

    @parser.setter
    def parser(self, value: ParserInterface) -> None:
        self._dispatcher.parser = value

    @property
    def converter(self) -> ConverterInterface:
        return self._dispatcher.converter

    @converter.setter
    def converter(self, value: ConverterInterface) -> None:
        self._dispatcher.converter = value

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def event_bus(self) -> EventBus:
        """Global routed channels, e.g. ``received.all`` or ``sent.privmsg``."""
        return self._dispatcher.event_bus

    def setup(self) -> None:
        """Validate the configuration and build the dispatch topology.

        Raises ConfigError or PluginError for the first violation found.
        """
        self._dispatcher.validate(self._config).raise_for_error()
        self._dispatcher.setup(self._config, self.client, self.logger)
        logger.info(
            "bot_setup_complete",
            plugin_count=len(config_list(self._config, PLUGINS_KEY)),
            connection_count=len(config_list(self._config, CONNECTIONS_KEY)),
        )

    def run(self, connections: Sequence[Any] | None = None) -> None:
        self.setup()
        if connections is None:
            connections = config_list(self._config, CONNECTIONS_KEY)
        logger.info("bot_starting", connection_count=len(connections))
        self.client.run(connections)
