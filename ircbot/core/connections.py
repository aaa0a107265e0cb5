"""Connection registry: configured connections and their scoped event buses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ircbot.core.events import EventBus

if TYPE_CHECKING:
    from ircbot.connection import ConnectionInterface

logger = structlog.get_logger()


def connection_label(connection: object) -> str:
    return getattr(connection, "mask", None) or repr(connection)


class ConnectionRegistry:
    def __init__(self) -> None:
        # Keyed by id(); connections are routed by identity, not equality
        self._connections: dict[int, tuple[ConnectionInterface, EventBus]] = {}

    def register(self, connection: ConnectionInterface) -> EventBus:
        entry = self._connections.get(id(connection))
        if entry is not None and entry[0] is connection:
            logger.warning(
                "connection_already_registered", connection=connection_label(connection)
            )
            return entry[1]
        bus = EventBus()
        self._connections[id(connection)] = (connection, bus)
        logger.info("connection_registered", connection=connection_label(connection))
        return bus

    def get(self, connection: object) -> EventBus | None:
        entry = self._connections.get(id(connection))
        if entry is None or entry[0] is not connection:
            return None
        return entry[1]

    @property
    def connections(self) -> list[ConnectionInterface]:
        return [connection for connection, _ in self._connections.values()]

    def __contains__(self, connection: object) -> bool:
        return self.get(connection) is not None

    def __len__(self) -> int:
        return len(self._connections)

    def clear(self) -> None:
        self._connections.clear()
