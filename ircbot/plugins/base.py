"""Plugin protocols for extending the bot."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

import structlog

EventCallback = Callable[..., Any]


@runtime_checkable
class PluginInterface(Protocol):
    def get_subscribed_events(self) -> Mapping[str, EventCallback]:
        """Return event name -> handler, e.g. {"received.privmsg": self.on_privmsg}."""
        ...


@runtime_checkable
class InjectablePlugin(Protocol):
    """Plugins that want the client emitter and a logger handed to them at setup."""

    def set_event_emitter(self, emitter: Any) -> None: ...

    def set_logger(self, logger: Any) -> None: ...


class AbstractPlugin(ABC):
    """Convenience base class implementing both plugin protocols."""

    _emitter: Any = None
    _logger: Any = None

    @abstractmethod
    def get_subscribed_events(self) -> Mapping[str, EventCallback]: ...

    def set_event_emitter(self, emitter: Any) -> None:
        self._emitter = emitter

    def set_logger(self, logger: Any) -> None:
        self._logger = logger

    @property
    def emitter(self) -> Any:
        return self._emitter

    @property
    def logger(self) -> Any:
        if self._logger is None:
            self._logger = structlog.get_logger()
        return self._logger
