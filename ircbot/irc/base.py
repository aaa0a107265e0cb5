"""Protocols for the collaborators the dispatcher consumes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ircbot.irc.events import Event


@runtime_checkable
class ParserInterface(Protocol):
    def parse(self, line: str) -> dict[str, Any] | None: ...


@runtime_checkable
class ConverterInterface(Protocol):
    def convert(self, message: dict[str, Any]) -> Event: ...


@runtime_checkable
class ClientInterface(Protocol):
    """Fires ``received(message, write, connection, logger)`` and
    ``sent(line, connection, logger)``."""

    @property
    def logger(self) -> Any: ...

    def subscribe(self, event_name: str, handler: Callable[..., Any]) -> None: ...

    def unsubscribe(self, event_name: str, handler: Callable[..., Any]) -> None: ...

    def emit(self, event_name: str, *args: Any) -> None: ...

    def run(self, connections: Sequence[Any]) -> None: ...
