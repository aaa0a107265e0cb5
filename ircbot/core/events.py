"""Channel-keyed event bus used for client channels and plugin routing."""

from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger()

# Generic channels fired by the client
RECEIVED = "received"
SENT = "sent"

# Client lifecycle channels
CONNECT_AFTER_EACH = "connect.after.each"
CONNECT_END = "connect.end"
CONNECT_ERROR = "connect.error"

# Routed catch-all suffix, e.g. "received.all"
ALL = "all"


EventHandler = Callable[..., Any]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def listeners(self, event_name: str) -> list[EventHandler]:
        return list(self._handlers.get(event_name, []))

    @property
    def event_names(self) -> list[str]:
        return [name for name, handlers in self._handlers.items() if handlers]

    def clear(self) -> None:
        self._handlers.clear()

    def emit(self, event_name: str, *args: Any) -> None:
        """Call every handler for *event_name* in subscription order.

        Handler exceptions are not caught: the caller decides what a
        failing handler means.
        """
        for handler in self.listeners(event_name):
            logger.debug(
                "event_handler_call",
                event_name=event_name,
                handler_name=getattr(handler, "__name__", repr(handler)),
            )
            handler(*args)
