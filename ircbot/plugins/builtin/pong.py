"""Pong plugin: answers server PINGs so the connection stays alive."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ircbot.plugins.base import AbstractPlugin

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ircbot.irc.client import WriteStream
    from ircbot.irc.events import UserEvent
    from ircbot.plugins.base import EventCallback


class PongPlugin(AbstractPlugin):
    def get_subscribed_events(self) -> Mapping[str, EventCallback]:
        return {"received.ping": self.on_ping}

    def on_ping(self, event: UserEvent, write: WriteStream) -> None:
        server = event.params[0] if event.params else ""
        write.pong(server)
        self.logger.debug("ping_answered", server=server)
