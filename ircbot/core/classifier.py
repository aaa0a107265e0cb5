"""Routes typed events to ``<direction>.<subtype>`` channel names."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ircbot.core.events import ALL
from ircbot.irc.events import CtcpEvent, ServerEvent, UserEvent

if TYPE_CHECKING:
    from ircbot.irc.events import Event


def classify(event: Event) -> str:
    # CtcpEvent subclasses UserEvent, so it must be matched first
    if isinstance(event, CtcpEvent):
        return f"ctcp.{event.ctcp_command.lower()}"
    if isinstance(event, UserEvent):
        return event.command.lower()
    if isinstance(event, ServerEvent):
        return event.code.lower()
    return event.command.lower()


def channel_names(direction: str, event: Event) -> tuple[str, str]:
    """Return the catch-all and subtype channels.

    e.g. ("received.all", "received.privmsg")
    """
    return f"{direction}.{ALL}", f"{direction}.{classify(event)}"
