"""Auto-join plugin: joins channels once the server has sent its MOTD."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ircbot.exceptions import PluginError
from ircbot.plugins.base import AbstractPlugin

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ircbot.irc.client import WriteStream
    from ircbot.irc.events import ServerEvent
    from ircbot.plugins.base import EventCallback


def _split(value: str | Sequence[str]) -> list[str]:
    if isinstance(value, str):
        return [item for item in value.split(",") if item]
    return list(value)


class AutoJoinPlugin(AbstractPlugin):
    def __init__(
        self, channels: str | Sequence[str], keys: str | Sequence[str] = ()
    ) -> None:
        self.channels = _split(channels)
        self.keys = _split(keys)
        if not self.channels:
            raise PluginError("AutoJoinPlugin needs at least one channel")
        if self.keys and len(self.keys) != len(self.channels):
            raise PluginError("AutoJoinPlugin keys must match channels one to one")

    def get_subscribed_events(self) -> Mapping[str, EventCallback]:
        # Some servers skip the MOTD and send ERR_NOMOTD instead
        return {
            "received.rpl_endofmotd": self.join_channels,
            "received.err_nomotd": self.join_channels,
        }

    def join_channels(self, event: ServerEvent, write: WriteStream) -> None:
        write.join(self.channels, self.keys)
        self.logger.info("autojoin_channels", channels=self.channels)
