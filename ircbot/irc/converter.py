"""Converts parser output into typed events."""

from __future__ import annotations

from typing import Any

from ircbot.irc.events import CtcpEvent, Event, ServerEvent, UserEvent


class ParserConverter:
    def convert(self, message: dict[str, Any]) -> Event:
        common: dict[str, Any] = {
            "message": message.get("message", ""),
            "prefix": message.get("prefix"),
            "command": message.get("command", ""),
            "params": list(message.get("params", [])),
            "tags": dict(message.get("tags", {})),
        }

        if "ctcp" in message:
            ctcp = message["ctcp"]
            return CtcpEvent(
                **common,
                **self._user_fields(message),
                ctcp_command=ctcp.get("command", ""),
                ctcp_args=ctcp.get("args", ""),
            )

        if "code" in message:
            return ServerEvent(
                **common,
                code=message["code"],
                servername=message.get("servername"),
                targets=list(message.get("targets", [])),
            )

        return UserEvent(**common, **self._user_fields(message))

    @staticmethod
    def _user_fields(message: dict[str, Any]) -> dict[str, Any]:
        return {
            "nick": message.get("nick"),
            "username": message.get("user"),
            "host": message.get("host"),
            "targets": list(message.get("targets", [])),
        }
