"""Typed IRC events produced by the converter."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Intentionally mutable: the dispatcher sets ``connection`` before fan-out.
class Event(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    message: str = ""
    prefix: str | None = None
    command: str = ""
    params: list[str] = Field(default_factory=list)
    tags: dict[str, str] = Field(default_factory=dict)
    connection: Any = None


class UserEvent(Event):
    """Originated by a user, or by us when the line was sent."""

    nick: str | None = None
    username: str | None = None
    host: str | None = None
    targets: list[str] = Field(default_factory=list)

    @property
    def source(self) -> str | None:
        """Where a reply should go: the channel, or the nick for private messages."""
        if self.targets and self.targets[0][:1] in ("#", "&", "+", "!"):
            return self.targets[0]
        return self.nick


class CtcpEvent(UserEvent):
    ctcp_command: str = ""
    ctcp_args: str = ""


class ServerEvent(Event):
    code: str = ""
    servername: str | None = None
    targets: list[str] = Field(default_factory=list)
