"""Server connection settings, optionally carrying connection-scoped plugins."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class ConnectionInterface(Protocol):
    def get_plugins(self) -> list[Any]: ...


# Intentionally mutable and compared by identity when routing events.
class Connection(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    server_hostname: str
    server_port: int = 6667
    nickname: str
    username: str
    realname: str = ""
    password: str | None = None
    hostname: str = "0.0.0.0"
    servername: str = "*"
    options: dict[str, Any] = Field(default_factory=dict)
    plugins: list[Any] = Field(default_factory=list)

    @property
    def mask(self) -> str:
        return f"{self.nickname}!{self.username}@{self.server_hostname}"

    def get_plugins(self) -> list[Any]:
        return list(self.plugins)

    def get_option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)
