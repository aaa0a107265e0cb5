"""Minimal asyncio IRC client: one reader task per connection, no reconnects."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog

from ircbot.core.events import (
    CONNECT_AFTER_EACH,
    CONNECT_END,
    CONNECT_ERROR,
    RECEIVED,
    SENT,
    EventBus,
)
from ircbot.exceptions import ClientError
from ircbot.irc.parser import CTCP_DELIMITER, Parser

if TYPE_CHECKING:
    from ircbot.connection import Connection
    from ircbot.irc.base import ParserInterface

# One write is one IRC message on the wire
_FORBIDDEN_CHARS = ("\r", "\n", "\0")


class WriteStream:
    """Writes CRLF-terminated lines for one connection and fires ``sent``."""

    def __init__(
        self,
        writer: asyncio.StreamWriter,
        connection: Connection,
        client: Client,
        encoding: str = "utf-8",
    ) -> None:
        self._writer = writer
        self._connection = connection
        self._client = client
        self._encoding = encoding

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def closed(self) -> bool:
        return self._writer.is_closing()

    def write(self, line: str) -> None:
        line = line.rstrip("\r\n")
        if any(ch in line for ch in _FORBIDDEN_CHARS):
            raise ClientError(f"Line must not contain CR, LF or NUL: {line!r}")
        if self.closed:
            raise ClientError(f"Cannot write to closed stream: {line}")
        self._writer.write(f"{line}\r\n".encode(self._encoding))
        self._client.emit(SENT, line, self._connection, self._client.logger)

    def pass_(self, password: str) -> None:
        self.write(f"PASS {password}")

    def nick(self, nickname: str) -> None:
        self.write(f"NICK {nickname}")

    def user(
        self, username: str, hostname: str, servername: str, realname: str
    ) -> None:
        self.write(f"USER {username} {hostname} {servername} :{realname}")

    def join(self, channels: str | Sequence[str], keys: Sequence[str] = ()) -> None:
        if not isinstance(channels, str):
            channels = ",".join(channels)
        line = f"JOIN {channels}"
        if keys:
            line += " " + ",".join(keys)
        self.write(line)

    def part(self, channels: str | Sequence[str], message: str | None = None) -> None:
        if not isinstance(channels, str):
            channels = ",".join(channels)
        self.write(f"PART {channels}" + (f" :{message}" if message else ""))

    def privmsg(self, target: str, text: str) -> None:
        self.write(f"PRIVMSG {target} :{text}")

    def notice(self, target: str, text: str) -> None:
        self.write(f"NOTICE {target} :{text}")

    def ctcp_request(self, target: str, command: str, args: str = "") -> None:
        self.privmsg(target, self._ctcp(command, args))

    def ctcp_reply(self, target: str, command: str, args: str = "") -> None:
        self.notice(target, self._ctcp(command, args))

    def pong(self, server: str) -> None:
        self.write(f"PONG :{server}")

    def quit(self, message: str | None = None) -> None:
        self.write("QUIT" + (f" :{message}" if message else ""))

    @staticmethod
    def _ctcp(command: str, args: str) -> str:
        body = f"{command.upper()} {args}" if args else command.upper()
        return f"{CTCP_DELIMITER}{body}{CTCP_DELIMITER}"


class Client(EventBus):
    def __init__(
        self,
        *,
        parser: ParserInterface | None = None,
        logger: Any = None,
        encoding: str = "utf-8",
    ) -> None:
        super().__init__()
        self._parser: ParserInterface = parser or Parser()
        self._logger = logger or structlog.get_logger()
        self._encoding = encoding

    @property
    def logger(self) -> Any:
        return self._logger

    def run(self, connections: Sequence[Connection]) -> None:
        asyncio.run(self.run_async(connections))

    async def run_async(self, connections: Sequence[Connection]) -> None:
        await asyncio.gather(*(self._run_isolated(c) for c in connections))

    async def _run_isolated(self, connection: Connection) -> None:
        # A dead server must not cancel the reader tasks of healthy ones
        try:
            await self.handle_connection(connection)
        except ClientError as e:
            self._logger.warning(
                "connection_abandoned", connection=connection.mask, error=str(e)
            )

    async def handle_connection(self, connection: Connection) -> None:
        try:
            reader, writer = await asyncio.open_connection(
                connection.server_hostname, connection.server_port
            )
        except OSError as e:
            self._logger.error(
                "connect_failed",
                connection=connection.mask,
                error=str(e),
            )
            self.emit(CONNECT_ERROR, connection, e, self._logger)
            raise ClientError(f"Unable to connect to {connection.mask}: {e}") from e

        self._logger.info("connected", connection=connection.mask)
        write = WriteStream(writer, connection, self, self._encoding)
        try:
            self.emit(CONNECT_AFTER_EACH, connection, write)
            self.register(connection, write)
            await self.read_lines(reader, write, connection)
        finally:
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()
            self._logger.info("disconnected", connection=connection.mask)
            self.emit(CONNECT_END, connection, self._logger)

    def register(self, connection: Connection, write: WriteStream) -> None:
        if connection.password:
            write.pass_(connection.password)
        write.nick(connection.nickname)
        write.user(
            connection.username,
            connection.hostname,
            connection.servername,
            connection.realname or connection.nickname,
        )

    async def read_lines(
        self,
        reader: asyncio.StreamReader,
        write: WriteStream,
        connection: Connection,
    ) -> None:
        while raw := await reader.readline():
            line = raw.decode(self._encoding, errors="replace")
            self._logger.debug("line_received", line=line.rstrip("\r\n"))
            message = self._parser.parse(line)
            if message is None:
                continue
            self.emit(RECEIVED, message, write, connection, self._logger)
