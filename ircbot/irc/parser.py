"""Line parser: one raw IRC line in, one structured message dict out."""

from __future__ import annotations

from typing import Any

from ircbot.irc.replies import reply_name

CTCP_DELIMITER = "\x01"

# Commands whose first parameter is a comma-separated target list
_TARGETED_COMMANDS = frozenset(
    {"PRIVMSG", "NOTICE", "JOIN", "PART", "KICK", "MODE", "TOPIC", "NAMES"}
)

_TAG_ESCAPES = {":": ";", "s": " ", "\\": "\\", "r": "\r", "n": "\n"}


def _unescape_tag_value(value: str) -> str:
    out: list[str] = []
    chars = iter(value)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append(_TAG_ESCAPES.get(nxt, nxt))
    return "".join(out)


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        if "=" in tag:
            k, v = tag.split("=", 1)
        else:
            k, v = tag, ""
        tags[k] = _unescape_tag_value(v)
    return tags


def _parse_prefix(prefix: str) -> dict[str, str]:
    if "!" in prefix or "@" in prefix:
        nick, _, rest = prefix.partition("!")
        user, _, host = rest.partition("@")
        if "@" in nick:
            nick, _, host = nick.partition("@")
        parsed = {"nick": nick}
        if user:
            parsed["user"] = user
        if host:
            parsed["host"] = host
        return parsed
    if "." in prefix:
        return {"servername": prefix}
    return {"nick": prefix}


def _split_params(rest: str) -> list[str]:
    params: list[str] = []
    while rest:
        if rest.startswith(":"):
            params.append(rest[1:])
            break
        head, _, rest = rest.partition(" ")
        if head:
            params.append(head)
        rest = rest.lstrip(" ")
    return params


def _parse_ctcp(text: str) -> dict[str, str] | None:
    if len(text) < 2 or not text.startswith(CTCP_DELIMITER):
        return None
    body = text[1:]
    if body.endswith(CTCP_DELIMITER):
        body = body[:-1]
    command, _, args = body.partition(" ")
    if not command:
        return None
    return {"command": command.upper(), "args": args}


class Parser:
    def parse(self, line: str) -> dict[str, Any] | None:
        """Parse *line*; returns None for blank lines or lines without a command."""
        message = line.rstrip("\r\n")
        rest = message.lstrip(" ")
        if not rest:
            return None

        parsed: dict[str, Any] = {"message": message, "tags": {}}

        if rest.startswith("@"):
            raw_tags, _, rest = rest.partition(" ")
            parsed["tags"] = _parse_tags(raw_tags[1:])
            rest = rest.lstrip(" ")

        if rest.startswith(":"):
            prefix, _, rest = rest[1:].partition(" ")
            parsed["prefix"] = prefix
            parsed.update(_parse_prefix(prefix))
            rest = rest.lstrip(" ")

        command, _, rest = rest.partition(" ")
        if not command:
            return None
        command = command.upper()
        params = _split_params(rest.lstrip(" "))
        parsed["command"] = command
        parsed["params"] = params

        if command.isdigit() and len(command) == 3:
            parsed["code"] = reply_name(command)
            parsed["targets"] = params[:1]
        elif command in _TARGETED_COMMANDS and params:
            parsed["targets"] = [t for t in params[0].split(",") if t]
        else:
            parsed["targets"] = []

        if command in ("PRIVMSG", "NOTICE") and len(params) > 1:
            ctcp = _parse_ctcp(params[-1])
            if ctcp is not None:
                parsed["ctcp"] = ctcp

        return parsed
