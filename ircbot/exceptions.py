"""Shared exception types for ircbot."""


class IrcBotError(Exception):
    """Base exception for all ircbot errors."""


class ConfigError(IrcBotError):
    """Configuration is invalid or missing."""


class PluginError(IrcBotError):
    """A plugin does not honor the subscription contract."""


class ClientError(IrcBotError):
    """The reference client failed to talk to a server."""
