"""Setup validation pipeline for the bot configuration.

Checks run in a fixed order and the first failure wins, so callers always
see exactly one message describing the earliest problem.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict

from ircbot.connection import ConnectionInterface
from ircbot.core.config import CONNECTIONS_KEY, PLUGINS_KEY, BotConfig
from ircbot.exceptions import ConfigError, PluginError
from ircbot.plugins.base import PluginInterface

if TYPE_CHECKING:
    from ircbot.core.subscriptions import SubscriptionTable

logger = structlog.get_logger()


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    kind: Literal["config", "plugin"] | None = None
    message: str = ""

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(ok=True)

    @classmethod
    def config_error(cls, message: str) -> ValidationResult:
        return cls(ok=False, kind="config", message=message)

    @classmethod
    def plugin_error(cls, message: str) -> ValidationResult:
        return cls(ok=False, kind="plugin", message=message)

    def raise_for_error(self) -> None:
        if self.ok:
            return
        if self.kind == "plugin":
            raise PluginError(self.message)
        raise ConfigError(self.message)


Check = Callable[[], ValidationResult]


def _require_list(config: BotConfig, key: str) -> ValidationResult:
    if key not in config:
        return ValidationResult.config_error(
            f'Configuration must contain a "{key}" key'
        )
    value = config[key]
    if not isinstance(value, list) or not value:
        return ValidationResult.config_error(
            f'Configuration "{key}" key must reference a non-empty array'
        )
    return ValidationResult.success()


def _require_instances(
    values: Sequence[Any], key: str, protocol: type, protocol_name: str
) -> ValidationResult:
    if all(isinstance(value, protocol) for value in values):
        return ValidationResult.success()
    return ValidationResult.config_error(
        f'All configuration "{key}" array values must implement {protocol_name}'
    )


def _derive_all(
    plugins: Sequence[Any], subscriptions: SubscriptionTable
) -> ValidationResult:
    for plugin in plugins:
        result = subscriptions.derive(plugin)
        if not result.ok:
            return result
    return ValidationResult.success()


def _derive_connections(
    connections: Sequence[Any], subscriptions: SubscriptionTable
) -> ValidationResult:
    for connection in connections:
        result = _derive_all(connection.get_plugins(), subscriptions)
        if not result.ok:
            return result
    return ValidationResult.success()


def _first_failure(checks: Sequence[Check]) -> ValidationResult:
    for check in checks:
        result = check()
        if not result.ok:
            return result
    return ValidationResult.success()


def validate_config(
    config: BotConfig, subscriptions: SubscriptionTable
) -> ValidationResult:
    """Validate *config*, deriving every plugin's subscriptions into *subscriptions*.

    Each step is a thunk evaluated only after every earlier step passed.
    """
    checks: list[Check] = [
        lambda: _require_list(config, PLUGINS_KEY),
        lambda: _require_instances(
            config[PLUGINS_KEY], PLUGINS_KEY, PluginInterface, "PluginInterface"
        ),
        lambda: _derive_all(config[PLUGINS_KEY], subscriptions),
        lambda: _require_list(config, CONNECTIONS_KEY),
        lambda: _require_instances(
            config[CONNECTIONS_KEY],
            CONNECTIONS_KEY,
            ConnectionInterface,
            "ConnectionInterface",
        ),
        lambda: _derive_connections(config[CONNECTIONS_KEY], subscriptions),
    ]
    result = _first_failure(checks)
    if not result.ok:
        logger.error("config_invalid", kind=result.kind, reason=result.message)
    return result
