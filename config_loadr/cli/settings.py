"""Settings for the config-loadr command itself, declared with config-loadr."""

from __future__ import annotations

from enum import Enum

from config_loadr.core.schema import env_config, env_field


class LogLevel(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class LogFormat(Enum):
    CONSOLE = "console"
    JSON = "json"


@env_config
class CliSettings:
    log_level: LogLevel = env_field(
        "CONFIG_LOADR_LOG_LEVEL",
        "Minimum level of config-loadr's own log output",
        default=LogLevel.WARNING,
    )
    log_format: LogFormat = env_field(
        "CONFIG_LOADR_LOG_FORMAT",
        "Log renderer: console or json",
        default=LogFormat.CONSOLE,
    )


__all__ = ["CliSettings", "LogFormat", "LogLevel"]
