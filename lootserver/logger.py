"""Level-filtered logging for the server SDK."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

__all__ = ["LogLevel", "LogLevelLimit", "LoggerSettings", "ServerLogger"]


class LogLevel(IntEnum):
    """Verbosity of a single log message; higher values are chattier."""

    IGNORE = 0
    FATAL = 1
    ERROR = 2
    WARNING = 3
    DISPLAY = 4
    LOG = 5
    VERBOSE = 6
    VERY_VERBOSE = 7


class LogLevelLimit(IntEnum):
    """The most verbose level that is let through, or a special mode."""

    NO_LOGGING = 0
    FATAL = 1
    ERROR = 2
    WARNING = 3
    DISPLAY = 4
    LOG = 5
    VERBOSE = 6
    VERY_VERBOSE = 7
    ALL_AS_NORMAL = 8


@dataclass
class LoggerSettings:
    """Configuration that decides which messages are emitted.

    ``development`` marks a development build; outside of one, messages are
    only emitted when ``log_outside_of_editor`` is set.
    """

    limit_level: LogLevelLimit = LogLevelLimit.DISPLAY
    log_outside_of_editor: bool = False
    development: bool = True


Sink = Callable[[LogLevel, str], None]

_STDLIB_LEVELS = {
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.DISPLAY: logging.INFO,
    LogLevel.LOG: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.VERY_VERBOSE: 5,
}


def _stdlib_sink(level: LogLevel, message: str) -> None:
    logging.getLogger("lootserver").log(_STDLIB_LEVELS.get(level, logging.INFO), message)


class ServerLogger:
    """Filters messages by the configured limit and hands them to a sink."""

    def __init__(self, settings: Optional[LoggerSettings] = None, sink: Optional[Sink] = None):
        self.settings = settings if settings is not None else LoggerSettings()
        self.sink = sink if sink is not None else _stdlib_sink

    def effective_level(self, verbosity: LogLevel) -> Optional[LogLevel]:
        """Return the level a message would be emitted at, or None if suppressed."""
        if verbosity is LogLevel.IGNORE:
            return None
        settings = self.settings
        if not settings.development and not settings.log_outside_of_editor:
            return None
        limit = settings.limit_level
        if limit is LogLevelLimit.NO_LOGGING or limit < verbosity:
            return None
        if limit is LogLevelLimit.ALL_AS_NORMAL:
            return LogLevel.DISPLAY
        return LogLevel(verbosity)

    def log(self, message: str, verbosity: LogLevel = LogLevel.DISPLAY) -> bool:
        """Emit ``message`` if its verbosity passes the filter; report whether it did."""
        level = self.effective_level(verbosity)
        if level is None:
            return False
        self.sink(level, message)
        return True