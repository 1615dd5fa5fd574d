from __future__ import annotations
from enum import Enum
from typing import Literal

LogLevelName = Literal['debug', 'info', 'warn', 'error']


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @classmethod
    def from_name(cls, level_name: str) -> LogLevel | None:
        return cls.__members__.get(level_name.upper())

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]

    def allows(self, level: LogLevel) -> bool:
        """Whether an entry at ``level`` passes when this level is the threshold."""
        return level.rank >= self.rank


_LEVEL_RANKS: dict[LogLevel, int] = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}
