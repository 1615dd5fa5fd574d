import contextvars
from enum import Enum
from typing import Iterable, Literal

from negotiation.logging.models import LogLevel, LogLevelName


LogOutput = Literal['stdout', 'stderr']


class StreamType(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


_log_level = contextvars.ContextVar("negotiation_log_level", default=LogLevel.INFO)
_log_output = contextvars.ContextVar("negotiation_log_output", default=StreamType.STDERR)
_disabled_loggers: contextvars.ContextVar[frozenset[str]] = contextvars.ContextVar(
    "negotiation_disabled_loggers",
    default=frozenset(),
)


class LoggingConfig:
    """
    Logging settings shared by every LoggerStream in the current context.
    A stream constructed with its own level or output uses those instead.
    """

    def update(
        self,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
        disabled_loggers: Iterable[str] | None = None,
    ):
        # Unknown level names leave the current level in place.
        if log_level and (level := LogLevel.from_name(log_level)):
            _log_level.set(level)

        if log_output:
            _log_output.set(StreamType(log_output))

        if disabled_loggers is not None:
            _disabled_loggers.set(frozenset(disabled_loggers))

    def enabled(
        self,
        logger_name: str,
        log_level: LogLevel,
        threshold: LogLevel | None = None,
    ) -> bool:
        if logger_name in _disabled_loggers.get():
            return False

        return (threshold or _log_level.get()).allows(log_level)

    @property
    def level(self) -> LogLevel:
        return _log_level.get()

    @property
    def output(self) -> StreamType:
        return _log_output.get()
