import sys
from typing import (
    Any,
    Callable,
    Dict,
    TextIO,
)

import msgspec

from negotiation.logging.config import LoggingConfig, LogOutput, StreamType
from negotiation.logging.models import Entry, Log, LogLevel, LogLevelName


class LoggerStream:
    """
    Synchronous structured logger.

    Entries are msgspec structs rendered through a format template (or
    encoded as JSON) and written to stdout or stderr. A stream built with a
    ``level`` or ``output`` keeps them to itself; otherwise it follows the
    shared LoggingConfig of the current context.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        level: LogLevelName | None = None,
        output: LogOutput | None = None,
        streams: Dict[StreamType, TextIO] | None = None,
    ) -> None:
        if name is None:
            name = "default"

        if template is None:
            template = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"

        self._name = name
        self._default_template = template
        self._level: LogLevel | None = LogLevel.from_name(level) if level else None
        self._output: StreamType | None = StreamType(output) if output else None
        self._config = LoggingConfig()
        self._streams = streams

    @property
    def name(self):
        return self._name

    @property
    def level(self) -> LogLevel:
        return self._level or self._config.level

    @property
    def output(self) -> StreamType:
        return self._output or self._config.output

    def log(
        self,
        entry: Entry | Log,
        template: str | None = None,
        filter: Callable[[Entry], bool] | None = None,
    ):
        log = entry if isinstance(entry, Log) else None
        if log is not None:
            entry = log.entry

        if not self._accepts(entry, filter):
            return

        if log is None:
            log = self._to_log(entry)

        context = log.context()

        try:
            self._write(
                entry.to_template(
                    template or self._default_template,
                    context=context,
                ) + "\n"
            )

        except Exception as err:
            self._write_error(entry, context, err)

    def log_json(
        self,
        entry: Entry,
        filter: Callable[[Entry], bool] | None = None,
    ):
        if not self._accepts(entry, filter):
            return

        log = self._to_log(entry)

        try:
            self._write(msgspec.json.encode(log).decode() + "\n")

        except Exception as err:
            self._write_error(entry, log.context(), err)

    def _accepts(
        self,
        entry: Entry,
        filter: Callable[[Entry], bool] | None,
    ) -> bool:
        if not self._config.enabled(self._name, entry.level, threshold=self._level):
            return False

        return filter is None or filter(entry) is not False

    def _to_log(self, entry: Entry) -> Log:
        log_file, line_number, function_name = self._find_caller()

        return Log(
            entry=entry,
            filename=log_file,
            function_name=function_name,
            line_number=line_number,
        )

    def _stream(self, stream_type: StreamType) -> TextIO:
        if self._streams and (stream := self._streams.get(stream_type)):
            return stream

        return sys.stdout if stream_type == StreamType.STDOUT else sys.stderr

    def _write(self, line: str):
        stream = self._stream(self.output)
        stream.write(line)
        stream.flush()

    def _write_error(
        self,
        entry: Entry,
        context: Dict[str, Any],
        err: Exception,
    ):
        error_template = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"

        stderr = self._stream(StreamType.STDERR)
        if stderr.closed:
            return

        stderr.write(
            entry.to_template(
                error_template,
                context={
                    **context,
                    "error": str(err),
                },
            ) + "\n"
        )

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        # _find_caller <- _to_log <- log / log_json <- caller
        frame = sys._getframe(3)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
