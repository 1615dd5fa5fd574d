"""
Tests for the synchronous structured logger.

Tests cover:
- Level filtering through the shared LoggingConfig
- Output stream selection
- Template rendering with caller location
- JSON encoding of log records
- Negotiator log entries
"""

import io

import msgspec
import pytest

from negotiation.env import Env
from negotiation.logging import (
    Entry,
    Log,
    LoggerStream,
    LoggingConfig,
    LogLevel,
    StreamType,
)
from negotiation.logging.negotiation_logging_models import (
    ProtocolRegistered,
    ProtocolSelected,
)
from negotiation.protocol import Negotiator


class TestLogLevel:
    """Tests for level names and ordering."""

    def test_from_name(self):
        assert LogLevel.from_name("debug") is LogLevel.DEBUG
        assert LogLevel.from_name("WARN") is LogLevel.WARN

    def test_unknown_name(self):
        assert LogLevel.from_name("warning") is None

    def test_allows_same_or_higher(self):
        assert LogLevel.INFO.allows(LogLevel.INFO)
        assert LogLevel.INFO.allows(LogLevel.ERROR)
        assert not LogLevel.INFO.allows(LogLevel.DEBUG)

    def test_unknown_name_keeps_level(self):
        config = LoggingConfig()
        config.update(log_level="warning")

        assert config.level is LogLevel.DEBUG

    def test_enabled_by_level(self):
        config = LoggingConfig()
        config.update(log_level="warn")

        assert config.enabled("test", LogLevel.ERROR)
        assert config.enabled("test", LogLevel.WARN)
        assert not config.enabled("test", LogLevel.INFO)

    def test_disabled_logger(self):
        config = LoggingConfig()
        config.update(disabled_loggers=["test"])

        assert not config.enabled("test", LogLevel.ERROR)
        assert config.enabled("other", LogLevel.ERROR)


class TestLoggerStream:
    """Tests for LoggerStream output."""

    def test_writes_template(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        logger.log(
            Entry(message="hello", level=LogLevel.INFO),
            template="{level} - {function_name} - {message}",
        )

        assert streams[StreamType.STDOUT].getvalue() == (
            "INFO - test_writes_template - hello\n"
        )
        assert streams[StreamType.STDERR].getvalue() == ""

    def test_default_template_has_location(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        logger.log(Entry(message="hello", level=LogLevel.INFO))

        line = streams[StreamType.STDOUT].getvalue()

        assert "INFO" in line
        assert __file__ in line
        assert line.rstrip().endswith("hello")

    def test_skips_below_level(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        LoggingConfig().update(log_level="error")

        logger.log(Entry(message="hello", level=LogLevel.DEBUG))

        assert streams[StreamType.STDOUT].getvalue() == ""

    def test_filter(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        logger.log(
            Entry(message="hello", level=LogLevel.INFO),
            filter=lambda entry: entry.message != "hello",
        )

        assert streams[StreamType.STDOUT].getvalue() == ""

    def test_stderr_output(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        LoggingConfig().update(log_output="stderr")

        logger.log(Entry(message="hello", level=LogLevel.INFO), template="{message}")

        assert streams[StreamType.STDERR].getvalue() == "hello\n"
        assert streams[StreamType.STDOUT].getvalue() == ""

    def test_prepared_log_keeps_location(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        logger.log(
            Log(
                entry=Entry(message="hello", level=LogLevel.INFO),
                filename="remote.py",
                function_name="handshake",
                line_number=12,
            ),
            template="{filename}:{function_name}.{line_number} - {message}",
        )

        assert streams[StreamType.STDOUT].getvalue() == (
            "remote.py:handshake.12 - hello\n"
        )

    def test_bad_template_reports_on_stderr(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        logger.log(
            Entry(message="hello", level=LogLevel.INFO),
            template="{missing}",
        )

        assert streams[StreamType.STDOUT].getvalue() == ""
        assert "missing" in streams[StreamType.STDERR].getvalue()

    def test_stream_level_overrides_shared_level(
        self,
        streams: dict[StreamType, io.StringIO],
    ):
        logger = LoggerStream(name="test", level="error", streams=streams)

        logger.log(Entry(message="hello", level=LogLevel.INFO))

        assert streams[StreamType.STDOUT].getvalue() == ""
        assert LoggingConfig().level is LogLevel.DEBUG

    def test_stream_output_overrides_shared_output(
        self,
        streams: dict[StreamType, io.StringIO],
    ):
        logger = LoggerStream(name="test", output="stderr", streams=streams)

        logger.log(Entry(message="hello", level=LogLevel.INFO), template="{message}")

        assert streams[StreamType.STDERR].getvalue() == "hello\n"
        assert LoggingConfig().output is StreamType.STDOUT

    def test_log_json(
        self,
        logger: LoggerStream,
        streams: dict[StreamType, io.StringIO],
    ):
        logger.log_json(
            ProtocolRegistered(
                message="Registered protocol foo@1.0.0",
                protocol_id="foo@1.0.0",
                binary=False,
                version="1.0.0",
            )
        )

        log = msgspec.json.decode(streams[StreamType.STDOUT].getvalue())

        assert log["entry"]["protocol_id"] == "foo@1.0.0"
        assert log["entry"]["level"] == "DEBUG"
        assert log["function_name"] == "test_log_json"
        assert log["filename"] == __file__


class TestNegotiatorLogging:
    """Tests for entries emitted by the Negotiator."""

    @pytest.fixture
    def debug_env(self) -> Env:
        return Env(NEGOTIATION_LOG_LEVEL="debug", NEGOTIATION_LOG_OUTPUT="stdout")

    def test_logs_registration_and_selection(
        self,
        debug_env: Env,
        capsys: pytest.CaptureFixture[str],
    ):
        negotiator = Negotiator(debug_env)
        negotiator.register("foo", {"version": "1.0.0"})
        negotiator.select("foo@1.0.0")
        negotiator.select("bar@1.0.0")
        negotiator.destroy()

        output = capsys.readouterr().out

        assert "Registered protocol foo@1.0.0" in output
        assert "Selected protocol foo@1.0.0" in output
        assert "No registered protocol matches the candidates" in output
        assert "Destroyed negotiator with 1 protocols" in output

    def test_quiet_at_info(self, capsys: pytest.CaptureFixture[str]):
        negotiator = Negotiator(
            Env(NEGOTIATION_LOG_LEVEL="info", NEGOTIATION_LOG_OUTPUT="stdout")
        )
        negotiator.register("foo", {}).select()
        negotiator.destroy()

        assert capsys.readouterr().out == ""

    def test_leaves_shared_config_alone(self):
        config = LoggingConfig()
        config.update(log_level="debug", log_output="stdout")

        negotiator = Negotiator(Env(NEGOTIATION_LOG_LEVEL="error"))
        negotiator.destroy()
        Negotiator(Env()).destroy()

        assert config.level is LogLevel.DEBUG
        assert config.output is StreamType.STDOUT

    def test_follows_shared_config_when_unset(
        self,
        capsys: pytest.CaptureFixture[str],
    ):
        LoggingConfig().update(log_level="debug", log_output="stdout")

        negotiator = Negotiator(Env())
        negotiator.register("foo", {})
        negotiator.destroy()

        assert "Registered protocol foo@0.0.0" in capsys.readouterr().out

    def test_negotiators_keep_their_own_levels(
        self,
        capsys: pytest.CaptureFixture[str],
    ):
        verbose = Negotiator(
            Env(NEGOTIATION_LOG_LEVEL="debug", NEGOTIATION_LOG_OUTPUT="stdout")
        )
        quiet = Negotiator(
            Env(NEGOTIATION_LOG_LEVEL="error", NEGOTIATION_LOG_OUTPUT="stdout")
        )

        quiet.register("quiet", {})
        verbose.register("verbose", {})

        output = capsys.readouterr().out

        assert "Registered protocol verbose@0.0.0" in output
        assert "quiet@0.0.0" not in output

        verbose.destroy()
        quiet.destroy()

    def test_selected_entry_fields(self):
        entry = ProtocolSelected(
            message="Selected protocol foo@1.0.0",
            protocol_id="foo@1.0.0",
            candidates=["foo@1.0.0"],
            binary_boost=False,
        )

        assert entry.level is LogLevel.DEBUG
        assert entry.to_template("{protocol_id} {binary_boost}") == "foo@1.0.0 False"
