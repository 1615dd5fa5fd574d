import io

import pytest

from negotiation.logging import LoggerStream, LoggingConfig, StreamType


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="debug", log_output="stdout", disabled_loggers=[])
    yield
    config.update(log_level="error", log_output="stderr", disabled_loggers=[])


@pytest.fixture
def streams() -> dict[StreamType, io.StringIO]:
    return {
        StreamType.STDOUT: io.StringIO(),
        StreamType.STDERR: io.StringIO(),
    }


@pytest.fixture
def logger(streams: dict[StreamType, io.StringIO]) -> LoggerStream:
    return LoggerStream(
        name="test",
        streams=streams,
    )
