import pytest

from negotiation.env import Env
from negotiation.protocol import Negotiator


@pytest.fixture
def env() -> Env:
    return Env(NEGOTIATION_LOG_LEVEL="error")


@pytest.fixture
def negotiator(env: Env):
    negotiator = Negotiator(env)
    yield negotiator
    negotiator.destroy()
