from __future__ import annotations
from pydantic import BaseModel, StrictInt
from typing import Callable, Dict, Union

from negotiation.logging import LogLevelName, LogOutput

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    # Added to the precedence of ":b" candidates when selecting with a
    # binary boost. Must exceed any version-derived precedence in use.
    NEGOTIATION_BINARY_BONUS: StrictInt = 9999
    # Unset log settings follow the shared LoggingConfig.
    NEGOTIATION_LOG_LEVEL: LogLevelName | None = None
    NEGOTIATION_LOG_OUTPUT: LogOutput | None = None

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "NEGOTIATION_BINARY_BONUS": int,
            "NEGOTIATION_LOG_LEVEL": str,
            "NEGOTIATION_LOG_OUTPUT": str,
        }
