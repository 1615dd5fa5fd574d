from .models import Entry, LogLevel


class ProtocolRegistered(Entry, kw_only=True):
    protocol_id: str
    binary: bool
    version: str
    level: LogLevel = LogLevel.DEBUG

class ProtocolSelected(Entry, kw_only=True):
    protocol_id: str
    candidates: list[str]
    binary_boost: bool
    level: LogLevel = LogLevel.DEBUG

class ProtocolNotFound(Entry, kw_only=True):
    candidates: list[str]
    binary_boost: bool
    level: LogLevel = LogLevel.DEBUG

class NegotiatorDestroyed(Entry, kw_only=True):
    protocols: int
    level: LogLevel = LogLevel.DEBUG
