from .errors import (
    NegotiationError as NegotiationError,
    NegotiatorDestroyedError as NegotiatorDestroyedError,
)
from .protocol import (
    BinaryFilter as BinaryFilter,
    Negotiator as Negotiator,
    ProtocolDescriptor as ProtocolDescriptor,
    parse as parse,
)
