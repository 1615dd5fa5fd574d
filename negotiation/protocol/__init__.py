"""
Protocol module for selecting a communication protocol.

This module provides:
- Protocol descriptors and id encoding
- Version precedence parsing
- The Negotiator registry and selection rule
"""

from negotiation.protocol.version import (
    # Id encoding
    BINARY_MARKER as BINARY_MARKER,
    DEFAULT_VERSION as DEFAULT_VERSION,
    DEFAULT_BINARY_BONUS as DEFAULT_BINARY_BONUS,
    to_protocol_id as to_protocol_id,
    is_binary_id as is_binary_id,
    # Precedence
    BinaryFilter as BinaryFilter,
    parse as parse,
    precedence as precedence,
)
from negotiation.protocol.descriptor import (
    ProtocolDescriptor as ProtocolDescriptor,
)
from negotiation.protocol.negotiator import (
    Negotiator as Negotiator,
)
