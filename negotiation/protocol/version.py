"""
Protocol id encoding and version precedence.

A protocol id is ``<name>[:b]@<version>``. The ``:b`` marker directly
before ``@`` flags a binary-transport variant of the protocol.

Precedence is a float derived from the version part of an id: the first
``.`` is dropped and the remainder is read as a decimal number, so
``2.10.9`` becomes ``210.9``. This is not a semantic-version comparison.
Peers rank candidates with the same rule, so it must stay exact.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any


BINARY_MARKER = ":b"
VERSION_SEPARATOR = "@"
DEFAULT_VERSION = "0.0.0"
DEFAULT_BINARY_BONUS = 9999

# Longest leading decimal literal, the same prefix a JavaScript
# parseFloat() would consume.
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


class BinaryFilter(Enum):
    """
    Whether binary protocols are included when enumerating a registry.

    UNSET is the value of an omitted argument and behaves like INCLUDE.
    Only an explicitly passed falsy value excludes binary protocols.
    """

    UNSET = "unset"
    INCLUDE = "include"
    EXCLUDE = "exclude"

    @classmethod
    def from_argument(cls, value: Any) -> BinaryFilter:
        if isinstance(value, BinaryFilter):
            return value

        return cls.INCLUDE if value else cls.EXCLUDE

    @property
    def excludes_binary(self) -> bool:
        return self is BinaryFilter.EXCLUDE


def to_protocol_id(name: str, binary: bool, version: str) -> str:
    marker = BINARY_MARKER if binary else ""
    return f"{name}{marker}{VERSION_SEPARATOR}{version}"


def is_binary_id(protocol_id: str) -> bool:
    return BINARY_MARKER in protocol_id


def parse_float(value: str) -> float:
    """Read the leading decimal literal of ``value``, NaN if there is none."""
    match = _FLOAT_PREFIX.match(value.lstrip())
    if match is None:
        return math.nan

    return float(match.group(0))


def parse(protocol_id: str) -> float:
    """
    Transform the version part of a protocol id into a numeric value.

    Takes the text after the last ``@``, removes only the first ``.``
    and parses what is left. ``foo@0.1.0`` gives ``1.0`` and
    ``foo@10.0.0`` gives ``100.0``. Malformed versions produce NaN or
    another degenerate value and never raise.

    Args:
        protocol_id: Protocol id (or bare version string) to parse.

    Returns:
        The precedence value of the version.
    """
    version = protocol_id.rpartition(VERSION_SEPARATOR)[2]
    return parse_float(version.replace(".", "", 1))


def precedence(
    protocol_id: str,
    binary_boost: bool = False,
    bonus: int = DEFAULT_BINARY_BONUS,
) -> float:
    """
    Sort value of a candidate id. The bonus is applied on the id text
    alone, whether or not the id is registered as binary. NaN ranks
    below every number.
    """
    value = parse(protocol_id)
    if math.isnan(value):
        return -math.inf

    if binary_boost and is_binary_id(protocol_id):
        value += bonus

    return value
