"""
Protocol selection between two endpoints.

Both sides register the protocol implementations they support. One side
receives the ids the other advertises and calls select() to pick the
highest precedence protocol it also knows, with no further handshake.
Every peer must rank candidates identically, see version.parse().
"""

from __future__ import annotations

import types
from typing import Any, Iterable, Mapping

from negotiation.env import Env, load_env
from negotiation.errors import NegotiatorDestroyedError
from negotiation.logging import LoggerStream
from negotiation.logging.negotiation_logging_models import (
    NegotiatorDestroyed,
    ProtocolNotFound,
    ProtocolRegistered,
    ProtocolSelected,
)

from .descriptor import ProtocolDescriptor
from .version import BinaryFilter, parse, precedence


class Negotiator:
    """
    Registry of supported protocols and the selection rule over it.

    Not thread safe. Callers sharing an instance across threads must
    serialize access themselves.
    """

    def __init__(self, env: Env | None = None) -> None:
        if env is None:
            env = load_env(Env)

        self.bonus = env.NEGOTIATION_BINARY_BONUS
        self._protocols: dict[str, ProtocolDescriptor] | None = {}
        self._logger = LoggerStream(
            name="negotiation",
            level=env.NEGOTIATION_LOG_LEVEL,
            output=env.NEGOTIATION_LOG_OUTPUT,
        )

    @property
    def protocols(self) -> Mapping[str, ProtocolDescriptor] | None:
        if self._protocols is None:
            return None

        return types.MappingProxyType(self._protocols)

    @property
    def destroyed(self) -> bool:
        return self._protocols is None

    def register(
        self,
        name: str,
        descriptor: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> Negotiator:
        """
        Register a protocol we are able to speak.

        Missing fields are defaulted (binary to False, version to 0.0.0).
        Registering the same name, binary and version again replaces the
        earlier descriptor.

        Args:
            name: Name of the protocol.
            descriptor: Protocol fields. Anything besides binary and
                version is kept on the descriptor unchanged.
            **fields: Merged over ``descriptor``.

        Returns:
            The negotiator, so registrations can be chained.
        """
        protocols = self._registry()

        protocol = ProtocolDescriptor.create(name, descriptor, **fields)
        protocols[protocol.id] = protocol

        self._logger.log(
            ProtocolRegistered(
                message=f"Registered protocol {protocol.id}",
                protocol_id=protocol.id,
                binary=protocol.binary,
                version=protocol.version,
            )
        )

        return self

    def get(self, protocol_id: str) -> ProtocolDescriptor | None:
        return self._registry().get(protocol_id)

    def available(
        self,
        include_binary: bool | BinaryFilter = BinaryFilter.UNSET,
    ) -> list[str]:
        """
        Ids of every registered protocol.

        Binary protocols are left out only when ``include_binary`` is
        passed and falsy. Omitting it includes them.
        """
        binary_filter = BinaryFilter.from_argument(include_binary)

        return [
            protocol_id
            for protocol_id, protocol in self._registry().items()
            if not (binary_filter.excludes_binary and protocol.binary)
        ]

    def select(
        self,
        available: str | Iterable[str] | None = None,
        binary_boost: bool = False,
    ) -> ProtocolDescriptor | None:
        """
        Select the best protocol out of the ids offered by a peer.

        Candidates are ranked by version precedence, highest first, and the
        first one that is registered here wins. With ``binary_boost`` ids
        carrying the binary marker are ranked above the rest. Without
        candidates we pick from our own protocols, leaving binary ones out
        unless ``binary_boost`` is set.

        Args:
            available: A single id or a list of ids the peer supports.
            binary_boost: Prefer binary protocols.

        Returns:
            The selected descriptor, or None when nothing matches.
        """
        protocols = self._registry()

        if isinstance(available, str):
            candidates = [available]

        else:
            candidates = list(available or [])

        if not candidates:
            candidates = self.available(binary_boost)

        ranked = sorted(
            candidates,
            key=lambda protocol_id: precedence(
                protocol_id,
                binary_boost=binary_boost,
                bonus=self.bonus,
            ),
            reverse=True,
        )

        for protocol_id in ranked:
            if (protocol := protocols.get(protocol_id)) is not None:
                self._logger.log(
                    ProtocolSelected(
                        message=f"Selected protocol {protocol_id}",
                        protocol_id=protocol_id,
                        candidates=ranked,
                        binary_boost=bool(binary_boost),
                    )
                )

                return protocol

        self._logger.log(
            ProtocolNotFound(
                message="No registered protocol matches the candidates",
                candidates=ranked,
                binary_boost=bool(binary_boost),
            )
        )

        return None

    def parse(self, protocol_id: str) -> float:
        return parse(protocol_id)

    def destroy(self) -> bool:
        """Release the registry. Returns False if already destroyed."""
        if self._protocols is None:
            return False

        protocols_count = len(self._protocols)
        self._protocols = None

        self._logger.log(
            NegotiatorDestroyed(
                message=f"Destroyed negotiator with {protocols_count} protocols",
                protocols=protocols_count,
            )
        )

        return True

    def __len__(self) -> int:
        return len(self._protocols) if self._protocols is not None else 0

    def __contains__(self, protocol_id: object) -> bool:
        return self._protocols is not None and protocol_id in self._protocols

    def _registry(self) -> dict[str, ProtocolDescriptor]:
        if self._protocols is None:
            raise NegotiatorDestroyedError(
                "Negotiator has been destroyed and can no longer be used"
            )

        return self._protocols
