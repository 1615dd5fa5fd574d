from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .version import DEFAULT_VERSION, to_protocol_id


@dataclass(slots=True, frozen=True, eq=False)
class ProtocolDescriptor:
    """
    A registered protocol implementation.

    The id is derived once when the descriptor is built and the record is
    frozen afterwards, so the id always matches name, binary and version.
    Any other fields supplied at registration are kept in ``fields`` and
    are also readable as attributes, except those named like a member of
    this class (``get``, ``to_dict``, ``fields``, ...), which are only
    reachable through ``get()`` or ``fields``. Descriptors compare and hash
    by identity.

    Attributes:
        name: Protocol name.
        binary: Whether the protocol uses a binary wire encoding.
        version: Version string, MAJOR.MINOR[.PATCH].
        id: ``name[:b]@version`` registry key.
        fields: Passthrough fields, unchanged.
    """

    name: str
    binary: bool
    version: str
    id: str
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        name: str,
        descriptor: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> ProtocolDescriptor:
        values: dict[str, Any] = dict(descriptor or {})
        values.update(fields)

        binary = bool(values.pop("binary", False))
        version = values.pop("version", None) or DEFAULT_VERSION

        values.pop("name", None)
        values.pop("id", None)

        return cls(
            name=name,
            binary=binary,
            version=version,
            id=to_protocol_id(name, binary, version),
            fields=values,
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.fields,
            "name": self.name,
            "binary": self.binary,
            "version": self.version,
            "id": self.id,
        }

    def __getattr__(self, key: str) -> Any:
        # Only reached for names that are not slots.
        try:
            return object.__getattribute__(self, "fields")[key]

        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {key!r}"
            ) from None
