"""The Resource: one named, kinded unit of inventory data.

On the wire a resource is a flat mapping holding the reserved fields
(``name``, ``description``, ``owner``) plus exactly one more key. That key is
the resource's kind and its value is the payload::

    name: gcp-dev
    description: GCP development cluster
    owner: platform
    cluster:
      provider: gcp
      project: gcp-dev-project
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from tpology.errors import ReservedKindError, ShapeError

# A payload is an open tree of scalars, lists and string-keyed mappings.
Scalar = str | int | float | bool | None
Value = Scalar | list[Any] | dict[str, Any]

RESERVED_FIELDS: tuple[str, ...] = ("name", "description", "owner")


def kind_is_reserved(kind: str) -> bool:
    """Return True if *kind* is one of the reserved field names."""
    return kind in RESERVED_FIELDS


@dataclass(frozen=True)
class Resource:
    """A resource as declared in a manifest.

    Immutable once constructed. ``loaded_from`` records the manifest path for
    diagnostics and takes no part in equality.
    """

    kind: str
    name: str
    description: str = ""
    owner: str = ""
    data: Value = None
    loaded_from: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if kind_is_reserved(self.kind):
            raise ReservedKindError(self.kind)

    @property
    def qualified_name(self) -> str:
        return f"{self.kind}/{self.name}"

    def with_source(self, path: str) -> Resource:
        """Return a copy of this resource carrying provenance *path*."""
        return replace(self, loaded_from=path)

    def to_wire(self) -> dict[str, Value]:
        """Encode to the flat wire mapping."""
        return {
            "name": self.name,
            "description": self.description,
            "owner": self.owner,
            self.kind: self.data,
        }

    @classmethod
    def from_wire(cls, doc: object, source: str = "") -> Resource:
        """Decode a flat wire mapping.

        Raises:
            ShapeError: *doc* is not a mapping, a reserved field is not a
                string, or the mapping does not hold exactly one kind.
        """
        if not isinstance(doc, Mapping):
            raise ShapeError(f"resource must be a mapping, got {type(doc).__name__}", source)
        remaining = dict(doc)
        reserved = {f: _pop_field(remaining, f, source) for f in RESERVED_FIELDS}
        if not remaining:
            raise ShapeError("resource has no kind", source)
        if len(remaining) > 1:
            raise ShapeError("resource has more than one kind", source)
        ((kind, data),) = remaining.items()
        if not isinstance(kind, str):
            raise ShapeError(f"resource kind must be a string, got {kind!r}", source)
        return cls(kind=kind, data=data, loaded_from=source, **reserved)


def _pop_field(doc: dict[Any, Any], name: str, source: str) -> str:
    value = doc.pop(name, None)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ShapeError(f"field {name!r} must be a string, got {type(value).__name__}", source)
    return value
