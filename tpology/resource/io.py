"""Manifest decoding and encoding.

A manifest is a stream of YAML documents separated by ``---``. JSON is a
subset of YAML and decodes through the same loader.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Iterator
from datetime import date, datetime
from pathlib import Path
from typing import IO, Any

import yaml

from tpology.errors import DecodeError, NotFoundError, SourceError
from tpology.observability.logging import get_logger
from tpology.resource.model import Resource

_log = get_logger("resource.io")


class _StrictLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate keys within one mapping."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            if key_node.tag == "tag:yaml.org,2002:merge":
                continue
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                continue  # unhashable keys are rejected by the base constructor
            if duplicate:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


_BOOL_TAG = "tag:yaml.org,2002:bool"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_VALUE_TAG = "tag:yaml.org,2002:value"

# Follow the YAML 1.2 core schema: yes/no/on/off, "=" and dates stay
# strings, so a reference such as "country: no" keeps its value.
_StrictLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_BOOL_TAG, _TIMESTAMP_TAG, _VALUE_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_StrictLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def json_default(value: object) -> str:
    """Encode values JSON has no type for (dates from explicit tags, mostly)."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def iter_load(stream: str | bytes | IO[str] | IO[bytes], source: str = "") -> Iterator[Resource]:
    """Yield resources from a manifest stream one document at a time.

    Empty documents are skipped. Resources yielded before a failing
    document stay with the caller.

    Raises:
        DecodeError: the stream is not valid YAML or holds duplicate keys.
        ShapeError: a document is not a resource mapping.
    """
    try:
        for doc in yaml.load_all(stream, Loader=_StrictLoader):  # noqa: S506 - SafeLoader subclass
            if doc is None:
                continue
            yield Resource.from_wire(doc, source=source)
    except yaml.YAMLError as exc:
        raise DecodeError(str(exc), source) from exc


def load(stream: str | bytes | IO[str] | IO[bytes], source: str = "") -> list[Resource]:
    """Decode every resource in a manifest stream, all or nothing."""
    return list(iter_load(stream, source=source))


def load_file(path: str | Path) -> list[Resource]:
    """Decode every resource in the manifest at *path*.

    Each returned resource carries *path* as its provenance.
    """
    p = Path(path)
    try:
        with p.open("rb") as f:
            resources = load(f, source=str(p))
    except FileNotFoundError as exc:
        raise NotFoundError(str(p)) from exc
    except OSError as exc:
        raise SourceError(str(p), exc.strerror or str(exc)) from exc
    _log.debug("manifest_loaded", path=str(p), resources=len(resources))
    return resources


def dump_yaml(resources: Iterable[Resource]) -> str:
    """Encode resources as a multi-document YAML stream in wire shape."""
    return yaml.safe_dump_all(
        [r.to_wire() for r in resources],
        sort_keys=False,
        default_flow_style=False,
        indent=2,
    )


def dump_json(resources: Iterable[Resource]) -> str:
    """Encode resources as a JSON array in wire shape."""
    return json.dumps([r.to_wire() for r in resources], indent=2, default=json_default)
