"""The Inventory: every resource, keyed by kind and then by name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from tpology.errors import DuplicateResourceError, NotFoundError, SourceError
from tpology.observability.logging import get_logger
from tpology.resource.io import iter_load
from tpology.resource.model import Resource

_log = get_logger("inventory")

_MANIFEST_SUFFIXES = (".yaml", ".yml")


class Inventory:
    """Resources grouped as ``resources[kind][name]``.

    Insertion is last-write-wins: adding a resource whose (kind, name) is
    already present replaces the earlier one. With ``strict=True`` that
    second insertion raises DuplicateResourceError instead.

    There is no removal. An inventory must not be mutated while a graph is
    being built from it.
    """

    def __init__(self, resources: Iterable[Resource] = (), strict: bool = False) -> None:
        self.strict = strict
        self.resources: dict[str, dict[str, Resource]] = {}
        for r in resources:
            self.add_resource(r)

    def add_resource(self, r: Resource) -> None:
        """Insert *r* at ``resources[r.kind][r.name]``."""
        by_name = self.resources.setdefault(r.kind, {})
        existing = by_name.get(r.name)
        if existing is not None:
            if self.strict:
                raise DuplicateResourceError(r.kind, r.name, existing.loaded_from, r.loaded_from)
            _log.debug(
                "resource_replaced",
                kind=r.kind,
                name=r.name,
                previous=existing.loaded_from,
                source=r.loaded_from,
            )
        by_name[r.name] = r

    def kinds(self) -> list[str]:
        """Return every kind present, sorted."""
        return sorted(self.resources)

    def resources_of(self, kind: str) -> Mapping[str, Resource]:
        """Return a read-only name -> Resource view for *kind* (empty if unknown)."""
        return MappingProxyType(self.resources.get(kind, {}))

    def get(self, kind: str, name: str) -> Resource | None:
        return self.resources.get(kind, {}).get(name)

    def __len__(self) -> int:
        return sum(len(by_name) for by_name in self.resources.values())

    def __iter__(self) -> Iterator[Resource]:
        for kind in self.kinds():
            by_name = self.resources[kind]
            for name in sorted(by_name):
                yield by_name[name]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        kind, name = key
        return name in self.resources.get(kind, {})

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_resource_file(self, path: str | Path) -> int:
        """Add every resource in the manifest at *path*; return how many.

        Documents decoded before a malformed one remain in the inventory.
        """
        p = Path(path)
        count = 0
        try:
            with p.open("rb") as f:
                for r in iter_load(f, source=str(p)):
                    self.add_resource(r)
                    count += 1
        except FileNotFoundError as exc:
            raise NotFoundError(str(p)) from exc
        except OSError as exc:
            raise SourceError(str(p), exc.strerror or str(exc)) from exc
        _log.debug("manifest_loaded", path=str(p), resources=count)
        return count

    def load_directory(self, path: str | Path) -> int:
        """Add every resource from the manifests under *path*; return how many.

        Files are visited recursively in sorted path order and filtered by
        extension (``.yaml``/``.yml``, any case). The first malformed
        manifest aborts the walk; nothing already added is rolled back.
        """
        root = Path(path)
        if not root.exists():
            raise NotFoundError(str(root))
        if root.is_file():
            return self.load_resource_file(root)
        count = 0
        for manifest in manifest_paths(root):
            count += self.load_resource_file(manifest)
        return count


def manifest_paths(root: Path) -> list[Path]:
    """Return the manifest files under *root* in sorted order."""
    return sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in _MANIFEST_SUFFIXES
    )
