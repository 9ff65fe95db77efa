"""Error taxonomy for tpology.

Every error is a data-correctness error: none is transient, none is retried.
Errors propagate to the immediate caller unchanged; only the CLI decides how
they are presented.
"""

from __future__ import annotations


class TpologyError(Exception):
    """Base class for all tpology errors."""


class ReservedKindError(TpologyError):
    """Raised when a resource kind collides with a reserved field name."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"resource kind is a reserved word: {kind}")
        self.kind = kind


class ShapeError(TpologyError):
    """Raised when a decoded document is not a valid resource mapping."""

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


class DecodeError(TpologyError):
    """Raised when a document is syntactically invalid."""

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


class NotFoundError(TpologyError):
    """Raised when a source path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"no such file or directory: {path}")
        self.path = path


class SourceError(TpologyError):
    """Raised when a source path exists but cannot be read or written."""

    def __init__(self, path: str, detail: str = "") -> None:
        super().__init__(f"{path}: {detail}" if detail else f"cannot access {path}")
        self.path = path
        self.detail = detail


class DuplicateResourceError(TpologyError):
    """Raised by a strict inventory when a (kind, name) pair is added twice."""

    def __init__(self, kind: str, name: str, first: str = "", second: str = "") -> None:
        where = ""
        if first or second:
            where = f" (first from {first or '<memory>'}, again from {second or '<memory>'})"
        super().__init__(f"duplicate resource {kind}/{name}{where}")
        self.kind = kind
        self.name = name
        self.first = first
        self.second = second


class DanglingReferenceError(TpologyError):
    """Raised during graph build when a reference names a missing resource.

    Attributes identify the referencing node, the reference key (which is
    the target kind) and the missing target name.
    """

    def __init__(self, kind: str, name: str, key: str, target: str) -> None:
        super().__init__(f"{kind}/{name}: reference {key!r} names unknown {key} {target!r}")
        self.kind = kind
        self.name = name
        self.key = key
        self.target = target


class GitError(TpologyError):
    """Raised when a git command exits non-zero or the cache is locked."""

    def __init__(self, command: list[str] | str, detail: str = "") -> None:
        cmd = command if isinstance(command, str) else " ".join(command)
        super().__init__(f"git: {cmd}: {detail}" if detail else f"git: {cmd}")
        self.command = cmd
        self.detail = detail
