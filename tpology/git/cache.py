"""Git cache: one local clone per remote URL, under a common cache directory.

Repository layout mirrors the URL with credentials dropped, e.g.
``https://user:pw@github.com/org/inv.git`` is cloned into
``<cache>/https/user/github.com/org/inv.git``.
"""

from __future__ import annotations

import os
import re
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

from tpology.errors import GitError
from tpology.observability.logging import get_logger

_log = get_logger("git.cache")

_LOCK_SUFFIX = ".lock"
_RE_SEPARATORS = re.compile(r"[:@]")


def clean_url(url: str) -> str:
    """Map a repository URL to a relative cache path.

    Any password is stripped; ``:`` and ``@`` become path separators and
    empty path elements are dropped.
    """
    parts = urlsplit(url)
    if parts.password is not None:
        netloc = parts.hostname or ""
        if parts.username:
            netloc = f"{parts.username}@{netloc}"
        if parts.port is not None:
            netloc = f"{netloc}:{parts.port}"
        url = urlunsplit(parts._replace(netloc=netloc))
    elems = [e for e in _RE_SEPARATORS.sub("/", url).split("/") if e]
    return "/".join(elems)


@dataclass
class Repository:
    """A local clone of a remote git repository."""

    url: str
    main_branch: str
    dir: Path

    def is_cloned(self) -> bool:
        return self.dir.exists()

    @property
    def lock_path(self) -> Path:
        return self.dir.with_name(self.dir.name + _LOCK_SUFFIX)

    def clone(self, *args: str) -> None:
        """Clone the repository into ``dir``.

        Raises:
            GitError: already cloned, or ``git clone`` failed.
        """
        if self.is_cloned():
            raise GitError("clone", f"repository already cloned: {self.url}")
        self.dir.parent.mkdir(parents=True, exist_ok=True)
        cmd = ["git", "clone"]
        if self.main_branch:
            cmd += ["-b", self.main_branch]
        cmd += [*args, self.url, str(self.dir)]
        _run(cmd)
        _log.info("repository_cloned", url=self.url, dir=str(self.dir))

    def clone_if_not_cloned(self) -> None:
        if not self.is_cloned():
            self.clone()

    def fetch(self) -> Path:
        """Bring the clone up to date with ``main_branch`` and return its directory.

        Clones on first use. An existing clone is fetched and hard-checked-out
        at the remote branch head while holding the repository lock.
        """
        if not self.is_cloned():
            self.clone("--depth", "1")
            return self.dir
        unlock = self.lock()
        try:
            ref = self.main_branch or "HEAD"
            self.exec("fetch", "--depth", "1", "origin", ref)
            self.exec("checkout", "--force", "--detach", "FETCH_HEAD")
        finally:
            unlock()
        _log.info("repository_fetched", url=self.url, ref=self.main_branch)
        return self.dir

    def remove(self) -> None:
        shutil.rmtree(self.dir, ignore_errors=True)

    def clean(self) -> None:
        self.exec("clean", "-fdx")

    def checkout(self, branch: str) -> None:
        self.exec("checkout", branch)

    def is_clean(self) -> bool:
        try:
            return self.exec_output("status", "--porcelain") == ""
        except GitError:
            return False

    def lock(self) -> Callable[[], None]:
        """Take the repository lock and return a function that releases it.

        The lock is ``<dir>.lock``, next to the clone rather than inside its
        working tree, and holds the owner's PID.

        Raises:
            GitError: another process holds the lock.
        """
        lock_file = self.lock_path
        try:
            fd = os.open(lock_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
        except FileExistsError as exc:
            other = self._read_pid(lock_file)
            raise GitError("lock", f"repository already locked by PID {other}: {self.url}") from exc
        with os.fdopen(fd, "w") as f:
            f.write(str(os.getpid()))

        def unlock() -> None:
            lock_file.unlink(missing_ok=True)

        return unlock

    def locker_pid(self) -> int:
        """Return the PID holding the repository lock.

        Raises:
            GitError: the repository is not locked.
        """
        pid = self._read_pid(self.lock_path)
        if pid == 0:
            raise GitError("lock", f"repository not locked: {self.url}")
        return pid

    def exec(self, *args: str) -> None:
        _run(["git", "-C", str(self.dir), *args])

    def exec_output(self, *args: str) -> str:
        return _run(["git", "-C", str(self.dir), *args])

    @staticmethod
    def _read_pid(lock_file: Path) -> int:
        try:
            return int(lock_file.read_text().strip())
        except (OSError, ValueError):
            return 0


class Cache:
    """The git cache directory."""

    def __init__(self, cache_path: str | Path) -> None:
        self.cache_path = Path(cache_path)

    def repository(self, url: str, main_branch: str = "") -> Repository:
        """Return the Repository for *url*; nothing is cloned yet."""
        return Repository(url=url, main_branch=main_branch, dir=self.cache_path / clean_url(url))


def _run(cmd: list[str]) -> str:
    _log.debug("git_exec", cmd=" ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)  # noqa: S603
    except FileNotFoundError as exc:
        raise GitError(cmd, "git executable not found") from exc
    if proc.returncode != 0:
        raise GitError(cmd, proc.stderr.strip() or f"exit status {proc.returncode}")
    return proc.stdout
