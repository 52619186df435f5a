"""Repo discovery — walk a subtree and yield managed repository roots."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from repohome.errors import ScanError

MARKER = ".git"


@dataclass(frozen=True)
class RepositoryEntry:
    """A repository root, as path segments below the scan start."""

    relative_path: tuple[str, ...]

    @property
    def name(self) -> str:
        return "/".join(self.relative_path)


def _identity(path: str) -> tuple[int, int]:
    st = os.stat(path)
    return st.st_dev, st.st_ino


def scan(start_dir: Union[str, Path]) -> Iterator[RepositoryEntry]:
    """Depth-first walk from start_dir, yielding each repository root.

    A directory holding a .git subdirectory is yielded and not entered, so
    nested repositories (submodules, vendored checkouts) are not reported
    twice. Symlinked directories are followed; a directory already visited
    in this walk is skipped, which keeps link cycles finite. Any error
    reading a directory raises ScanError for that directory.
    """
    start = os.fspath(start_dir)
    seen: set[tuple[int, int]] = set()

    def _walk(path: str, rel: tuple[str, ...]) -> Iterator[RepositoryEntry]:
        try:
            ident = _identity(path)
            if ident in seen:
                return
            seen.add(ident)
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            raise ScanError(Path(path), exc) from exc

        subdirs: list[os.DirEntry] = []
        for entry in entries:
            try:
                is_dir = entry.is_dir()
            except OSError:
                # Entry vanished or cannot be stat'ed
                continue
            if not is_dir:
                continue
            if entry.name == MARKER:
                yield RepositoryEntry(rel)
                return
            subdirs.append(entry)

        for d in subdirs:
            yield from _walk(d.path, rel + (d.name,))

    yield from _walk(start, ())


def find_repos(start_dir: Union[str, Path]) -> list[RepositoryEntry]:
    """Collect every repository under start_dir.

    All-or-nothing: if any directory cannot be read, ScanError propagates
    and nothing found so far is returned.
    """
    return list(scan(start_dir))
