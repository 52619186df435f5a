"""Listing managed repositories: scan each host directory, decompose, filter."""

from __future__ import annotations

import json
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.table import Table

from repohome.errors import ScanError, TargetNotFound
from repohome.git import is_repository
from repohome.layout import decompose
from repohome.scanner import find_repos
from repohome.theme import CYAN, GREEN, SURFACE, YELLOW

MAX_WORKERS = 8


@dataclass(frozen=True)
class RepoRow:
    path: str
    kind: str
    hostname: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "type": self.kind, "hostname": self.hostname}


def _subdirs(path: Path) -> list[Path]:
    """Sorted child directories of path; ScanError if it cannot be read."""
    try:
        with os.scandir(path) as it:
            return sorted(Path(e.path) for e in it if e.is_dir())
    except OSError as exc:
        raise ScanError(path, exc) from exc


def host_dirs(
    root: Path,
    filter_type: Optional[str] = None,
    filter_hostname: Optional[str] = None,
) -> list[Path]:
    """root/<kind>/<host> directories whose names pass the substring filters."""
    found: list[Path] = []
    for kind_dir in _subdirs(root):
        if filter_type and filter_type not in kind_dir.name:
            continue
        for host_dir in _subdirs(kind_dir):
            if filter_hostname and filter_hostname not in host_dir.name:
                continue
            found.append(host_dir)
    return found


def collect(
    root: Path,
    *,
    filter_type: Optional[str] = None,
    filter_hostname: Optional[str] = None,
    filter_path: Optional[str] = None,
) -> list[RepoRow]:
    """Scan every host directory under root and return matching rows.

    Host directories are scanned concurrently; the first ScanError aborts
    the listing. Rows come back ordered by (kind, hostname, path).
    """
    dirs = host_dirs(root, filter_type, filter_hostname)
    if not dirs:
        return []

    rows: list[RepoRow] = []
    with ThreadPoolExecutor(max_workers=MAX_WORKERS) as executor:
        results = executor.map(find_repos, dirs)
        for host_dir, entries in zip(dirs, results):
            for entry in entries:
                placement = decompose(root, host_dir.joinpath(*entry.relative_path))
                if filter_path and filter_path not in placement.relative_path:
                    continue
                rows.append(RepoRow(
                    path=placement.relative_path,
                    kind=placement.kind,
                    hostname=placement.host,
                ))

    rows.sort(key=lambda r: (r.kind, r.hostname, r.path))
    return rows


def find_target(root: Path, target: str) -> Path:
    """First root/<kind>/<host>/<target> that is a repository."""
    for host_dir in host_dirs(root):
        candidate = host_dir / target
        if is_repository(candidate):
            return candidate
    raise TargetNotFound(target)


def rows_to_json(rows: list[RepoRow]) -> str:
    return json.dumps([r.to_dict() for r in rows])


def render_table(rows: list[RepoRow]) -> Table:
    table = Table(border_style=SURFACE, show_edge=True, pad_edge=True)
    table.add_column("path", style=f"bold {CYAN}")
    table.add_column("type", style=YELLOW)
    table.add_column("hostname", style=GREEN)
    for r in rows:
        table.add_row(r.path, r.kind, r.hostname)
    return table
