"""On-disk layout: <root>/<kind>/<host>/<account>/<path>."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Union

from repohome.errors import NotUnderRoot
from repohome.locator import RemoteLocator

CLONE_SUFFIX = ".git"

PathLike = Union[str, Path]


class LayoutPath(NamedTuple):
    """A repository's place in the layout; tuple order is nesting order."""

    kind: str
    host: str
    account: str
    path: str


class Placement(NamedTuple):
    """Three-level view of a repository path: kind, host and the rest."""

    kind: str
    host: str
    relative_path: str


def path_segments(text: str) -> list[str]:
    """Split on '/', dropping empty, '.' and '..' pieces."""
    return [part for part in text.split("/") if part not in ("", ".", "..")]


def compose(root: PathLike, kind: str, host: str, account: str, path: str) -> Path:
    """Join layout fields under root. No I/O; an empty account is left out."""
    parts = [kind, host]
    if account:
        parts.append(account)
    parts.extend(path_segments(path))
    return Path(root).joinpath(*parts)


def normalize_clone_path(locator: RemoteLocator) -> str:
    """Strip one leading '/' and one trailing '.git' from the locator path."""
    path = locator.raw_path()
    path = path.removeprefix("/")
    return path.removesuffix(CLONE_SUFFIX)


def clone_destination(root: PathLike, locator: RemoteLocator, kind: str = "git") -> Path:
    return compose(
        root,
        kind,
        locator.effective_host(),
        locator.effective_account(),
        normalize_clone_path(locator),
    )


def _relative_parts(root: PathLike, concrete: PathLike, depth: int) -> tuple[str, ...]:
    """Parts of concrete below root, padded with "" up to depth."""
    root_path = Path(root)
    concrete_path = Path(concrete)
    try:
        parts = concrete_path.relative_to(root_path).parts
    except ValueError:
        raise NotUnderRoot(concrete_path, root_path) from None
    if not parts or ".." in parts:
        raise NotUnderRoot(concrete_path, root_path)
    return parts + ("",) * (depth - len(parts))


def decompose(root: PathLike, concrete: PathLike) -> Placement:
    """Inverse of compose for (kind, host, rest).

    Levels missing below a shallow path come back empty. Raises
    NotUnderRoot unless concrete is a strict descendant of root.
    """
    parts = _relative_parts(root, concrete, 3)
    return Placement(parts[0], parts[1], "/".join(parts[2:]))


def decompose_layout(root: PathLike, concrete: PathLike) -> LayoutPath:
    """Inverse of compose when the account level is present."""
    parts = _relative_parts(root, concrete, 4)
    return LayoutPath(parts[0], parts[1], parts[2], "/".join(parts[3:]))
