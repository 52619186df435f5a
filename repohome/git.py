"""Git and helper-program invocation — subprocess-based, output inherited."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Union

from repohome.errors import ToolError
from repohome.scanner import MARKER

logger = logging.getLogger(__name__)

GIT = "git"
SUPPORTED_KINDS = frozenset({"git"})


def _run(args: list[str]) -> int:
    """Run a program attached to the terminal and return its exit status."""
    logger.debug("running %s", shlex.join(args))
    try:
        result = subprocess.run(args)
    except (FileNotFoundError, PermissionError) as exc:
        raise ToolError(args[0], exc.strerror or str(exc)) from exc
    return result.returncode


def clone(target: str, dest: Union[str, Path], exe: str = GIT) -> int:
    """git clone -- <target> <dest>. The target is passed through unparsed."""
    return _run([exe, "clone", "--", target, str(dest)])


def init(dest: Union[str, Path], exe: str = GIT) -> int:
    return _run([exe, "init", str(dest)])


def launch(command: str, path: Union[str, Path]) -> int:
    """Run an opener or editor command (which may carry arguments) on path."""
    args = shlex.split(command)
    if not args:
        raise ToolError(command, "empty command")
    return _run(args + [str(path)])


def is_repository(path: Path) -> bool:
    return (path / MARKER).is_dir()
