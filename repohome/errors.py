"""Exception hierarchy shared by the parser, layout, scanner and CLI."""

from __future__ import annotations

from pathlib import Path


class RepohomeError(Exception):
    """Base class for every error repohome reports to the user.

    `key` names the message used to localize the error; the instance
    attributes fill its placeholders.
    """

    key = "error-generic"

    def params(self) -> dict[str, str]:
        return {name: str(value) for name, value in vars(self).items()}


# ── Locator parsing ─────────────────────────────────────────────────────

class InvalidLocator(RepohomeError, ValueError):
    """A remote locator has a recognized shape but broken structure."""

    key = "error-invalid-locator"


class EmptyHost(InvalidLocator):
    key = "error-empty-host"

    def __init__(self, scheme: str) -> None:
        super().__init__(f"empty host in '{scheme}' locator")
        self.scheme = scheme


class UnsupportedScheme(InvalidLocator):
    key = "error-unsupported-scheme"

    def __init__(self, scheme: str) -> None:
        super().__init__(f"unsupported locator scheme: '{scheme}'")
        self.scheme = scheme


class InvalidPort(InvalidLocator):
    key = "error-invalid-port"

    def __init__(self, port: str) -> None:
        super().__init__(f"invalid port: '{port}'")
        self.port = port


class MalformedShorthand(InvalidLocator):
    """The scheme-less `[user@]host:path` form did not match.

    `segment` names the part that failed (user, host, account or path).
    """

    key = "error-malformed-shorthand"

    def __init__(self, segment: str, reason: str) -> None:
        super().__init__(f"malformed {segment}: {reason}")
        self.segment = segment
        self.reason = reason


# ── Layout and scanning ─────────────────────────────────────────────────

class NotUnderRoot(RepohomeError, ValueError):
    key = "error-not-under-root"

    def __init__(self, path: Path, root: Path) -> None:
        super().__init__(f"{path} is not a repository path under {root}")
        self.path = path
        self.root = root


class ScanError(RepohomeError, OSError):
    """Reading a directory failed while walking a subtree."""

    key = "error-scan"

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"cannot read {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


# ── Orchestration ───────────────────────────────────────────────────────

class UnsupportedPlatform(RepohomeError):
    key = "error-unsupported-platform"

    def __init__(self, what: str, platform: str) -> None:
        super().__init__(f"{what} is not supported on {platform}")
        self.what = what
        self.platform = platform


class ConfigError(RepohomeError):
    key = "error-config"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class UnsupportedKind(RepohomeError):
    key = "error-unsupported-kind"

    def __init__(self, kind: str) -> None:
        super().__init__(f"unsupported repository type: '{kind}'")
        self.kind = kind


class TargetNotFound(RepohomeError):
    key = "error-target-not-found"

    def __init__(self, target: str) -> None:
        super().__init__(f"no managed repository matches '{target}'")
        self.target = target


class EmptyRepoPath(RepohomeError):
    key = "error-empty-repo-path"

    def __init__(self, target: str) -> None:
        super().__init__(f"cannot derive a repository path from '{target}'")
        self.target = target


class ToolError(RepohomeError):
    """An external program (git, editor, opener) could not be started."""

    key = "error-tool"

    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"cannot run {program}: {reason}")
        self.program = program
        self.reason = reason
