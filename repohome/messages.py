"""Localized user-facing messages.

A `Messages` bundle is created once by the CLI and passed along with the
rest of the run context. Lookups fall back to en-US; a missing key is
logged and the key itself is shown instead.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_LANG = "en-US"

EN_US: dict[str, str] = {
    # info
    "info-setup-completed": "Setup completed. Configuration written to {file}",
    "info-cloning": "Cloning {target} into {path}",
    "info-creating": "Creating repository at {path}",
    "info-opening": "Opening {path} with {program}",
    "info-config-file": "Configuration file: {file}",
    "info-repo-dir": "Repository directory: {dir}",
    "info-no-repos": "No managed repositories found under {dir}",
    # errors raised by the core
    "error-generic": "Something went wrong",
    "error-invalid-locator": "Invalid repository address",
    "error-empty-host": "The '{scheme}' address has no host",
    "error-unsupported-scheme": "Unsupported address scheme '{scheme}'",
    "error-invalid-port": "Invalid port '{port}'",
    "error-malformed-shorthand": "Malformed {segment}: {reason}",
    "error-not-under-root": "{path} is not inside {root}",
    "error-scan": "Cannot read directory {path}: {cause}",
    # errors raised by the orchestrator
    "error-unsupported-platform": "{what} is not supported on {platform}",
    "error-config": "Configuration error: {reason}",
    "error-unsupported-kind": "Unsupported repository type '{kind}'",
    "error-target-not-found": "No managed repository matches '{target}'",
    "error-empty-repo-path": "Cannot derive a repository path from '{target}'",
    "error-tool": "Cannot run {program}: {reason}",
    "error-no-default-open-with": "No program to open repositories with; pass --with or set open_with",
    "error-no-editor-specified": "No editor specified; pass --with, set config_editor or $EDITOR",
    "error-invalid-config-dir": "Invalid configuration directory: {dir}",
    "error-invalid-repo-dir": "Invalid repository directory: {dir}",
    "error-git-failed": "git exited with status {code}",
}

BUNDLES: dict[str, dict[str, str]] = {
    DEFAULT_LANG: EN_US,
}


def normalize_lang(tag: str) -> str:
    """Turn a POSIX locale like 'en_US.UTF-8' into a tag like 'en-US'."""
    tag = tag.split(".", 1)[0].split("@", 1)[0]
    return tag.replace("_", "-")


def detect_locale(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the user's language tag from the environment, if any."""
    env = os.environ if environ is None else environ
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = env.get(var)
        if value and value not in ("C", "POSIX"):
            return normalize_lang(value)
    return None


class Messages:
    """Message bundle for one language."""

    def __init__(self, lang: Optional[str] = None, bundles: Optional[dict[str, dict[str, str]]] = None):
        self.bundles = BUNDLES if bundles is None else bundles
        self.lang = lang if lang in self.bundles else DEFAULT_LANG

    def lookup(self, key: str) -> Optional[str]:
        bundle = self.bundles.get(self.lang, {})
        if key in bundle:
            return bundle[key]
        return self.bundles.get(DEFAULT_LANG, {}).get(key)

    def format(self, key: str, **params: object) -> str:
        pattern = self.lookup(key)
        if pattern is None:
            logger.error("message key missing: key: %s, lang: %s", key, self.lang)
            return key
        try:
            return pattern.format(**params)
        except (KeyError, IndexError) as exc:
            logger.error("message format error: key: %s, missing %s", key, exc)
            return pattern
