"""Configuration levels, file locations and the TOML config file."""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir, user_data_dir

from repohome.errors import ConfigError, UnsupportedPlatform

logger = logging.getLogger(__name__)

APP_NAME = "repohome"
CONFIG_FILENAME = "config.toml"
LOCAL_DIRNAME = ".repohome"
LEVEL_ENV = "REPOHOME_LEVEL"

SYSTEM_CONFIG_FILE = Path("/etc") / APP_NAME / CONFIG_FILENAME
SYSTEM_REPO_DIR = Path("/usr/share") / APP_NAME / "repositories"

DEFAULT_CONFIG = """\
# repohome configuration

# Where managed repositories live. Leave unset to use the default for the
# selected level (system, user or local).
# repo_dir = "/path/to/repositories"

# Program used by `repohome open` when --with is not given.
# open_with = "code"

# Editor used by `repohome config --edit` when --with is not given.
# config_editor = "vim"
"""


class Level(str, Enum):
    SYSTEM = "system"
    USER = "user"
    LOCAL = "local"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Setup:
    level: Level
    config_file: Optional[Path] = None  # only for Level.CUSTOM


@dataclass
class Config:
    repo_dir: Optional[str] = None
    open_with: Optional[str] = None
    config_editor: Optional[str] = None


def select_setup(
    *,
    system: bool = False,
    user: bool = False,
    local: bool = False,
    config: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Setup:
    """Pick the configuration level from CLI flags, then REPOHOME_LEVEL."""
    if system:
        return Setup(Level.SYSTEM)
    if user:
        return Setup(Level.USER)
    if local:
        return Setup(Level.LOCAL)
    if config:
        return Setup(Level.CUSTOM, Path(config))

    env = os.environ if environ is None else environ
    value = env.get(LEVEL_ENV)
    if value in (Level.SYSTEM.value, Level.LOCAL.value):
        return Setup(Level(value))
    return Setup(Level.USER)


def _require_linux(what: str) -> None:
    if not sys.platform.startswith("linux"):
        raise UnsupportedPlatform(what, sys.platform)


def config_file(setup: Setup) -> Path:
    if setup.level is Level.SYSTEM:
        _require_linux("system-wide configuration")
        return SYSTEM_CONFIG_FILE
    if setup.level is Level.USER:
        return Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
    if setup.level is Level.LOCAL:
        return Path.cwd() / LOCAL_DIRNAME / CONFIG_FILENAME
    return setup.config_file


def repo_dir(setup: Setup, config: Config) -> Path:
    """Root directory of the layout for this setup."""
    if config.repo_dir:
        return Path(config.repo_dir).expanduser()
    if setup.level is Level.SYSTEM:
        _require_linux("a system-wide repository directory")
        return SYSTEM_REPO_DIR
    if setup.level is Level.USER:
        return Path(user_data_dir(APP_NAME, appauthor=False)) / "repositories"
    if setup.level is Level.LOCAL:
        return Path.cwd() / LOCAL_DIRNAME / "repositories"
    raise ConfigError("no repo_dir specified in the configuration file")


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def parse_config(text: str) -> Config:
    """Parse config TOML. Raises ConfigError on bad syntax or types."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}") from exc
    return Config(
        repo_dir=_optional_str(data, "repo_dir"),
        open_with=_optional_str(data, "open_with"),
        config_editor=_optional_str(data, "config_editor"),
    )


def load_config(path: Path) -> Config:
    """Load the config file; a missing or broken file yields defaults."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read configuration file %s (%s), using defaults", path, exc)
        return Config()
    try:
        return parse_config(text)
    except ConfigError as exc:
        logger.warning("ignoring configuration file %s: %s", path, exc)
        return Config()


def write_default_config(path: Path) -> None:
    path.write_text(DEFAULT_CONFIG, encoding="utf-8")
