"""Tests for configuration levels and loading."""

import sys
from pathlib import Path

import pytest

from repohome import config
from repohome.config import (
    Config,
    Level,
    Setup,
    config_file,
    load_config,
    parse_config,
    repo_dir,
    select_setup,
    write_default_config,
)
from repohome.errors import ConfigError, UnsupportedPlatform


# --- Level selection ---

def test_select_setup_default_is_user():
    assert select_setup(environ={}) == Setup(Level.USER)


def test_select_setup_flags_win_over_env():
    env = {"REPOHOME_LEVEL": "local"}
    assert select_setup(system=True, environ=env).level is Level.SYSTEM
    assert select_setup(user=True, environ=env).level is Level.USER
    assert select_setup(config="/tmp/c.toml", environ=env) == Setup(Level.CUSTOM, Path("/tmp/c.toml"))


def test_select_setup_from_env():
    assert select_setup(environ={"REPOHOME_LEVEL": "local"}).level is Level.LOCAL
    assert select_setup(environ={"REPOHOME_LEVEL": "system"}).level is Level.SYSTEM
    assert select_setup(environ={"REPOHOME_LEVEL": "bogus"}).level is Level.USER


# --- Locations ---

def test_local_locations(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    setup = Setup(Level.LOCAL)
    assert config_file(setup) == tmp_path / ".repohome" / "config.toml"
    assert repo_dir(setup, Config()) == tmp_path / ".repohome" / "repositories"


def test_user_locations_use_platformdirs(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "user_config_dir", lambda *a, **k: str(tmp_path / "cfg"))
    monkeypatch.setattr(config, "user_data_dir", lambda *a, **k: str(tmp_path / "data"))
    setup = Setup(Level.USER)
    assert config_file(setup) == tmp_path / "cfg" / "config.toml"
    assert repo_dir(setup, Config()) == tmp_path / "data" / "repositories"


def test_custom_locations(tmp_path):
    setup = Setup(Level.CUSTOM, tmp_path / "my.toml")
    assert config_file(setup) == tmp_path / "my.toml"
    assert repo_dir(setup, Config(repo_dir=str(tmp_path / "r"))) == tmp_path / "r"
    with pytest.raises(ConfigError):
        repo_dir(setup, Config())


def test_configured_repo_dir_wins():
    assert repo_dir(Setup(Level.LOCAL), Config(repo_dir="/srv/repos")) == Path("/srv/repos")


def test_system_level_off_linux(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    with pytest.raises(UnsupportedPlatform):
        config_file(Setup(Level.SYSTEM))
    with pytest.raises(UnsupportedPlatform):
        repo_dir(Setup(Level.SYSTEM), Config())


def test_system_level_on_linux(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert config_file(Setup(Level.SYSTEM)) == Path("/etc/repohome/config.toml")
    assert repo_dir(Setup(Level.SYSTEM), Config()) == Path("/usr/share/repohome/repositories")


# --- File contents ---

def test_parse_config():
    cfg = parse_config('repo_dir = "/r"\nopen_with = "code"\n')
    assert cfg == Config(repo_dir="/r", open_with="code", config_editor=None)


def test_parse_config_rejects_wrong_type():
    with pytest.raises(ConfigError):
        parse_config("repo_dir = 3\n")


def test_parse_config_rejects_bad_toml():
    with pytest.raises(ConfigError):
        parse_config("repo_dir = \n")


def test_load_config_missing_file_gives_defaults(tmp_path, caplog):
    assert load_config(tmp_path / "nope.toml") == Config()
    assert "using defaults" in caplog.text


def test_load_config_broken_file_gives_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[[[")
    assert load_config(path) == Config()


def test_load_config_non_utf8_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "config.toml"
    path.write_bytes(b'repo_dir = "\xff\xfe"\n')
    assert load_config(path) == Config()
    assert "using defaults" in caplog.text


def test_default_config_loads_clean(tmp_path):
    path = tmp_path / "config.toml"
    write_default_config(path)
    assert load_config(path) == Config()
