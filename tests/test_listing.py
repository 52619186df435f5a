"""Tests for listing managed repositories."""

import json
import os

import pytest

from repohome.errors import ScanError, TargetNotFound
from repohome.listing import RepoRow, collect, find_target, host_dirs, render_table, rows_to_json


@pytest.fixture
def layout(tmp_path):
    """A small layout with two kinds and three hosts."""
    for rel in [
        "git/github.com/foo/bar",
        "git/github.com/foo/baz",
        "git/github.com/foo/baz/vendor/dep",
        "git/gitlab.com/team/tool",
        "git/localhost/scratch",
        "hg/example.org/proj",
    ]:
        (tmp_path / rel / ".git").mkdir(parents=True)
    (tmp_path / "git" / "README").write_text("stray file\n")
    return tmp_path


def test_collect_all(layout):
    rows = collect(layout)
    assert rows == [
        RepoRow("foo/bar", "git", "github.com"),
        RepoRow("foo/baz", "git", "github.com"),
        RepoRow("team/tool", "git", "gitlab.com"),
        RepoRow("scratch", "git", "localhost"),
        RepoRow("proj", "hg", "example.org"),
    ]


def test_collect_filters_are_substring_and_case_sensitive(layout):
    assert {r.hostname for r in collect(layout, filter_hostname="git")} == {"github.com", "gitlab.com"}
    assert collect(layout, filter_hostname="GIT") == []
    assert [r.kind for r in collect(layout, filter_type="h")] == ["hg"]
    assert [r.path for r in collect(layout, filter_path="ba")] == ["foo/bar", "foo/baz"]


def test_collect_empty_root(tmp_path):
    assert collect(tmp_path) == []


def test_collect_missing_root(tmp_path):
    with pytest.raises(ScanError):
        collect(tmp_path / "missing")


def test_collect_aborts_on_unreadable_host(layout, monkeypatch):
    locked = os.fspath(layout / "git" / "gitlab.com" / "team")
    real_scandir = os.scandir

    def fake_scandir(path):
        if os.fspath(path) == locked:
            raise PermissionError(13, "Permission denied", locked)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    with pytest.raises(ScanError):
        collect(layout)


def test_host_dirs(layout):
    names = [f"{p.parent.name}/{p.name}" for p in host_dirs(layout)]
    assert names == ["git/github.com", "git/gitlab.com", "git/localhost", "hg/example.org"]


def test_find_target(layout):
    assert find_target(layout, "team/tool") == layout / "git" / "gitlab.com" / "team" / "tool"


def test_find_target_missing(layout):
    with pytest.raises(TargetNotFound):
        find_target(layout, "foo")


def test_rows_to_json_uses_type_key():
    data = json.loads(rows_to_json([RepoRow("foo/bar", "git", "github.com")]))
    assert data == [{"path": "foo/bar", "type": "git", "hostname": "github.com"}]
    assert list(data[0]) == ["path", "type", "hostname"]


def test_render_table():
    table = render_table([RepoRow("foo/bar", "git", "github.com")])
    assert [c.header for c in table.columns] == ["path", "type", "hostname"]
    assert table.row_count == 1
