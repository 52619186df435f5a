"""Tests for the textual browser."""

import asyncio

from repohome.tui import BrowseApp, RepoTable


def _layout(tmp_path):
    (tmp_path / "git" / "github.com" / "foo" / "bar" / ".git").mkdir(parents=True)
    (tmp_path / "git" / "localhost" / "notes" / ".git").mkdir(parents=True)
    return tmp_path


def test_browse_lists_and_picks(tmp_path):
    root = _layout(tmp_path)

    async def run():
        app = BrowseApp(root)
        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app.query_one(RepoTable).row_count == 2
            await pilot.press("enter")
        return app.return_value

    assert asyncio.run(run()) == root / "git" / "github.com" / "foo" / "bar"


def test_browse_filter(tmp_path):
    root = _layout(tmp_path)

    async def run():
        app = BrowseApp(root)
        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            await pilot.pause()
            app._apply_filter("local")
            await pilot.pause()
            assert [r.path for r in app.shown_rows] == ["notes"]
            assert app.query_one(RepoTable).row_count == 1

    asyncio.run(run())


def test_browse_empty_root(tmp_path):
    async def run():
        app = BrowseApp(tmp_path)
        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app.rows == []
            await pilot.press("q")
        return app.return_value

    assert asyncio.run(run()) is None


def test_browse_app_keeps_widget_visibility(tmp_path):
    app = BrowseApp(tmp_path)
    assert app.shown_rows == []
    assert app.visible is True
