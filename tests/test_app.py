"""
Tests for the textual panel host, driven through textual's test pilot.

Run with:
    pytest tests/test_app.py -v
"""

import asyncio

import pytest

from autocommit.config import Config
from autocommit.git import Repository
from autocommit.ui.app import CommitApp, PanelArea
from autocommit.ui.layout import DIFF, FILES, MESSAGE

from conftest import FakeGit


@pytest.fixture
def git():
    g = FakeGit(head={"README.md": "hello"})
    g.write("README.md", "changed")
    return g


def run_app(app, *keys):
    """Run the app headless, press ``keys`` and return (return_value, app)."""
    async def scenario():
        async with app.run_test(size=(100, 40)) as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)
                await pilot.pause()
        return app.return_value
    return asyncio.run(scenario()), app


class TestCommitApp:

    def test_quit_returns_none(self, git):
        result, app = run_app(CommitApp(Repository(git), Config()), "q")
        assert result is None
        assert git.commits == ["initial"]

    def test_stage_then_commit(self, git):
        result, app = run_app(CommitApp(Repository(git), Config()), "s", "tab", "enter")
        assert result == "docs: update README.md"
        assert git.commits[-1] == "docs: update README.md"

    def test_nothing_staged_stays_open(self, git):
        app = CommitApp(Repository(git), Config())

        async def scenario():
            async with app.run_test(size=(100, 40)) as pilot:
                await pilot.pause()
                await pilot.press("tab", "enter")
                await pilot.pause()
                assert app.session.is_open
                message = app.query_one(f"#{MESSAGE}", PanelArea)
                assert message.display
                await pilot.press("q")
        asyncio.run(scenario())
        assert git.commands('commit') == []

    def test_escape_quits(self, git):
        result, app = run_app(CommitApp(Repository(git), Config()), "escape")
        assert result is None

    def test_exits_when_not_a_repository(self):
        result, app = run_app(CommitApp(Repository(FakeGit(is_repo=False)), Config()))
        assert result is None
        assert str(app.session.last_error) == "Not in a git repository"

    def test_panels_get_titles(self, git):
        app = CommitApp(Repository(git), Config(border="heavy"))

        async def scenario():
            async with app.run_test(size=(100, 40)) as pilot:
                await pilot.pause()
                titles = {
                    name: app.query_one(f"#{name}", PanelArea).border_title
                    for name in (MESSAGE, FILES, DIFF)
                }
                assert app.query_one(f"#{FILES}", PanelArea).has_class("border-heavy")
                assert app.focused is app.query_one(f"#{FILES}", PanelArea)
                await pilot.press("q")
                return titles
        titles = asyncio.run(scenario())
        assert titles == {MESSAGE: " Git Commit ", FILES: " Files ", DIFF: " Preview "}
