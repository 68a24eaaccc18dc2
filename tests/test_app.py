"""Tests for BrowserApp wiring (no server is started)."""

import asyncio

import pytest

from catalog_browser.config import BrowserConfig
from catalog_browser.dashboard.app import BrowserApp
from catalog_browser.display_utils import MISSING_TEXT
from catalog_browser.source.artic import ArticPageSource
from catalog_browser.source.frame import FramePageSource


@pytest.fixture
def app(catalog_df):
    config = BrowserConfig(page_size=4, fields=["id", "title", "inscriptions"])
    app = BrowserApp(source=FramePageSource(catalog_df), config=config)
    asyncio.run(app._on_load())
    return app


class TestBrowserApp:
    def test_first_page_rendered(self, app):
        assert len(app.table.value) == 4
        assert list(app.table.value.columns) == ["title", "inscriptions"]
        assert app.table.value["inscriptions"].tolist()[1] == MISSING_TEXT
        assert app.page_label.object == "Page 1 of 3"
        assert app.prev_button.disabled
        assert not app.next_button.disabled

    def test_select_button_applies_count(self, app):
        app.count_input.value = 6
        app.select_button.clicks += 1
        assert app.table.selection == [0, 1, 2, 3]
        assert "Pending: 2" in app.summary.object
        assert app.count_input.value is None

    def test_next_drains_into_table(self, app):
        app.state.request_bulk_select(6)
        asyncio.run(app._on_next(None))
        assert app.table.selection == [0, 1]
        assert "Pending" not in app.summary.object
        assert app.page_label.object == "Page 2 of 3"

    def test_table_checkbox_reconciles(self, app):
        app.state.request_bulk_select(4)
        app.table.selection = [2]
        assert app.state.selected_count == 1
        assert app.state.is_selected("art_03")

    def test_invalid_count_shows_status(self, app):
        app.state.request_bulk_select(-1)
        assert app.status.object != ""
        assert app.state.selected_count == 0

    def test_session_destroyed_closes_state(self, app):
        app._on_session_destroyed(None)
        assert app.state.engine.closed
        assert app.controller.closed


class ClosingFrameSource(FramePageSource):
    def __init__(self, df):
        super().__init__(df)
        self.close_calls = 0

    def close(self):
        self.close_calls += 1


class TestSessions:
    def test_sessions_are_independent(self, catalog_df):
        config = BrowserConfig(page_size=4, fields=["id", "title", "inscriptions"])
        app = BrowserApp(source=FramePageSource(catalog_df), config=config)
        first, second = app.new_session(), app.new_session()
        assert first.controller is not second.controller
        assert first.source is second.source
        asyncio.run(first._on_load())
        asyncio.run(second._on_load())

        first._on_session_destroyed(None)
        assert first.controller.closed

        second.state.request_bulk_select(6)
        asyncio.run(second._on_next(None))
        assert second.state.selected_count == 6
        assert second.table.selection == [0, 1]
        assert not second.controller.closed
        assert not second.state.engine.closed

    def test_session_template_builds_new_session(self, catalog_df, monkeypatch):
        app = BrowserApp(source=FramePageSource(catalog_df))
        built = []
        monkeypatch.setattr(BrowserApp, "_build_template", lambda self: built.append(self))
        app._session_template()
        app._session_template()
        assert len(built) == 2
        assert built[0] is not built[1]
        assert app not in built

    def test_caller_source_left_open(self, catalog_df):
        source = ClosingFrameSource(catalog_df)
        app = BrowserApp(source=source)
        session = app.new_session()
        session._on_session_destroyed(None)
        assert source.close_calls == 0

    def test_default_source_closed_with_session(self, monkeypatch):
        closed = []
        monkeypatch.setattr(ArticPageSource, "close", lambda self: closed.append(self))
        app = BrowserApp()
        session = app.new_session()
        assert session.source is not app.source
        session._on_session_destroyed(None)
        assert closed == [session.source]
