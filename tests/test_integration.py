"""Integration test: the full browse-and-select scenario.

Paged catalog replies → PageController → SelectionEngine drain → manual
uncheck → new bulk request replacing debt → fetch failure → teardown.
"""

import asyncio

import pytest
import requests

from catalog_browser.dashboard.controller import PageController
from catalog_browser.dashboard.state import BrowserState
from catalog_browser.source.artic import ArticPageSource


class PagedResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self._payload


class PagedCatalogSession:
    """Fake HTTP session serving 12 artworks, 4 per page."""

    def __init__(self, total=12):
        self.total = total
        self.down = False

    def get(self, url, params=None, timeout=None):
        if self.down:
            return PagedResponse(None, status_code=502)
        page, limit = params["page"], params["limit"]
        start = (page - 1) * limit
        ids = range(start + 1, min(start + limit, self.total) + 1)
        return PagedResponse({
            "pagination": {"total": self.total, "limit": limit, "current_page": page},
            "data": [{"id": i, "title": f"Artwork {i}"} for i in ids],
        })

    def close(self):
        pass


@pytest.fixture
def session():
    return PagedCatalogSession()


@pytest.fixture
def browser(session):
    controller = PageController(ArticPageSource(session=session), page_size=4)
    state = BrowserState(controller)
    asyncio.run(controller.load_page(1))
    return state


def visible_selected(state):
    page = state.controller.page
    return [page.ids[i] for i in state.visible_selection_indices()]


class TestFullScenario:
    def test_select_six_then_uncheck(self, browser):
        browser.request_bulk_select(6)
        assert visible_selected(browser) == [1, 2, 3, 4]
        assert browser.pending_debt == 2

        asyncio.run(browser.controller.next_page())
        assert visible_selected(browser) == [5, 6]
        assert browser.pending_debt == 0
        assert browser.selected_count == 6

        asyncio.run(browser.controller.previous_page())
        browser.update_visible_selection([1])
        assert visible_selected(browser) == [1]
        assert browser.is_selected(5) and browser.is_selected(6)
        assert browser.selected_count == 3

    def test_new_request_replaces_outstanding_debt(self, browser):
        browser.request_bulk_select(10)
        assert browser.pending_debt == 6

        asyncio.run(browser.controller.next_page())
        assert browser.pending_debt == 2
        browser.update_visible_selection([5])
        browser.request_bulk_select(1)
        assert browser.pending_debt == 0

        asyncio.run(browser.controller.next_page())
        assert visible_selected(browser) == []
        assert browser.selected_count == 6

    def test_fetch_failure_preserves_debt(self, browser, session):
        browser.request_bulk_select(9)
        session.down = True
        asyncio.run(browser.controller.next_page())
        assert browser.controller.page_index == 1
        assert browser.pending_debt == 5
        assert "502" in browser.controller.error

        session.down = False
        asyncio.run(browser.controller.next_page())
        asyncio.run(browser.controller.next_page())
        assert browser.pending_debt == 0
        assert browser.selected_count == 9
        assert visible_selected(browser) == [9]

    def test_more_requested_than_catalog_holds(self, browser):
        browser.request_bulk_select(50)
        for _ in range(5):
            asyncio.run(browser.controller.next_page())
        assert browser.selected_count == 12
        assert browser.pending_debt == 38

    def test_teardown_freezes_state(self, browser):
        browser.request_bulk_select(6)
        browser.close()
        asyncio.run(browser.controller.load_page(2))
        assert browser.pending_debt == 2
        assert browser.selected_count == 4
