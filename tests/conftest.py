"""Shared test fixtures for catalog-browser."""

import threading

import pandas as pd
import pytest

from catalog_browser.core.records import Page, Record
from catalog_browser.source.base import FetchError, PageSource


def _page(ids, page_index=1, page_size=4, total_count=12):
    records = tuple(Record(id=i, fields={"title": f"Title {i}"}) for i in ids)
    return Page(records, page_index, page_size, total_count)


@pytest.fixture
def make_page():
    """Factory: make_page(ids, page_index=1, page_size=4, total_count=12)."""
    return _page


@pytest.fixture
def page1():
    return _page(["id1", "id2", "id3", "id4"], page_index=1)


@pytest.fixture
def page2():
    return _page(["id5", "id6", "id7", "id8"], page_index=2)


@pytest.fixture
def page3():
    return _page(["id9", "id10", "id11", "id12"], page_index=3)


@pytest.fixture
def catalog_df():
    """10 artworks; page size 4 gives pages of 4, 4, 2."""
    ids = [f"art_{i:02d}" for i in range(1, 11)]
    return pd.DataFrame(
        {
            "title": [f"Artwork {i}" for i in range(1, 11)],
            "inscriptions": ["signed", None, "", "dated"] + ["n/a"] * 6,
        },
        index=ids,
    )


class FailingSource(PageSource):
    """Fails every fetch until ``healthy`` is set, then delegates."""

    def __init__(self, inner: PageSource) -> None:
        self.inner = inner
        self.healthy = True
        self.calls = 0

    def fetch_page(self, page_index, page_size):
        self.calls += 1
        if not self.healthy:
            raise FetchError(f"upstream down for page {page_index}")
        return self.inner.fetch_page(page_index, page_size)


class GatedSource(PageSource):
    """Blocks each fetch until release(page_index) is called."""

    def __init__(self, inner: PageSource) -> None:
        self.inner = inner
        self._gates: dict[int, threading.Event] = {}
        self._lock = threading.Lock()

    def _gate(self, page_index):
        with self._lock:
            return self._gates.setdefault(page_index, threading.Event())

    def release(self, page_index):
        self._gate(page_index).set()

    def fetch_page(self, page_index, page_size):
        if not self._gate(page_index).wait(timeout=5):
            raise FetchError(f"gate for page {page_index} never opened")
        return self.inner.fetch_page(page_index, page_size)


@pytest.fixture
def failing_source_cls():
    return FailingSource


@pytest.fixture
def gated_source_cls():
    return GatedSource
