"""PageController: tracks the current page and runs page fetches."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Callable

import param

from ..core.records import Page
from ..core.validation import validate_page_params
from ..source.base import FetchError, PageSource

log = logging.getLogger(__name__)

PageListener = Callable[[Page], Any]


class PageController(param.Parameterized):
    """Owns pagination for one browsing session.

    Fetches run in a worker thread; completions are handled back on the
    event loop one at a time. Only the most recently requested page is
    applied: a completion overtaken by a later request is dropped, and after
    close() every completion is dropped.

    Listeners registered with on_page_loaded() see each applied page before
    the ``page`` param changes, so selection is settled by the time the view
    re-renders.
    """

    page_index = param.Integer(default=1, bounds=(1, None), doc="Displayed page (1-based)")
    page_size = param.Integer(default=12, bounds=(1, None))
    total_count = param.Integer(default=0, bounds=(0, None))
    loading = param.Boolean(default=False)
    error = param.String(default="")
    page = param.ClassSelector(class_=Page, default=None, allow_None=True)

    def __init__(self, source: PageSource, **params) -> None:
        super().__init__(**params)
        self._source = source
        self._listeners: list[PageListener] = []
        self._ticket = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page_index < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page_index > 1

    def on_page_loaded(self, listener: PageListener) -> None:
        """Register a callback: fn(page), called once per applied page."""
        self._listeners.append(listener)

    def _is_stale(self, ticket: int) -> bool:
        return self._closed or ticket != self._ticket

    async def load_page(self, page_index: int) -> Page | None:
        """Fetch and apply ``page_index``.

        Returns the applied page, or None when the fetch failed, was
        superseded, or the controller was closed meanwhile. A failed fetch
        keeps the previous page on screen and records the error text.
        """
        if self._closed:
            return None
        validate_page_params(page_index, self.page_size)

        self._ticket += 1
        ticket = self._ticket
        self.param.update(loading=True, error="")
        try:
            page = await asyncio.to_thread(
                self._source.fetch_page, page_index, self.page_size,
            )
        except FetchError as e:
            if not self._is_stale(ticket):
                log.warning("Failed to load page %d: %s", page_index, e)
                self.error = str(e)
            return None
        finally:
            if not self._is_stale(ticket):
                self.loading = False

        if self._is_stale(ticket):
            log.debug("Dropping stale completion for page %d", page_index)
            return None

        for listener in self._listeners:
            listener(page)
        self.param.update(
            page=page,
            page_index=page.page_index,
            total_count=page.total_count,
        )
        return page

    async def next_page(self) -> Page | None:
        if not self.has_next:
            return None
        return await self.load_page(self.page_index + 1)

    async def previous_page(self) -> Page | None:
        if not self.has_previous:
            return None
        return await self.load_page(self.page_index - 1)

    async def reload(self) -> Page | None:
        """Fetch the displayed page again."""
        return await self.load_page(self.page_index)

    def close(self) -> None:
        """Tear down: in-flight and future loads are ignored."""
        self._closed = True
        self.loading = False
        log.debug("PageController closed on page %d", self.page_index)
