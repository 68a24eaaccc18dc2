"""SelectionEngine: deferred cross-page selection.

"Select the next N rows" is applied to the visible page first. Whatever the
page could not supply becomes debt, which is paid down from each page as it
finishes loading. Manual checkbox changes are reconciled per visible page
and never touch rows on other pages.

The engine is the only mutator of its SelectionStore. All operations run on
a single event stream; none of them can fail once their inputs are valid.
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterable

from .records import Page
from .selection_store import SelectionStore
from .validation import validate_bulk_count

log = logging.getLogger(__name__)


class SelectionEngine:
    """State transitions over (selected ids, debt) for one browsing session."""

    def __init__(self, store: SelectionStore | None = None) -> None:
        self.store = store if store is not None else SelectionStore()
        # Page indices already paid into the current obligation.
        self._drained_pages: set[int] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down: every later operation is ignored."""
        self._closed = True
        log.debug("SelectionEngine closed with debt=%d", self.store.pending_debt())

    def _select_unselected(self, page: Page, limit: int) -> int:
        """Select up to ``limit`` unselected records in page order."""
        selected = 0
        for record in page:
            if selected >= limit:
                break
            if not self.store.is_selected(record.id):
                self.store.select(record.id)
                selected += 1
        return selected

    def bulk_select(self, requested_count: int, visible_page: Page) -> int:
        """Select ``requested_count`` rows starting at the visible page.

        Rows the visible page cannot supply become the new debt, replacing
        any debt left from an earlier request. Returns the number of rows
        selected on the visible page.

        Raises InvalidRequest (before any change) for a non-positive or
        non-integer count.
        """
        requested_count = validate_bulk_count(requested_count)
        if self._closed:
            log.debug("bulk_select ignored: engine closed")
            return 0

        taken = self._select_unselected(visible_page, requested_count)
        self.store.set_debt(requested_count - taken)
        self._drained_pages = {visible_page.page_index}
        log.debug(
            "bulk_select(%d) on page %d: selected %d, debt %d",
            requested_count, visible_page.page_index, taken,
            self.store.pending_debt(),
        )
        return taken

    def drain_debt(self, new_page: Page) -> int:
        """Pay outstanding debt from a freshly loaded page.

        Each page index is drained at most once per obligation, so a
        reloaded page does not select extra rows. Returns the number of
        rows selected.
        """
        if self._closed:
            log.debug("drain_debt ignored: engine closed")
            return 0
        debt = self.store.pending_debt()
        if debt == 0:
            return 0
        if new_page.page_index in self._drained_pages:
            log.debug("Page %d already drained, skipping", new_page.page_index)
            return 0

        available = sum(1 for r in new_page if not self.store.is_selected(r.id))
        to_select = min(debt, available)
        taken = self._select_unselected(new_page, to_select)
        self.store.set_debt(debt - taken)
        self._drained_pages.add(new_page.page_index)
        log.debug(
            "Drained %d row(s) from page %d, debt %d -> %d",
            taken, new_page.page_index, debt, self.store.pending_debt(),
        )
        return taken

    def reconcile_manual_selection(
        self,
        visible_page: Page,
        new_selection_ids: Iterable[Hashable],
    ) -> None:
        """Make the visible page's selection match the checked ids.

        Rows on other pages are untouched. Ids that are not on the visible
        page are dropped. Debt is not changed.
        """
        if self._closed:
            log.debug("reconcile ignored: engine closed")
            return

        checked = set(new_selection_ids)
        page_ids = visible_page.ids
        stray = checked.difference(page_ids)
        if stray:
            log.debug("Ignoring %d checked id(s) not on page %d", len(stray),
                      visible_page.page_index)

        for rid in page_ids:
            if rid in checked:
                self.store.select(rid)
            elif self.store.is_selected(rid):
                self.store.deselect(rid)

    def __repr__(self) -> str:
        return f"SelectionEngine({self.store!r}, closed={self._closed})"
