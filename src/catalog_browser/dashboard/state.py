"""BrowserState: reactive UI boundary around the selection engine."""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable

import param

from ..core.engine import SelectionEngine
from ..core.validation import InvalidRequest
from .controller import PageController

log = logging.getLogger(__name__)


class BrowserState(param.Parameterized):
    """Centralized reactive state for the browser view.

    Mirrors the selection store into params the view can watch, turns
    table events into engine operations, and wires the engine's debt drain
    to page-load completions.
    """

    # --- Mirrored from the SelectionStore ---
    selected_count = param.Integer(default=0, bounds=(0, None))
    pending_debt = param.Integer(default=0, bounds=(0, None))

    # --- Custom selection input (None = empty box) ---
    custom_select_count = param.Integer(default=None, allow_None=True)

    # --- Status text ---
    status_text = param.String(default="")

    def __init__(
        self,
        controller: PageController,
        engine: SelectionEngine | None = None,
        **params,
    ) -> None:
        super().__init__(**params)
        self.controller = controller
        self.engine = engine if engine is not None else SelectionEngine()
        self.engine.store.on_change(self._on_store_change)
        self.controller.on_page_loaded(self.engine.drain_debt)
        self._on_store_change(
            self.engine.store.selected_count(), self.engine.store.pending_debt(),
        )

    def _on_store_change(self, selected_count: int, pending_debt: int) -> None:
        self.param.update(selected_count=selected_count, pending_debt=pending_debt)

    @property
    def summary(self) -> str:
        """Header text, e.g. 'Selected: 6 (Pending: 2)'."""
        text = f"Selected: {self.selected_count}"
        if self.pending_debt > 0:
            text += f" (Pending: {self.pending_debt})"
        return text

    def is_selected(self, record_id: Hashable) -> bool:
        return self.engine.store.is_selected(record_id)

    def request_bulk_select(self, value: Any = None) -> int:
        """Select ``value`` rows from the visible page onwards.

        Falls back to ``custom_select_count`` when no value is given. Invalid
        counts leave the selection untouched and only set status_text.
        Returns the number of rows selected on the visible page.
        """
        if value is None:
            value = self.custom_select_count
        page = self.controller.page
        if page is None:
            self.status_text = "No page loaded yet."
            return 0
        try:
            taken = self.engine.bulk_select(value, page)
        except InvalidRequest as e:
            log.info("Rejected bulk select: %s", e)
            self.status_text = str(e)
            return 0
        self.custom_select_count = None
        self.status_text = ""
        return taken

    def update_visible_selection(self, record_ids: Iterable[Hashable]) -> None:
        """Apply the full set of checked ids for the visible page."""
        page = self.controller.page
        if page is None:
            return
        self.engine.reconcile_manual_selection(page, record_ids)

    def update_visible_selection_indices(self, positions: Iterable[int]) -> None:
        """Apply checked rows reported as positions within the visible page."""
        page = self.controller.page
        if page is None:
            return
        ids = page.ids
        self.update_visible_selection(ids[i] for i in positions if 0 <= i < len(ids))

    def visible_selection_indices(self) -> list[int]:
        """Positions of selected rows on the visible page, for checkbox state."""
        page = self.controller.page
        if page is None:
            return []
        return [i for i, r in enumerate(page) if self.engine.store.is_selected(r.id)]

    def close(self) -> None:
        """Tear down the session: no operation runs after this."""
        self.controller.close()
        self.engine.close()
