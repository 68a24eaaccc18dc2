"""SelectionStore: selected record ids, pending debt, and a callback registry."""

from __future__ import annotations

from typing import Any, Callable, Hashable

SelectionCallback = Callable[[int, int], Any]


class SelectionStore:
    """Holds the selected ids and the outstanding bulk-select debt.

    Insertion order of ids is kept for display only. Registered callbacks
    are called as fn(selected_count, pending_debt) after any change.
    """

    def __init__(self) -> None:
        self._selected: dict[Hashable, None] = {}
        self._debt = 0
        self._callbacks: list[SelectionCallback] = []

    def is_selected(self, record_id: Hashable) -> bool:
        return record_id in self._selected

    def selected_count(self) -> int:
        return len(self._selected)

    def pending_debt(self) -> int:
        return self._debt

    @property
    def selected_ids(self) -> list:
        """Selected ids in the order they were selected."""
        return list(self._selected)

    def select(self, record_id: Hashable) -> None:
        """Select an id. No-op if it is already selected."""
        if record_id in self._selected:
            return
        self._selected[record_id] = None
        self._notify()

    def deselect(self, record_id: Hashable) -> None:
        """Deselect an id. No-op if it is not selected."""
        if record_id not in self._selected:
            return
        del self._selected[record_id]
        self._notify()

    def set_debt(self, debt: int) -> None:
        """Replace the pending debt."""
        if debt < 0:
            raise ValueError(f"Debt cannot be negative, got {debt}.")
        if debt == self._debt:
            return
        self._debt = debt
        self._notify()

    def clear(self) -> None:
        """Drop every selected id and any pending debt."""
        if not self._selected and self._debt == 0:
            return
        self._selected.clear()
        self._debt = 0
        self._notify()

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(selected_count, pending_debt)."""
        self._callbacks.append(callback)

    def _notify(self) -> None:
        for cb in self._callbacks:
            cb(len(self._selected), self._debt)

    def __repr__(self) -> str:
        return (
            f"SelectionStore(selected={len(self._selected)}, "
            f"debt={self._debt})"
        )
