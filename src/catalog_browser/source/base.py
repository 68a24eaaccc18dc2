"""PageSource: abstract page provider."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.records import Page


class FetchError(RuntimeError):
    """A page could not be fetched from the upstream catalog."""


class PageSource(ABC):
    """Returns one page of records plus the total record count.

    Implementations raise FetchError for any upstream failure.
    """

    @abstractmethod
    def fetch_page(self, page_index: int, page_size: int) -> Page:
        """Fetch the 1-based ``page_index`` with ``page_size`` records per page."""

    def close(self) -> None:
        """Release any resources held by the source."""
