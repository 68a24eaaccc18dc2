"""ArticPageSource: pages of artworks from the Art Institute of Chicago API."""

from __future__ import annotations

import logging
import threading

import requests

from ..core.records import Page
from ..core.validation import validate_page_params
from .base import FetchError, PageSource

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.artic.edu/api/v1"
DEFAULT_FIELDS = (
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
)


class ArticPageSource(PageSource):
    """Fetches ``/artworks?page=&limit=&fields=`` and parses the paginated reply.

    The reply carries the page items under ``data`` and the catalog size
    under ``pagination.total``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        fields: tuple[str, ...] | list[str] = DEFAULT_FIELDS,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.fields = tuple(fields)
        if "id" not in self.fields:
            self.fields = ("id",) + self.fields
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        # requests.Session is not thread-safe; fetches run in worker threads
        self._session_lock = threading.Lock()

    @property
    def url(self) -> str:
        return f"{self.base_url}/artworks"

    def fetch_page(self, page_index: int, page_size: int) -> Page:
        validate_page_params(page_index, page_size)
        params = {
            "page": page_index,
            "limit": page_size,
            "fields": ",".join(self.fields),
        }
        try:
            with self._session_lock:
                response = self._session.get(
                    self.url, params=params, timeout=self.timeout,
                )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise FetchError(f"Catalog returned an error for page {page_index}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Could not reach catalog for page {page_index}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"Catalog sent invalid JSON for page {page_index}.") from e

        try:
            items = payload["data"]
            total = int(payload["pagination"]["total"])
            page = Page.from_items(items, page_index, page_size, total)
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError(
                f"Unexpected catalog response for page {page_index}: {e}"
            ) from e

        log.debug("Fetched page %d (%d records, total %d)", page_index, len(page), total)
        return page

    def close(self) -> None:
        """Close the underlying HTTP session."""
        with self._session_lock:
            self._session.close()
