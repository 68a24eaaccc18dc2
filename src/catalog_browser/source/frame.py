"""FramePageSource: serves pages out of an in-memory DataFrame."""

from __future__ import annotations

from typing import Any

import pandas as pd

from ..core.records import Page, Record
from ..core.validation import validate_page_params
from .base import PageSource


class FramePageSource(PageSource):
    """Pages over a DataFrame whose index holds the record ids.

    Useful for demos and tests. Pages past the end come back empty, like the
    remote catalog does.
    """

    def __init__(self, df: pd.DataFrame) -> None:
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"Expected a pandas DataFrame, got {type(df).__name__}.")
        if df.index.has_duplicates:
            dupes = df.index[df.index.duplicated()].unique().tolist()
            raise ValueError(f"Record IDs must be unique. Found duplicates: {dupes[:5]}")
        self._df = df

    @property
    def total_count(self) -> int:
        return len(self._df)

    def fetch_page(self, page_index: int, page_size: int) -> Page:
        validate_page_params(page_index, page_size)
        start = (page_index - 1) * page_size
        chunk = self._df.iloc[start:start + page_size]
        records = tuple(
            Record(id=_to_python(rid), fields=row.to_dict())
            for rid, row in chunk.iterrows()
        )
        return Page(records, page_index, page_size, len(self._df))


def _to_python(value: Any) -> Any:
    """Unwrap numpy scalars so ids compare and hash like plain Python values."""
    return value.item() if hasattr(value, "item") else value
