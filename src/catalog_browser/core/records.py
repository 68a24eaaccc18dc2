"""Record and Page: the immutable data model for catalog pages.

A Page is a single fetched slice of the remote catalog. Pages are never
cached beyond the one on screen, so nothing here assumes a past page can be
observed again.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Iterator, Mapping

import pandas as pd

from .validation import validate_page_params, validate_unique_ids


@dataclass(frozen=True)
class Record:
    """One catalog row. Only ``id`` matters to selection; ``fields`` is for display."""

    id: Hashable
    fields: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], id_key: str = "id") -> Record:
        """Build a Record from an API item, keeping every other key as a field."""
        if id_key not in data:
            raise KeyError(f"Record is missing its '{id_key}' key: {dict(data)!r}")
        fields = {k: v for k, v in data.items() if k != id_key}
        return cls(id=data[id_key], fields=fields)


@dataclass(frozen=True)
class Page:
    """An ordered slice of records plus pagination metadata.

    ``page_index`` is 1-based, matching how the catalog API counts pages.
    """

    records: tuple[Record, ...]
    page_index: int
    page_size: int
    total_count: int

    def __post_init__(self) -> None:
        validate_page_params(self.page_index, self.page_size)
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}.")
        object.__setattr__(self, "records", tuple(self.records))
        validate_unique_ids([r.id for r in self.records])

    @classmethod
    def from_items(
        cls,
        items: Iterable[Mapping[str, Any]],
        page_index: int,
        page_size: int,
        total_count: int,
        id_key: str = "id",
    ) -> Page:
        """Build a Page from raw API dicts."""
        records = tuple(Record.from_mapping(item, id_key=id_key) for item in items)
        return cls(records, page_index, page_size, total_count)

    @property
    def ids(self) -> list:
        """Record ids in page order."""
        return [r.id for r in self.records]

    @property
    def page_count(self) -> int:
        """Total number of pages implied by total_count and page_size."""
        return math.ceil(self.total_count / self.page_size)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def to_frame(self, columns: list[str] | None = None) -> pd.DataFrame:
        """Return the page as a DataFrame indexed by record id, in page order."""
        df = pd.DataFrame(
            [dict(r.fields) for r in self.records],
            index=pd.Index(self.ids, name="id"),
            columns=columns,
        )
        return df

    def __repr__(self) -> str:
        return (
            f"Page(index={self.page_index}, size={self.page_size}, "
            f"records={len(self.records)}, total={self.total_count})"
        )
