"""Input validation with clear error messages for catalog pages and requests."""

from __future__ import annotations

from typing import Any, Sequence


class InvalidRequest(ValueError):
    """A bulk-select request that cannot be applied (non-positive or non-integer)."""


def validate_bulk_count(value: Any) -> int:
    """Validate a user-supplied bulk-select count.

    Returns the count as an int. Raises InvalidRequest for anything that is
    not a strictly positive integer (bools and floats included).
    """
    if isinstance(value, bool) or value is None:
        raise InvalidRequest(
            f"Row count must be a positive whole number, got {value!r}."
        )
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidRequest(
                f"Row count must be a whole number, got {value!r}."
            )
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidRequest(
                f"Row count must be a number, got {value!r}."
            ) from None
    if not isinstance(value, int):
        raise InvalidRequest(
            f"Row count must be a number, got {type(value).__name__}."
        )
    if value <= 0:
        raise InvalidRequest(f"Row count must be positive, got {value}.")
    return value


def validate_page_params(page_index: Any, page_size: Any) -> tuple[int, int]:
    """Validate 1-based page index and page size."""
    for name, val in (("page_index", page_index), ("page_size", page_size)):
        if isinstance(val, bool) or not isinstance(val, int):
            raise TypeError(
                f"{name} must be an int, got {type(val).__name__}."
            )
    if page_index < 1:
        raise ValueError(f"page_index is 1-based, got {page_index}.")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}.")
    return page_index, page_size


def validate_unique_ids(ids: Sequence, what: str = "Page") -> None:
    """Raise ValueError if ids contains duplicates."""
    seen = set()
    dupes = []
    for rid in ids:
        if rid in seen:
            dupes.append(rid)
        seen.add(rid)
    if dupes:
        raise ValueError(
            f"{what} record IDs must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
