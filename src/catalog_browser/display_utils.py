"""Display utilities for column headers and table frames."""

from __future__ import annotations

import pandas as pd

from .core.records import Page

_ACRONYMS = {"id", "url", "api", "iiif"}

MISSING_TEXT = "N/A"


def prettify_name(name: str) -> str:
    """Convert snake_case names to Title Case with smart acronyms.

    Examples::

        prettify_name("place_of_origin")  # -> "Place Of Origin"
        prettify_name("image_id")         # -> "Image ID"
    """
    words = name.replace("_", " ").split()
    return " ".join(
        w.upper() if w.lower() in _ACRONYMS else w.capitalize()
        for w in words
    )


def display_frame(
    page: Page,
    columns: list[str],
    placeholder_columns: tuple[str, ...] = ("inscriptions",),
) -> pd.DataFrame:
    """Build the table frame for a page, one row per record in page order.

    Empty values in ``placeholder_columns`` show as "N/A".
    """
    df = page.to_frame(columns=columns).reset_index(drop=True)
    for col in placeholder_columns:
        if col in df.columns:
            df[col] = df[col].where(df[col].notna() & (df[col] != ""), MISSING_TEXT)
    return df


def empty_frame(columns: list[str]) -> pd.DataFrame:
    """Table frame with the given columns and no rows."""
    return pd.DataFrame(columns=columns)
