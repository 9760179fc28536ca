"""Tabular view of what the portfolio holds, for the sidebar and CSV export."""
from typing import Iterable, Optional

import pandas as pd

from domain.models import Category

COLUMNS = ["category", "display_name", "artwork_id", "title", "year", "image", "prefetched"]


def catalogue_frame(categories: Iterable[Category], prefetched: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """One row per artwork; categories without artworks still get a row."""
    warmed = set(prefetched or [])
    rows = []
    for c in categories:
        if not c.artworks:
            rows.append({"category": c.name, "display_name": c.display_name})
            continue
        for a in c.artworks:
            rows.append({
                "category": c.name,
                "display_name": c.display_name,
                "artwork_id": a.id,
                "title": a.title,
                "year": a.year,
                "image": a.image,
                "prefetched": a.image in warmed,
            })
    return pd.DataFrame(rows, columns=COLUMNS)


def category_counts(frame: pd.DataFrame) -> pd.DataFrame:
    if frame.empty:
        return pd.DataFrame(columns=["category", "artworks"])
    counts = frame.groupby("category", sort=False)["artwork_id"].count()
    return counts.rename("artworks").reset_index()
