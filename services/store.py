"""In-memory category records for the running session."""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from domain.constants import RESERVED_NAMES
from domain.models import Artwork, Category, SourceMode

logger = logging.getLogger(__name__)


class CategoryStore:
    """Ordered map from category name to record.

    Listing mode replaces a category's artworks on every visit; manifest mode
    sets them once. Per-category fetch tickets let the controller drop a slow
    response that arrives after a newer request for the same category.
    """

    def __init__(self, mode: SourceMode = SourceMode.LISTING):
        self.mode = mode
        self._categories: Dict[str, Category] = {}
        self._tickets: Dict[str, int] = {}
        self._assigned: set = set()

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories.values())

    def add(self, category: Category):
        if category.name in self._categories:
            logger.debug(f"Category '{category.name}' already present, keeping first")
            return
        self._categories[category.name] = category

    def replace_all(self, categories: List[Category]):
        self._categories = {}
        self._tickets = {}
        self._assigned = set()
        for c in categories:
            self.add(c)

    def get(self, name: str) -> Optional[Category]:
        """The record, or None when the name is unknown."""
        return self._categories.get(name)

    def names(self) -> List[str]:
        return list(self._categories)

    def categories(self) -> List[Category]:
        return list(self._categories.values())

    def navigable(self) -> List[Category]:
        """Non-reserved categories in discovery order."""
        return [c for c in self._categories.values() if c.name not in RESERVED_NAMES]

    def all_artworks(self) -> List[Artwork]:
        return [a for c in self.navigable() for a in c.artworks]

    def total_artworks(self) -> int:
        return len(self.all_artworks())

    def begin_fetch(self, name: str) -> int:
        ticket = self._tickets.get(name, 0) + 1
        self._tickets[name] = ticket
        return ticket

    def is_current(self, name: str, ticket: int) -> bool:
        return self._tickets.get(name, 0) == ticket

    def set_artworks(self, name: str, artworks: List[Artwork], ticket: Optional[int] = None) -> bool:
        """Replace a category's artworks. Returns False when the update is refused."""
        category = self._categories.get(name)
        if category is None:
            return False
        if ticket is not None and not self.is_current(name, ticket):
            logger.debug(f"Discarding stale artwork list for '{name}' (ticket {ticket})")
            return False
        if self.mode is SourceMode.MANIFEST and name in self._assigned:
            logger.debug(f"Artworks for '{name}' are fixed in manifest mode")
            return False
        category.artworks = list(artworks)
        self._assigned.add(name)
        return True
