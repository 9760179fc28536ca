from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Any


class SourceMode(str, Enum):
    LISTING = 'listing'    # parse served directory listings at runtime
    MANIFEST = 'manifest'  # precompiled table baked in at build time


class RoutingMode(str, Enum):
    PATH = 'path'  # /fibers
    HASH = 'hash'  # #fibers (static hosting without rewrites)


@dataclass
class Artwork:
    id: str
    title: str
    image: str  # relative to the portfolio asset root, e.g. "garments/coat.jpg"
    year: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Category:
    name: str
    display_name: str
    artworks: List[Artwork] = field(default_factory=list)


@dataclass(frozen=True)
class RouteState:
    """Navigation state. Home is never a stored category, only a route value."""
    kind: str  # home | category
    name: str = ''

    @classmethod
    def home(cls) -> 'RouteState':
        return cls('home')

    @classmethod
    def category(cls, name: str) -> 'RouteState':
        return cls('category', name)

    @property
    def is_home(self) -> bool:
        return self.kind == 'home'


@dataclass(frozen=True)
class PrefetchProgress:
    loaded: int
    total: int
    percentage: int


def artwork_from_dict(d: Dict[str, Any]) -> Artwork:
    """Safe conversion dropping unknown manifest keys."""
    allowed = {"id", "title", "image", "year", "description"}
    filtered = {k: v for k, v in d.items() if k in allowed}
    if filtered.get('year') is not None:
        filtered['year'] = str(filtered['year'])
    return Artwork(**filtered)


def category_from_dict(d: Dict[str, Any]) -> Category:
    from utils.naming import display_name_for
    name = d['name']
    return Category(
        name=name,
        display_name=d.get('display_name') or display_name_for(name),
        artworks=[artwork_from_dict(a) for a in d.get('artworks', [])],
    )
