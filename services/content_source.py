"""Where categories and artworks come from.

Two interchangeable strategies sit behind ``ContentSource``:

- ``ListingContentSource`` reads the asset server's directory listings at
  runtime, re-fetching on every call so the site mirrors the folder contents.
- ``ManifestContentSource`` answers from a table compiled at build time
  (``scripts/build_manifest.py``) and never touches the network.

Neither strategy lets a failure reach the caller. Category discovery falls
back to ``DEFAULT_CATEGORIES`` and artwork listing falls back to ``[]``.
"""
from __future__ import annotations

import copy
import logging
import time
from typing import List, Optional
from urllib.parse import quote

import httpx

from domain.constants import DEFAULT_CATEGORIES
from domain.models import Artwork, Category, SourceMode
from domain.settings import PortfolioSettings
from services import persistence
from utils.listing_parser import ListingParseError, parse_listing
from utils.naming import display_name_for, split_extension, title_from_filename

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {'Cache-Control': 'no-cache', 'Pragma': 'no-cache'}


class ContentSource:
    mode: SourceMode
    # True when artwork lists should be re-read on every category visit
    refreshes_on_visit = False

    async def list_categories(self) -> List[str]:
        raise NotImplementedError

    async def list_artworks(self, category_name: str) -> List[Artwork]:
        raise NotImplementedError

    def display_name(self, category_name: str) -> str:
        return display_name_for(category_name)


def artworks_from_filenames(category_name: str, filenames: List[str]) -> List[Artwork]:
    artworks = []
    for filename in filenames:
        stem, _ = split_extension(filename)
        artworks.append(Artwork(
            id=stem,
            title=title_from_filename(filename),
            image=f"{category_name}/{filename}",
        ))
    return artworks


class ListingContentSource(ContentSource):
    mode = SourceMode.LISTING
    refreshes_on_visit = True

    def __init__(self, listing_url: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self.listing_url = listing_url if listing_url.endswith('/') else listing_url + '/'
        self._client = client
        self._timeout = timeout

    async def _fetch(self, url: str) -> str:
        # cache-busting param on top of no-cache headers; some static hosts ignore the headers
        params = {'_': str(time.time_ns())}
        if self._client is not None:
            response = await self._client.get(url, params=params, headers=NO_CACHE_HEADERS)
        else:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(url, params=params, headers=NO_CACHE_HEADERS)
        response.raise_for_status()
        return response.text

    def category_url(self, category_name: str) -> str:
        return f"{self.listing_url}{quote(category_name)}/"

    async def list_categories(self) -> List[str]:
        try:
            document = await self._fetch(self.listing_url)
            names = parse_listing(document).folders
        except (httpx.HTTPError, httpx.InvalidURL, ListingParseError) as e:
            logger.warning(f"Category discovery failed ({e}); using default categories")
            return list(DEFAULT_CATEGORIES)
        logger.info(f"Discovered {len(names)} categories from {self.listing_url}")
        return names

    async def list_artworks(self, category_name: str) -> List[Artwork]:
        url = self.category_url(category_name)
        try:
            document = await self._fetch(url)
            filenames = parse_listing(document).files
        except (httpx.HTTPError, httpx.InvalidURL, ListingParseError) as e:
            logger.warning(f"Could not list artworks for '{category_name}': {e}")
            return []
        logger.debug(f"Loaded {len(filenames)} artworks for category: {category_name}")
        return artworks_from_filenames(category_name, filenames)


class ManifestContentSource(ContentSource):
    mode = SourceMode.MANIFEST

    def __init__(self, categories: List[Category]):
        self._categories = {c.name: c for c in categories}

    @classmethod
    def from_file(cls, filename: str) -> 'ManifestContentSource':
        try:
            categories = persistence.load_manifest(filename)
        except persistence.ManifestError as e:
            logger.warning(f"{e}; using default categories")
            categories = []
        if not categories:
            categories = [Category(name=n, display_name=display_name_for(n)) for n in DEFAULT_CATEGORIES]
        return cls(categories)

    async def list_categories(self) -> List[str]:
        return list(self._categories)

    async def list_artworks(self, category_name: str) -> List[Artwork]:
        category = self._categories.get(category_name)
        if category is None:
            return []
        return copy.deepcopy(category.artworks)

    def display_name(self, category_name: str) -> str:
        category = self._categories.get(category_name)
        return category.display_name if category else display_name_for(category_name)


def build_content_source(settings: PortfolioSettings, client: Optional[httpx.AsyncClient] = None) -> ContentSource:
    if settings.source_mode is SourceMode.MANIFEST:
        return ManifestContentSource.from_file(settings.manifest_file)
    return ListingContentSource(settings.listing_url, client=client, timeout=settings.request_timeout)
