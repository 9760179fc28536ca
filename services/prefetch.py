"""Background image warm-up.

Every distinct image path known at startup is requested once. A request that
fails still counts as settled, so ``progress().percentage`` reaches 100 once
``prefetch_all()`` returns; ``loaded`` only counts images that came back.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote

import httpx

from domain.models import PrefetchProgress
from services.store import CategoryStore

logger = logging.getLogger(__name__)

ImageLoader = Callable[[str], Awaitable[bool]]


class HttpImageLoader:
    """Loads an image path under the asset root; resolves True when it arrived as an image."""

    def __init__(self, asset_root: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self.asset_root = asset_root if asset_root.endswith('/') else asset_root + '/'
        self._client = client
        self._timeout = timeout

    def url_for(self, path: str) -> str:
        return self.asset_root + quote(path)

    async def _get(self, client: httpx.AsyncClient, path: str) -> bool:
        response = await client.get(self.url_for(path))
        if not response.is_success:
            return False
        content_type = response.headers.get('content-type', '')
        return not content_type or content_type.startswith('image/')

    @asynccontextmanager
    async def session(self):
        """Share one client across a batch of loads unless one was injected."""
        if self._client is not None:
            yield self
            return
        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            self._client = client
            try:
                yield self
            finally:
                self._client = None

    async def __call__(self, path: str) -> bool:
        if self._client is not None:
            return await self._get(self._client, path)
        async with self.session():
            return await self._get(self._client, path)


class PrefetchCache:
    def __init__(self, store: CategoryStore, loader: ImageLoader, max_concurrency: int = 0,
                 on_progress: Optional[Callable[[PrefetchProgress], None]] = None):
        self._loader = loader
        self._paths: List[str] = list(dict.fromkeys(a.image for a in store.all_artworks()))
        self.total = len(self._paths)
        self._results: Dict[str, bool] = {}
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None
        self._on_progress = on_progress

    @property
    def loaded(self) -> int:
        return sum(1 for ok in self._results.values() if ok)

    async def _load(self, path: str) -> bool:
        try:
            ok = bool(await self._loader(path))
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.debug(f"Prefetch failed for {path}: {e}")
            ok = False
        except Exception as e:
            logger.warning(f"Image loader error for {path}: {e}")
            ok = False
        self._results[path] = ok
        if self._on_progress is not None:
            self._on_progress(self.progress())
        return ok

    async def _guarded(self, path: str) -> bool:
        if self._semaphore is None:
            return await self._load(path)
        async with self._semaphore:
            return await self._load(path)

    async def prefetch_all(self) -> PrefetchProgress:
        pending = [p for p in self._paths if p not in self._results]
        if pending:
            logger.info(f"Prefetching {len(pending)} images")
            session = getattr(self._loader, 'session', None)
            if session is None:
                await asyncio.gather(*(self._guarded(p) for p in pending))
            else:
                async with session():
                    await asyncio.gather(*(self._guarded(p) for p in pending))
        progress = self.progress()
        logger.info(f"Prefetch settled: {progress.loaded}/{progress.total} images loaded")
        return progress

    def is_prefetched(self, path: str) -> bool:
        return self._results.get(path, False)

    def failed_paths(self) -> List[str]:
        return [p for p, ok in self._results.items() if not ok]

    def progress(self) -> PrefetchProgress:
        if self.total == 0:
            return PrefetchProgress(loaded=0, total=0, percentage=100)
        settled = len(self._results)
        return PrefetchProgress(
            loaded=self.loaded,
            total=self.total,
            percentage=round(settled * 100 / self.total),
        )
