"""Application controller.

Owns the single ``CategoryStore`` for a session and wires it to the content
source, the router and the prefetch cache. Every transition returns a
``ViewModel`` describing what the page should show; the Streamlit views only
paint it.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from domain.constants import ABOUT
from domain.models import Category, PrefetchProgress, RouteState
from domain.settings import PortfolioSettings
from services.content_source import ContentSource
from services.prefetch import HttpImageLoader, ImageLoader, PrefetchCache
from services.router import History, Router, SessionStorage
from services.store import CategoryStore
from ui.components.grid import render_about, render_artwork_grid
from ui.components.nav import render_home_navigation, render_sidebar_navigation
from ui.components.nodes import Node

logger = logging.getLogger(__name__)


@dataclass
class ViewModel:
    state: RouteState
    page: str  # home | about | category
    title: str = ''
    nodes: List[Node] = field(default_factory=list)


class PortfolioController:
    def __init__(self, settings: PortfolioSettings, source: ContentSource, history: History,
                 session: SessionStorage, image_loader: Optional[ImageLoader] = None):
        self.settings = settings
        self.source = source
        self.store = CategoryStore(source.mode)
        self.router = Router(self.store, history, session, settings.routing_mode)
        self.image_loader = image_loader or HttpImageLoader(settings.asset_root, timeout=settings.request_timeout)
        self.prefetch: Optional[PrefetchCache] = None
        self.view: ViewModel = ViewModel(RouteState.home(), 'home')

    # -- discovery ---------------------------------------------------------

    async def discover(self):
        names = await self.source.list_categories()
        categories = [Category(name=n, display_name=self.source.display_name(n)) for n in names]
        if ABOUT not in names:
            categories.append(Category(name=ABOUT, display_name=self.source.display_name(ABOUT)))
        self.store.replace_all(categories)
        if not self.source.refreshes_on_visit:
            for category in self.store.navigable():
                self.store.set_artworks(category.name, await self.source.list_artworks(category.name))
        logger.info(f"Portfolio data loaded: {self.store.names()}")

    async def startup(self) -> ViewModel:
        await self.discover()
        return await self.show(self.router.init())

    # -- transitions -------------------------------------------------------

    async def navigate(self, target: str) -> ViewModel:
        return await self.show(self.router.navigate(target))

    async def on_pop_state(self) -> ViewModel:
        return await self.show(self.router.on_pop_state())

    async def on_hash_change(self) -> ViewModel:
        return await self.show(self.router.on_hash_change())

    async def show(self, state: RouteState) -> ViewModel:
        if state.is_home:
            self.view = ViewModel(state, 'home', nodes=render_home_navigation(self.store))
        elif state.name == ABOUT:
            about = self.store.get(ABOUT)
            self.view = ViewModel(state, 'about', about.display_name if about else 'About', render_about())
        else:
            await self.visit_category(state.name)
        return self.view

    async def _refresh(self, name: str) -> bool:
        ticket = self.store.begin_fetch(name)
        artworks = await self.source.list_artworks(name)
        return self.store.set_artworks(name, artworks, ticket)

    async def visit_category(self, name: str):
        category = self.store.get(name)
        if category is None:
            return
        if self.source.refreshes_on_visit:
            await self._refresh(name)
        # a slower visit finishing after the user moved on must not repaint
        if self.router.state != RouteState.category(name):
            logger.debug(f"Dropping render for '{name}', route moved to {self.router.state}")
            return
        self.view = ViewModel(
            RouteState.category(name), 'category', category.display_name,
            render_artwork_grid(category.artworks, self.settings.asset_root, self.failed_images()),
        )

    # -- prefetch ----------------------------------------------------------

    async def warm_listing(self):
        """Listing mode only: read every category once so prefetch knows the images."""
        names = [c.name for c in self.store.navigable() if not c.artworks]
        await asyncio.gather(*(self._refresh(n) for n in names))

    async def build_prefetch_cache(self, on_progress: Optional[Callable[[PrefetchProgress], None]] = None) -> PrefetchCache:
        if self.prefetch is None:
            if self.source.refreshes_on_visit:
                await self.warm_listing()
            self.prefetch = PrefetchCache(self.store, self.image_loader,
                                          self.settings.prefetch_concurrency, on_progress)
        return self.prefetch

    def failed_images(self) -> List[str]:
        return self.prefetch.failed_paths() if self.prefetch else []

    def sidebar_nodes(self) -> List[Node]:
        return render_sidebar_navigation(self.store, self.router.state)
