import asyncio
import logging

import streamlit as st

from domain.constants import ARTIST_NAME, REDIRECT_STASH_KEY
from domain.models import RoutingMode
from domain.settings import load_settings
from services.catalogue import catalogue_frame, category_counts
from services.content_source import build_content_source
from services.controller import PortfolioController
from services.router import InMemoryHistory, SessionStorage

# Import the page rendering functions from the view modules
from views import home, category, about

# --- View Registry ---
# Maps a ViewModel.page key to its label and rendering function.
VIEW_REGISTRY = {
    "home": {
        "label": "Home",
        "render_func": home.view,
        "sidebar": False,
    },
    "category": {
        "label": "Category",
        "render_func": category.view,
        "sidebar": True,
    },
    "about": {
        "label": "About",
        "render_func": about.view,
        "sidebar": True,
    },
}

CONTROLLER_KEY = "portfolio_controller"
STORAGE_KEY = "portfolio_session_storage"


def _run(coro):
    return asyncio.run(coro)


def _address_bar() -> str:
    """The query string plays the address bar: ?route=#fibers or ?route=/fibers."""
    raw = st.query_params.get("route")
    return raw if isinstance(raw, str) and raw else ""


def _stash_redirect(storage: SessionStorage):
    # The not-found page sends visitors to /?redirect=<requested path>; keep it for one load
    redirect = st.query_params.get("redirect")
    if redirect:
        storage.set(REDIRECT_STASH_KEY, redirect)
        del st.query_params["redirect"]


def _get_controller() -> PortfolioController:
    if CONTROLLER_KEY in st.session_state:
        return st.session_state[CONTROLLER_KEY]

    settings = load_settings()
    storage = SessionStorage(st.session_state.setdefault(STORAGE_KEY, {}))
    _stash_redirect(storage)
    initial = _address_bar() or ("#" if settings.routing_mode is RoutingMode.HASH else "/")
    controller = PortfolioController(
        settings,
        build_content_source(settings),
        InMemoryHistory(initial),
        storage,
    )
    _run(controller.startup())
    st.session_state[CONTROLLER_KEY] = controller
    return controller


def _sync_address_bar(controller: PortfolioController):
    """React to the address bar changing outside the app (browser back/forward, edited link)."""
    history = controller.router.history
    address = _address_bar()
    if not address or address == history.current():
        return
    idx = history.index
    if idx > 0 and history.entries[idx - 1].url == address:
        history.back()
        _run(controller.on_pop_state())
    elif idx + 1 < history.length and history.entries[idx + 1].url == address:
        history.forward()
        _run(controller.on_pop_state())
    else:
        history.replace_current(address)
        _run(controller.on_hash_change())


def _render_sidebar(controller: PortfolioController):
    st.sidebar.title(ARTIST_NAME)
    for item in controller.sidebar_nodes()[0].children:
        link = item.children[0]
        target = link.attrs["data-category"]
        active = link.has_class("active")
        if st.sidebar.button(link.text, key=f"nav_{target}", type="primary" if active else "secondary",
                             use_container_width=True):
            st.session_state.nav_target = target
            st.rerun()

    history = controller.router.history
    c1, c2 = st.sidebar.columns(2)
    if c1.button("← Back", disabled=history.index == 0):
        history.back()
        _run(controller.on_pop_state())
        st.query_params["route"] = history.current()
        st.rerun()
    if c2.button("Forward →", disabled=history.index >= history.length - 1):
        history.forward()
        _run(controller.on_pop_state())
        st.query_params["route"] = history.current()
        st.rerun()


def _render_catalogue(controller: PortfolioController):
    warmed = []
    if controller.prefetch is not None:
        warmed = [a.image for a in controller.store.all_artworks() if controller.prefetch.is_prefetched(a.image)]
    frame = catalogue_frame(controller.store.navigable(), warmed)
    with st.sidebar.expander("Catalogue", expanded=False):
        st.dataframe(category_counts(frame), hide_index=True)


def _run_prefetch(controller: PortfolioController):
    """Warm every image once per session, after the current view is on screen."""
    if st.session_state.get("prefetch_done"):
        progress = controller.prefetch.progress()
        st.sidebar.caption(f"Images ready: {progress.loaded}/{progress.total}")
        return
    bar = st.sidebar.progress(0, text="Loading images…")

    def _update(p):
        bar.progress(p.percentage, text=f"Loading images… {p.loaded}/{p.total}")

    async def _prefetch():
        cache = await controller.build_prefetch_cache(on_progress=_update)
        return await cache.prefetch_all()

    progress = _run(_prefetch())
    bar.progress(100, text=f"Images ready: {progress.loaded}/{progress.total}")
    st.session_state.prefetch_done = True


def main():
    """
    Main application router.

    Builds (once per session) the controller, applies any pending navigation
    request or address-bar change, mirrors the route into the query string and
    renders the current view. Image prefetch starts after the first paint.
    """
    st.set_page_config(page_title=ARTIST_NAME, layout="wide")
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    controller = _get_controller()

    if "nav_target" in st.session_state:
        target = st.session_state.nav_target
        del st.session_state.nav_target
        _run(controller.navigate(target))
    else:
        _sync_address_bar(controller)

    vm = controller.view
    st.query_params["route"] = controller.router.history.current()

    if controller.router.last_rejected:
        st.toast(f"'{controller.router.last_rejected}' was not found. Showing the home page.")
        controller.router.last_rejected = None

    page = VIEW_REGISTRY[vm.page]
    if page["sidebar"]:
        _render_sidebar(controller)

    page["render_func"](vm, controller)

    _run_prefetch(controller)
    _render_catalogue(controller)


if __name__ == "__main__":
    main()
