"""Navigation state machine.

States are ``RouteState.home()`` and ``RouteState.category(name)``. The
address bar uses one of two grammars, fixed per deployment:

    path mode   /  /home  -> Home        /<name> -> Category(name)
    hash mode   (none) # #home -> Home   #<name> -> Category(name)

Unknown names resolve to Home. ``init`` and the pop/hash handlers never push a
history entry; only ``navigate`` does. ``init`` rewrites the current entry so
the address bar matches the restored state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote, unquote, urlsplit

from domain.constants import HOME, REDIRECT_STASH_KEY
from domain.models import RouteState, RoutingMode
from services.store import CategoryStore

logger = logging.getLogger(__name__)


class SessionStorage:
    """Volatile per-session key/value storage (cleared with the session)."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self._data = data if data is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value

    def pop(self, key: str) -> Optional[str]:
        return self._data.pop(key, None)


@dataclass
class HistoryEntry:
    url: str
    state: Optional[RouteState] = None


class History:
    """Minimal browser history: a stack of URLs with a cursor."""

    def current(self) -> str:
        raise NotImplementedError

    def push(self, url: str, state: Optional[RouteState] = None):
        raise NotImplementedError

    def replace_current(self, url: str, state: Optional[RouteState] = None):
        raise NotImplementedError


class InMemoryHistory(History):
    def __init__(self, initial_url: str = '/'):
        self.entries: List[HistoryEntry] = [HistoryEntry(initial_url)]
        self.index = 0

    @property
    def length(self) -> int:
        return len(self.entries)

    def current(self) -> str:
        return self.entries[self.index].url

    def push(self, url: str, state: Optional[RouteState] = None):
        # pushing drops any forward entries, as browsers do
        del self.entries[self.index + 1:]
        self.entries.append(HistoryEntry(url, state))
        self.index += 1

    def back(self) -> bool:
        if self.index == 0:
            return False
        self.index -= 1
        return True

    def forward(self) -> bool:
        if self.index >= len(self.entries) - 1:
            return False
        self.index += 1
        return True

    def replace_current(self, url: str, state: Optional[RouteState] = None):
        """Rewrite the current entry in place (replaceState, or typing a new hash)."""
        self.entries[self.index] = HistoryEntry(url, state)


def target_from_path(path: str) -> str:
    path = urlsplit(path).path if '://' in path else path.split('?', 1)[0].split('#', 1)[0]
    segment = path.strip('/')
    if not segment:
        return HOME
    return unquote(segment.split('/', 1)[0])


def target_from_hash(url: str) -> str:
    _, sep, fragment = url.partition('#')
    if not sep or not fragment:
        return HOME
    return unquote(fragment.strip('/')) or HOME


class Router:
    def __init__(self, store: CategoryStore, history: History, session: SessionStorage,
                 mode: RoutingMode = RoutingMode.HASH):
        self.store = store
        self.history = history
        self.session = session
        self.mode = mode
        self.state: RouteState = RouteState.home()
        self.last_rejected: Optional[str] = None

    # -- grammar -----------------------------------------------------------

    def target_from_url(self, url: str) -> str:
        if self.mode is RoutingMode.HASH:
            return target_from_hash(url)
        return target_from_path(url)

    def url_for(self, state: RouteState) -> str:
        if self.mode is RoutingMode.HASH:
            return '#' if state.is_home else f"#{quote(state.name)}"
        return '/' if state.is_home else f"/{quote(state.name)}"

    def resolve(self, target: str) -> RouteState:
        """Validate a target name against the store; unknown names go Home."""
        if not target or target == HOME:
            return RouteState.home()
        if self.store.get(target) is None:
            logger.warning(f"Category '{target}' not found, showing home")
            self.last_rejected = target
            return RouteState.home()
        return RouteState.category(target)

    # -- transitions -------------------------------------------------------

    def init(self) -> RouteState:
        """Initial route: a stashed not-found path wins, consumed exactly once."""
        self.last_rejected = None
        stashed = self.session.pop(REDIRECT_STASH_KEY)
        if stashed:
            logger.info(f"Restoring stashed path {stashed}")
            target = target_from_path(stashed)
        else:
            target = self.target_from_url(self.history.current())
        self.state = self.resolve(target)
        # the address bar follows the resolved state without adding an entry
        url = self.url_for(self.state)
        if url != self.history.current():
            self.history.replace_current(url, self.state)
        return self.state

    def navigate(self, target: str) -> RouteState:
        self.last_rejected = None
        self.state = self.resolve(target)
        url = self.url_for(self.state)
        if url != self.history.current():
            self.history.push(url, self.state)
        return self.state

    def on_pop_state(self) -> RouteState:
        self.last_rejected = None
        self.state = self.resolve(self.target_from_url(self.history.current()))
        return self.state

    def on_hash_change(self) -> RouteState:
        return self.on_pop_state()
