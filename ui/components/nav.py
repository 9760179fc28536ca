from typing import List

from domain.constants import ABOUT, ARTIST_NAME, HOME
from domain.models import RouteState
from services.store import CategoryStore
from .nodes import Node


def _link(name: str, label: str, cls: str, href: str = '#') -> Node:
    return Node('a', [cls], text=label, attrs={'href': href, 'data-category': name})


def render_home_navigation(store: CategoryStore) -> List[Node]:
    """Home page menu: artist name, each non-reserved category, then About last."""
    links = [_link(c.name, c.display_name, 'home-nav-link') for c in store.navigable()]
    about = store.get(ABOUT)
    links.append(_link(ABOUT, about.display_name if about else 'About', 'home-nav-link'))
    menu = Node('nav', ['home-navigation'],
                children=[Node('div', ['home-name'], text=ARTIST_NAME)] + links)
    return [Node('div', ['home-page'], children=[Node('div', ['home-content'], children=[menu])])]


def sidebar_entries(store: CategoryStore) -> List[tuple]:
    """(name, label) pairs: Home first, then every stored category in order."""
    return [(HOME, 'Home')] + [(c.name, c.display_name) for c in store.categories()]


def render_sidebar_navigation(store: CategoryStore, active: RouteState) -> List[Node]:
    active_name = HOME if active.is_home else active.name
    items = []
    for name, label in sidebar_entries(store):
        link = _link(name, label, 'nav-link')
        if name == active_name:
            link.classes.append('active')
        items.append(Node('li', children=[link]))
    return [Node('ul', ['nav-links'], children=items)]
