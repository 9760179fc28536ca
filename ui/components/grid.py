from typing import Iterable, List

from domain.constants import ABOUT_PARAGRAPHS, EMPTY_CATEGORY_MESSAGE, IMAGE_UNAVAILABLE_MESSAGE
from domain.models import Artwork
from .nodes import Node


def empty_placeholder() -> Node:
    return Node('p', ['empty-placeholder'], text=EMPTY_CATEGORY_MESSAGE,
                attrs={'style': 'text-align: center; color: #666; grid-column: 1 / -1;'})


def image_placeholder() -> Node:
    return Node('div', ['artwork-image', 'image-placeholder'], text=IMAGE_UNAVAILABLE_MESSAGE)


def render_artwork(artwork: Artwork, asset_root: str) -> Node:
    """One grid item: image, title, then year only when the artwork has one."""
    root = asset_root if asset_root.endswith('/') else asset_root + '/'
    item = Node('div', ['artwork-item'], attrs={'data-artwork-id': artwork.id})
    item.children.append(Node('img', ['artwork-image'], attrs={
        'src': f"{root}{artwork.image}",
        'alt': artwork.title,
        'data-image': artwork.image,
    }))
    item.children.append(Node('div', ['artwork-title'], text=artwork.title))
    if artwork.year:
        item.children.append(Node('div', ['artwork-year'], text=artwork.year))
    if artwork.description:
        item.attrs['title'] = artwork.description
    return item


def swap_failed_image(item: Node) -> Node:
    """Replace a broken image with the placeholder, keeping its position among siblings."""
    idx = next((i for i, c in enumerate(item.children) if c.tag == 'img'), None)
    if idx is not None:
        item.children[idx] = image_placeholder()
    return item


def render_artwork_grid(artworks: List[Artwork], asset_root: str, failed: Iterable[str] = ()) -> List[Node]:
    if not artworks:
        return [empty_placeholder()]
    failed_set = set(failed)
    nodes = []
    for artwork in artworks:
        item = render_artwork(artwork, asset_root)
        if artwork.image in failed_set:
            swap_failed_image(item)
        nodes.append(item)
    return nodes


def render_about() -> List[Node]:
    return [Node('div', ['about-content'], children=[Node('p', text=p) for p in ABOUT_PARAGRAPHS])]
