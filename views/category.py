import streamlit as st

from ui.components.base import paint


def view(vm, controller):
    """Artwork grid for one category.

    The grid is painted from the store after the listing refresh, so it always
    shows the folder contents as of this visit. Images that failed to prefetch
    are already swapped for placeholders.
    """
    st.header(vm.title)
    paint(vm.nodes, container_class="artwork-grid")
    category = controller.store.get(vm.state.name)
    if category and category.artworks:
        st.caption(f"{len(category.artworks)} artworks")
