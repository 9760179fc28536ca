import streamlit as st

from ui.components.base import inject_base_css, paint
from views import request_navigation


def view(vm, controller):
    """Landing page: artist name and one entry per category, no sidebar grid."""
    inject_base_css()
    menu = vm.nodes[0].find_all('home-navigation')[0]
    name_node = menu.find_all('home-name')[0]
    paint([name_node])

    links = menu.find_all('home-nav-link')
    _, middle, _ = st.columns([1, 2, 1])
    with middle:
        for link in links:
            target = link.attrs['data-category']
            if st.button(link.text, key=f"home_nav_{target}", use_container_width=True):
                request_navigation(target)
