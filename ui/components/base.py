import streamlit as st

from .nodes import to_html_all

TEXT = "#222222"
MUTED = "#666666"
ACCENT = "#0066CC"
PLACEHOLDER_BG = "#F0F0F0"
PLACEHOLDER_FG = "#999999"


def inject_base_css():
    if st.session_state.get("_portfolio_css_applied"):
        return
    st.session_state["_portfolio_css_applied"] = True
    st.markdown(
        f"""
        <style>
        .artwork-grid {{display:grid; grid-template-columns:repeat(auto-fill, minmax(240px, 1fr)); gap:24px;}}
        .artwork-item {{display:flex; flex-direction:column; gap:6px;}}
        .artwork-image {{width:100%; aspect-ratio:1 / 1; object-fit:cover; border-radius:4px;}}
        .image-placeholder {{background:{PLACEHOLDER_BG}; color:{PLACEHOLDER_FG};
            display:flex; align-items:center; justify-content:center; font-size:.85rem;}}
        .artwork-title {{font-weight:600; color:{TEXT};}}
        .artwork-year {{font-size:.8rem; color:{MUTED};}}
        .home-navigation {{display:flex; flex-direction:column; align-items:center; gap:14px; margin-top:10vh;}}
        .home-name {{font-size:2rem; font-weight:700; letter-spacing:.04em; margin-bottom:1rem;}}
        .home-nav-link {{font-size:1.1rem; color:{TEXT}; text-decoration:none;}}
        .home-nav-link:hover {{color:{ACCENT};}}
        .nav-links {{list-style:none; padding:0;}}
        .nav-link.active {{font-weight:700; color:{ACCENT};}}
        .about-content p {{max-width:640px; line-height:1.6;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def paint(nodes, container_class: str = ""):
    """Write presentation nodes into the page as raw HTML."""
    inject_base_css()
    body = to_html_all(nodes)
    if container_class:
        body = f'<div class="{container_class}">{body}</div>'
    st.markdown(body, unsafe_allow_html=True)
