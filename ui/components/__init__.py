"""
Reusable presentation pieces for the portfolio.

- `nodes`: the small element tree the renderers produce, plus HTML serialisation.
- `grid`: artwork grid, empty/error placeholders and the About page.
- `nav`: home page menu and sidebar navigation.
- `base`: CSS injection and painting into Streamlit (imported directly by the
  views so the renderers stay usable without a running Streamlit session).
"""

from .nodes import (
    Node,
    to_html,
    to_html_all,
)

from .grid import (
    render_artwork,
    render_artwork_grid,
    render_about,
    swap_failed_image,
)

from .nav import (
    render_home_navigation,
    render_sidebar_navigation,
    sidebar_entries,
)
