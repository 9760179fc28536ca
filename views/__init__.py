"""View modules for manual routing.

The app keeps its own router (`services.router`) instead of Streamlit's
multi-page system; `app.py` asks the controller for a `ViewModel` and hands
it to the view registered for `ViewModel.page`. Every module here exposes a
`view(vm, controller)` callable. Navigation from inside a view goes through
`request_navigation`, which the router in `app.py` picks up on the next rerun.
"""
import streamlit as st


def request_navigation(target: str):
    st.session_state.nav_target = target
    st.rerun()
