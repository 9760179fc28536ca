import streamlit as st

from ui.components.base import paint


def view(vm, controller):
    st.header(vm.title)
    paint(vm.nodes)
