# app/screens/courses.py
from __future__ import annotations
import streamlit as st

from core.crud import CrudController
from core.entities import COURSES
from core.ui import render_crud_screen


def _lookup_hint(ctrl: CrudController) -> None:
    # Dropdown options come from the course-type and expert lists fetched on entry.
    empty = [name.replace("_", " ") for name in COURSES.lookups if not ctrl.lookup(name)]
    if empty:
        st.caption(f"No {' or '.join(empty)} available yet. Add them on their own screens first.")


def render():
    render_crud_screen(COURSES, extra_form=_lookup_hint)


if __name__ == "__main__":
    render()
