# app/screens/course_types.py
from __future__ import annotations

from core.entities import COURSE_TYPES
from core.ui import render_crud_screen


def render():
    render_crud_screen(COURSE_TYPES)


if __name__ == "__main__":
    render()
