# app/screens/locations.py
from __future__ import annotations

from core.entities import LOCATIONS
from core.ui import render_crud_screen


def render():
    render_crud_screen(LOCATIONS)


if __name__ == "__main__":
    render()
