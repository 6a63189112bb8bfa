# app/screens/candidates.py
from __future__ import annotations

from core.entities import CANDIDATES
from core.ui import render_crud_screen


def render():
    render_crud_screen(CANDIDATES)


if __name__ == "__main__":
    render()
