# app/screens/experts.py
from __future__ import annotations

from core.entities import EXPERTS
from core.ui import render_crud_screen


def render():
    render_crud_screen(EXPERTS)


if __name__ == "__main__":
    render()
