# app.py
from __future__ import annotations
from pathlib import Path
import os
import streamlit as st

from core.logging_config import configure_logging, logger
from core.nav_registry import SECTIONS, DEFAULT_ROUTE_KEY, Route
from core.ui import app_settings, render_footer_global

APP_FILE = Path(__file__).resolve()
APP_DIR  = APP_FILE.parent
SCREENS_DIR = APP_DIR / "screens"

def _screen_path(stem: str) -> Path | None:
    """screens/<stem>.py first, then screens/<stem>/page.py"""
    for candidate in (SCREENS_DIR / f"{stem}.py", SCREENS_DIR / stem / "page.py"):
        if candidate.exists():
            return candidate
    return None

def _add_page(route: Route, pages_out: list, missing_out: list):
    page_path = _screen_path(route.stem)
    if page_path is None:
        missing_out.append((route.key, "Not found"))
        return
    relative_path_str = str(page_path.relative_to(APP_DIR)).replace(os.path.sep, '/')
    pages_out.append(st.Page(
        relative_path_str,
        title=route.label,
        icon=route.icon,
        default=(route.key == DEFAULT_ROUTE_KEY),
        url_path=route.key.replace("-", "_"),
    ))

def _build_sectioned_pages() -> tuple[dict[str, list], list]:
    sections, missing = {}, []
    for section in SECTIONS:
        pages = []
        for route in section.routes:
            _add_page(route, pages, missing)
        if pages:
            sections[section.title] = pages
    return sections, missing

def main():
    settings = app_settings()

    # Logging is process-wide; configure once per server process.
    if not getattr(main, "_logging_ready", False):
        configure_logging(settings.logging.level)
        logger.info(f"{settings.app.name} console starting ({settings.app.environment}), API at {settings.api.base_url}")
        main._logging_ready = True

    st.set_page_config(page_title=settings.app.name, layout="wide", page_icon="🎓")
    st.sidebar.markdown(f"### {settings.app.name}")

    sections, missing = _build_sectioned_pages()
    if missing:
        st.sidebar.warning(f"Missing pages: {[m[0] for m in missing]}")

    if not sections:
        st.error("No screens available in this build.")
        return

    nav = st.navigation(sections, position="sidebar")
    nav.run()

    render_footer_global()

if __name__ == "__main__":
    main()
