# app/core/ui.py
from __future__ import annotations
import datetime
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

import requests
import streamlit as st

from core.api import new_session
from core.crud import CrudController, build_controller, entered_screen
from core.entities import EntitySpec, PHOTO
from core.forms import render_form, render_form_actions, info
from core.settings import Settings, load_settings

# Row action: (label, draw(record) -> None, enabled(record) -> bool); draw renders the live widget.
RowAction = Tuple[str, Callable[[Dict[str, Any]], None], Callable[[Dict[str, Any]], bool]]
CellRenderer = Callable[[Any], None]


@st.cache_resource(show_spinner=False)
def app_settings() -> Settings:
    """Settings read once per server process."""
    return load_settings()


def _ensure_session() -> requests.Session:
    if "api_session" not in st.session_state:
        st.session_state["api_session"] = new_session()
    return st.session_state["api_session"]


def screen_controller(spec: EntitySpec) -> CrudController:
    """Controller bound to st.session_state; refetches whenever the screen is entered."""
    ctrl = build_controller(spec, st.session_state, session=_ensure_session(), settings=app_settings())
    if entered_screen(st.session_state, spec.key):
        with st.spinner(f"Loading {spec.plural}..."):
            ctrl.mount()
    return ctrl


def show_error(message: Optional[str], detail: Optional[str] = None) -> None:
    if not message:
        return
    if detail and app_settings().debug:
        st.error(f"{message}\n\n**Debug Info:**\n```\n{detail}\n```")
    else:
        st.error(message)


def _cell(spec: EntitySpec, key: str, value: Any, renderers: Dict[str, CellRenderer]) -> None:
    if key in renderers:
        renderers[key](value)
        return
    kind = next((f.kind for f in spec.fields if f.key == key), None)
    if kind == PHOTO:
        st.write("📷" if value else "")
        return
    st.write("" if value is None else str(value))


def render_records_table(
    ctrl: CrudController,
    row_actions: Sequence[RowAction] = (),
    cell_renderers: Optional[Dict[str, CellRenderer]] = None,
) -> None:
    spec = ctrl.spec
    st.subheader(f"{spec.label} List")

    if ctrl.is_loading:
        info(f"Loading {spec.plural}...")
        return
    if not ctrl.records:
        st.write(f"No {spec.plural} found.")
        return

    n_actions = 2 + len(row_actions)
    widths = [1.0] * len(spec.columns) + [0.3 * n_actions]

    header = st.columns(widths)
    for col, (_, title) in zip(header, spec.columns):
        col.markdown(f"**{title}**")
    header[-1].markdown("**Actions**")

    for idx, rec in enumerate(ctrl.records):
        if not isinstance(rec, dict):
            continue
        rid = rec.get("id", idx)
        cols = st.columns(widths)
        for col, (key, _) in zip(cols, spec.columns):
            with col:
                _cell(spec, key, rec.get(key, ""), cell_renderers or {})
        with cols[-1]:
            buttons = st.columns(n_actions)
            if buttons[0].button("✏️", key=f"{spec.key}__edit_{rid}_{idx}", help=f"Edit {spec.singular}"):
                ctrl.edit(rec)
                st.rerun()
            if buttons[1].button("🗑️", key=f"{spec.key}__del_{rid}_{idx}", help=f"Delete {spec.singular}"):
                ctrl.delete(rec.get("id"))
                st.rerun()
            for slot, (label, draw, enabled) in zip(buttons[2:], row_actions):
                with slot:
                    if enabled(rec):
                        draw(rec)
                    else:
                        st.button(label, key=f"{spec.key}__{label}_{rid}_{idx}", disabled=True)


def render_crud_screen(
    spec: EntitySpec,
    extra_form: Optional[Callable[[CrudController], None]] = None,
    row_actions: Sequence[RowAction] = (),
    cell_renderers: Optional[Dict[str, CellRenderer]] = None,
) -> CrudController:
    """The fetch / render / submit loop every management screen shares."""
    st.title(f"{spec.icon} {spec.title}")
    ctrl = screen_controller(spec)

    with st.container(border=True):
        render_form(ctrl)
        if extra_form is not None:
            extra_form(ctrl)
        render_form_actions(ctrl)

    show_error(ctrl.error, ctrl.error_detail)

    with st.container(border=True):
        render_records_table(ctrl, row_actions, cell_renderers)
    return ctrl


def render_footer_global():
    """Render one global footer; call this on every page."""
    settings = app_settings()
    year = datetime.datetime.now().year
    st.markdown(
        f"""
        <div style="margin-top:2rem; padding:0.75rem 0; font-size:0.9rem;
                    border-top:1px solid rgba(0,0,0,0.15); opacity:0.9;">
          © {year} • {settings.app.title} ({settings.app.name})
        </div>
        """,
        unsafe_allow_html=True,
    )
