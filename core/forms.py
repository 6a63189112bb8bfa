from __future__ import annotations
import math
from datetime import date
from typing import Any, Optional
import streamlit as st

from core.crud import CrudController
from core.entities import (
    FieldSpec, TEXTAREA, EMAIL, TEL, NUMBER, DATE, CHOICE, LOOKUP, READONLY, PHOTO,
    missing_fields,
)


def success(msg: str): st.success(msg)
def warn(msg: str): st.warning(msg)
def info(msg: str): st.info(msg)


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10]) if value else None
    except ValueError:
        return None


def _as_number(value: Any) -> int | float:
    """Backend numbers arrive unvalidated; anything unparseable shows as 0."""
    if isinstance(value, bool):
        return int(value)
    try:
        num = float(value or 0)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(num):
        return 0
    return int(num) if num.is_integer() else num


def _options(values, current: str) -> list[str]:
    opts = [""] + [v for v in values if v]
    # Keep a value the lookup no longer knows about (renamed/deleted entity).
    if current and current not in opts:
        opts.append(current)
    return opts


def render_field(ctrl: CrudController, f: FieldSpec) -> Any:
    """Draw one form widget bound to the controller's form state; returns its value."""
    value = ctrl.form.get(f.key, f.default)
    key = f"{ctrl.spec.key}__f_{f.key}__v{ctrl.form_version}"

    if f.kind == TEXTAREA:
        return st.text_area(f.label, value=str(value or ""), key=key)
    if f.kind == NUMBER:
        num = _as_number(value)
        if isinstance(num, float):
            return st.number_input(f.label, value=num, min_value=min(num, 0.0), step=1.0, key=key)
        return st.number_input(f.label, value=num, min_value=min(num, 0), step=1, key=key)
    if f.kind == DATE:
        picked = st.date_input(f.label, value=_as_date(value), key=key)
        return picked.isoformat() if picked else ""
    if f.kind in (CHOICE, LOOKUP):
        source = f.options if f.kind == CHOICE else ctrl.lookup_names(f.lookup or "")
        opts = _options(source, str(value or ""))
        return st.selectbox(
            f.label, opts, index=opts.index(str(value or "")), key=key,
            format_func=lambda o, _f=f: o or f"Select {_f.label}",
        )
    if f.kind == READONLY:
        # No key: the widget redraws whenever the derived value changes.
        st.text_input(f.label, value=str(value or ""), disabled=True)
        return value
    if f.kind == PHOTO:
        return value
    placeholder = {EMAIL: "name@example.com", TEL: "+91 98765 43210"}.get(f.kind)
    return st.text_input(f.label, value=str(value or ""), placeholder=placeholder, key=key)


def render_form(ctrl: CrudController) -> None:
    st.subheader(ctrl.form_title)
    inline = [f for f in ctrl.spec.fields if f.kind not in (TEXTAREA, PHOTO)]
    wide = [f for f in ctrl.spec.fields if f.kind == TEXTAREA]

    cols = st.columns(2) if len(inline) > 1 else [st.container()]
    for i, f in enumerate(inline):
        with cols[i % len(cols)]:
            _sync(ctrl, f, render_field(ctrl, f))
    for f in wide:
        _sync(ctrl, f, render_field(ctrl, f))


def _sync(ctrl: CrudController, f: FieldSpec, value: Any) -> None:
    if ctrl.form.get(f.key) != value:
        ctrl.set_field(f.key, value)


def render_form_actions(ctrl: CrudController) -> None:
    left, right, _ = st.columns([0.25, 0.15, 0.6])
    with left:
        clicked = st.button(ctrl.submit_label, type="primary", key=f"{ctrl.spec.key}__submit")
    with right:
        if ctrl.is_editing and st.button("Cancel", key=f"{ctrl.spec.key}__cancel"):
            ctrl.cancel_edit()
            st.rerun()
    if clicked:
        missing = missing_fields(ctrl.spec, ctrl.form)
        if missing:
            warn(f"Please fill in: {', '.join(missing)}")
            return
        if ctrl.submit():
            st.rerun()
