# app/screens/users/page.py
from __future__ import annotations
import logging
from typing import Any

import streamlit as st

from core.crud import CrudController
from core.entities import USERS, PHOTO
from core.forms import warn
from core.ui import app_settings, render_crud_screen
from screens.users.photos import PhotoError, data_url_bytes, photo_to_data_url

log = logging.getLogger(__name__)


def _k(s: str) -> str:
    return f"users__{s}"


def _photo_inputs(ctrl: CrudController) -> None:
    max_side = app_settings().uploads.photo_max_side
    cols = st.columns(2)
    for col, f in zip(cols, [f for f in USERS.fields if f.kind == PHOTO]):
        with col:
            upload = st.file_uploader(
                f.label,
                type=["png", "jpg", "jpeg", "gif", "webp"],
                key=_k(f"{f.key}__v{ctrl.form_version}"),
            )
            seen_key = _k(f"{f.key}__file")
            if upload is not None and st.session_state.get(seen_key) != upload.file_id:
                st.session_state[seen_key] = upload.file_id
                try:
                    ctrl.set_field(f.key, photo_to_data_url(upload.getvalue(), max_side))
                except PhotoError as e:
                    log.warning(f"Rejected {f.key} upload {upload.name}: {e}")
                    warn(f"{upload.name} is not a valid image.")

            current = data_url_bytes(ctrl.form.get(f.key))
            if current:
                st.image(current, width=96, caption=f.label)


def _thumbnail(value: Any) -> None:
    raw = data_url_bytes(value)
    if raw:
        st.image(raw, width=32)


def render():
    render_crud_screen(USERS, extra_form=_photo_inputs, cell_renderers={"candidatePhoto": _thumbnail})


if __name__ == "__main__":
    render()
