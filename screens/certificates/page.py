# app/screens/certificates/page.py
from __future__ import annotations
from typing import Any, Dict

import streamlit as st

from core.entities import CERTIFICATES
from core.ui import app_settings, render_crud_screen
from screens.certificates.renderer import can_download, certificate_filename, render_certificate_png


@st.cache_data(show_spinner=False)
def _certificate_png(record: Dict[str, Any], issuer: str) -> bytes:
    return render_certificate_png(record, issuer=issuer)


def _download(record: Dict[str, Any]) -> None:
    st.download_button(
        "⬇️",
        data=_certificate_png(record, app_settings().app.title),
        file_name=certificate_filename(record),
        mime="image/png",
        key=f"certificates__dl_{record.get('id')}",
        help="Download certificate",
    )


def render():
    render_crud_screen(CERTIFICATES, row_actions=[("⬇️", _download, can_download)])


if __name__ == "__main__":
    render()
