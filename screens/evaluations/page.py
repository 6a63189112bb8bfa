# app/screens/evaluations/page.py
from __future__ import annotations
import streamlit as st

from core.crud import CrudController
from core.entities import EVALUATIONS
from core.forms import success
from core.ui import app_settings, render_crud_screen
from screens.evaluations.importer import IMPORT_COLUMNS, import_evaluations, template_workbook


def _k(s: str) -> str:
    """Per-page key namespace to avoid collisions if rendered twice."""
    return f"evaluations__{s}"


def _bulk_upload(ctrl: CrudController) -> None:
    st.markdown("---")
    st.markdown("**📤 Bulk import**")
    st.caption(
        "First sheet, one evaluation per row. Columns: "
        + ", ".join(IMPORT_COLUMNS)
        + ". Marks start at 0 for imported rows."
    )

    left, right = st.columns([0.3, 0.7])
    with left:
        st.download_button(
            "Download Excel template",
            data=template_workbook(),
            file_name="evaluations_import_template.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key=_k("template_dl"),
        )
    with right:
        upload = st.file_uploader(
            "Upload Excel",
            type=app_settings().uploads.import_types,
            key=_k("upload"),
        )

    # The uploader keeps its file across reruns; import each upload once.
    if upload is None or st.session_state.get(_k("imported_file")) == upload.file_id:
        return
    st.session_state[_k("imported_file")] = upload.file_id

    with st.spinner(f"Importing {upload.name}..."):
        count = import_evaluations(ctrl, upload.getvalue(), upload.name)
    if count:
        success(f"Imported {count} evaluations from {upload.name}.")


def render():
    render_crud_screen(EVALUATIONS, extra_form=_bulk_upload)


if __name__ == "__main__":
    render()
