# app/screens/allotments.py
from __future__ import annotations
import streamlit as st

from core.crud import CrudController
from core.entities import ALLOTMENTS
from core.ui import render_crud_screen


def _course_type_note(ctrl: CrudController) -> None:
    if ctrl.form.get("courseName") and not ctrl.form.get("courseType"):
        st.caption("The selected course has no course type on record.")


def render():
    render_crud_screen(ALLOTMENTS, extra_form=_course_type_note)


if __name__ == "__main__":
    render()
