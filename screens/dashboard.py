# app/screens/dashboard.py
# -------------------------------------------------------------------
# Static overview charts. Sample figures only; nothing is fetched.
# -------------------------------------------------------------------
from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from core.crud import entered_screen

MONTHLY_PARTICIPATION = {
    "Jan": 65, "Feb": 59, "Mar": 80, "Apr": 81, "May": 56, "Jun": 55,
}
COURSE_TYPE_DISTRIBUTION = {"Basic": 300, "Advanced": 50, "Expert": 100}
COURSE_STATUS_DISTRIBUTION = {"Ongoing": 12, "Completed": 19, "Upcoming": 3}

PIE_COLORS = ["#FF6384", "#36A2EB", "#FFCE56"]


def participation_frame() -> pd.DataFrame:
    df = pd.DataFrame(
        {"Month": list(MONTHLY_PARTICIPATION), "Participants": list(MONTHLY_PARTICIPATION.values())}
    )
    # Keep calendar order instead of alphabetical on the x axis
    df["Month"] = pd.Categorical(df["Month"], categories=list(MONTHLY_PARTICIPATION), ordered=True)
    return df


def distribution_frame(counts: dict[str, int], label: str) -> pd.DataFrame:
    return pd.DataFrame({label: list(counts), "Count": list(counts.values())})


def pie_chart(df: pd.DataFrame, label: str) -> alt.Chart:
    return (
        alt.Chart(df)
        .mark_arc()
        .encode(
            theta=alt.Theta("Count:Q"),
            color=alt.Color(f"{label}:N", scale=alt.Scale(range=PIE_COLORS)),
            tooltip=[f"{label}:N", "Count:Q"],
        )
        .properties(height=240)
    )


def render():
    # Leaving a management screen for the dashboard makes the next visit refetch.
    entered_screen(st.session_state, "dashboard")
    st.title("📊 Dashboard")
    st.caption("Welcome to the Training Management System")

    with st.container(border=True):
        st.subheader("Monthly Course Participation")
        st.bar_chart(participation_frame(), x="Month", y="Participants", height=240)

    left, right = st.columns(2)
    with left, st.container(border=True):
        st.subheader("Course Type Distribution")
        st.altair_chart(pie_chart(distribution_frame(COURSE_TYPE_DISTRIBUTION, "Type"), "Type"), width="stretch")
    with right, st.container(border=True):
        st.subheader("Course Status Distribution")
        st.altair_chart(pie_chart(distribution_frame(COURSE_STATUS_DISTRIBUTION, "Status"), "Status"), width="stretch")


if __name__ == "__main__":
    render()
