"""
Statistics page rendering.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from core import date_math
from core.analytics import accuracy_percent, build_statistics_dashboard
from core.schemas import Plan


def render_statistics_page(plan: Plan) -> None:
    st.subheader("Statistics")
    dashboard = build_statistics_dashboard(plan)
    stats = dashboard.stats
    progress = dashboard.progress

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Subjects", stats.total_subjects)
    with col2:
        st.metric("Topics", stats.total_topics)
    with col3:
        st.metric("Questions", f"{stats.total_questions:,}")
    with col4:
        st.metric("Accuracy", f"{stats.accuracy:.1f}%", help="Includes mock exams")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Revisions done", progress.completed_revisions)
    with col2:
        st.metric("Revisions pending", progress.pending_revisions)
    with col3:
        st.metric("Theory completed", f"{progress.theory_percentage:.0f}%")

    st.markdown("### Accuracy by subject")
    if dashboard.subject_performance.empty:
        st.info("No subjects yet.")
    else:
        st.bar_chart(dashboard.subject_performance.set_index("name")["accuracy"])

    st.markdown("### Accuracy over time")
    if dashboard.accuracy_timeline.empty:
        st.info("No study sessions yet.")
    else:
        st.line_chart(dashboard.accuracy_timeline.set_index("date")["accuracy"])

    st.markdown("### Mock exams")
    if not plan.mock_exams:
        st.info("No mock exams yet.")
        return
    exams = pd.DataFrame([
        {
            "Date": date_math.to_local(exam.date).strftime("%d/%m/%Y"),
            "Institution": exam.institution,
            "Year": exam.year,
            "Score": f"{exam.questions_correct}/{exam.questions_total}",
            "Accuracy (%)": round(accuracy_percent(exam.questions_correct, exam.questions_total), 1),
            "Duration": exam.duration,
        }
        for exam in plan.mock_exams
    ])
    st.dataframe(exams, hide_index=True, use_container_width=True)
