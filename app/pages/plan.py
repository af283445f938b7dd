"""
Plan management page rendering.
"""

from __future__ import annotations

from datetime import datetime

import streamlit as st

from app.state import get_plan_service
from core import date_math
from core.exceptions import InvalidCountsError
from core.schemas import Plan


def render_plan_page(plan: Plan) -> None:
    """
    Render subject, topic and mock exam management.
    """
    service = get_plan_service()
    st.subheader(plan.name)

    with st.form("new_subject", clear_on_submit=True):
        name = st.text_input("New subject")
        if st.form_submit_button("Add subject") and name.strip():
            service.add_subject(plan.id, name.strip())
            st.rerun()

    for subject in plan.subjects:
        with st.expander(f"{subject.name} ({len(subject.topics)} topics)"):
            for topic in subject.topics:
                col_name, col_delete = st.columns([6, 1])
                with col_name:
                    theory = "📖 " if topic.is_theory_completed else ""
                    st.markdown(
                        f"{theory}**{topic.name}** · "
                        f"{topic.questions_correct}/{topic.questions_total} · "
                        f"{len(topic.revisions)} revision(s)"
                    )
                with col_delete:
                    if st.button("🗑️", key=f"delete_topic_{topic.id}", help="Delete topic"):
                        service.delete_topic(plan.id, subject.id, topic.id)
                        st.rerun()

            with st.form(f"new_topic_{subject.id}", clear_on_submit=True):
                topic_name = st.text_input("New topic")
                if st.form_submit_button("Add topic") and topic_name.strip():
                    service.add_topic(plan.id, subject.id, topic_name.strip())
                    st.rerun()

            if st.button("Delete subject", key=f"delete_subject_{subject.id}"):
                service.delete_subject(plan.id, subject.id)
                st.rerun()

    _render_mock_exams(plan)
    _render_reset(plan)


def _render_mock_exams(plan: Plan) -> None:
    service = get_plan_service()
    st.markdown("### Mock exams")
    with st.form("new_mock_exam", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            institution = st.text_input("Institution")
            total = st.number_input("Questions", min_value=0, step=1)
            duration = st.text_input("Duration", placeholder="04:30")
        with col2:
            year = st.number_input("Year", min_value=1900, max_value=2100, value=datetime.now().year, step=1)
            correct = st.number_input("Correct", min_value=0, step=1)
            taken_on = st.date_input("Date", value=date_math.to_local(date_math.now()).date())
        if st.form_submit_button("Add mock exam") and institution.strip():
            when = date_math.start_of_day(datetime.combine(taken_on, datetime.min.time()))
            try:
                service.add_mock_exam(
                    plan.id, institution.strip(), int(year), int(total), int(correct), duration.strip(), date=when
                )
            except InvalidCountsError as exc:
                st.error(str(exc))
                return
            st.rerun()

    for exam in plan.mock_exams:
        col_text, col_delete = st.columns([6, 1])
        with col_text:
            st.markdown(
                f"**{exam.institution} {exam.year}** · {exam.questions_correct}/{exam.questions_total}"
                + (f" · {exam.duration}" if exam.duration else "")
            )
        with col_delete:
            if st.button("🗑️", key=f"delete_exam_{exam.id}", help="Delete mock exam"):
                service.delete_mock_exam(plan.id, exam.id)
                st.rerun()


def _render_reset(plan: Plan) -> None:
    st.markdown("### Danger zone")
    confirm = st.checkbox(
        "I understand this clears every topic's counters, revisions and session history",
        key="reset_confirm",
    )
    if st.button("Reset progress", disabled=not confirm):
        get_plan_service().reset_progress(plan.id)
        st.rerun()
    if st.button("Delete plan", disabled=not confirm):
        get_plan_service().delete_plan(plan.id)
        st.session_state.plan_id = None
        st.rerun()
