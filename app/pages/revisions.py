"""
Revisions page rendering.
"""

from __future__ import annotations

from datetime import timedelta

import streamlit as st

from app.state import get_plan_service
from core import config, date_math, revisions
from core.exceptions import InvalidCountsError
from core.schemas import Plan
from core.session_builders import build_revision_board, revisions_by_day


STATUS_LABELS = {
    "late": "⚠️ Late",
    "today": "📌 Today",
    "future": "🗓️ Upcoming",
    "completed": "✅ Done",
}

CALENDAR_DAYS = 14


def _format_day(value) -> str:
    return date_math.to_local(value).strftime("%d/%m/%Y")


def render_revisions_page(plan: Plan) -> None:
    """
    Render the session form, the revision board and the calendar.
    """
    st.subheader("Revisions")
    _render_register_form(plan)

    board = build_revision_board(plan)

    st.markdown("### Scheduled")
    if not board.scheduled:
        st.info("No pending revisions.")
    for entry in board.scheduled:
        _render_scheduled_entry(plan, entry)

    st.markdown("### Finished topics")
    if not board.finished:
        st.caption("A topic is finished once all its scheduled revisions are done.")
    for item in board.finished:
        st.markdown(f"**{item.topic.name}** ({item.subject.name}) · {item.accuracy:.0f}%")

    with st.expander(f"Completed revisions ({len(board.completed)})"):
        for entry in board.completed:
            rev = entry.revision
            st.markdown(
                f"{rev.label} · **{entry.topic.name}** ({entry.subject.name}) · "
                f"{_format_day(rev.completed_date or rev.scheduled_date)} · "
                f"{rev.questions_correct or 0}/{rev.questions_total or 0}"
            )

    _render_calendar(plan)


def _render_register_form(plan: Plan) -> None:
    subjects = [s for s in plan.subjects if s.topics]
    if not subjects:
        st.info("Add a subject with at least one topic on the Plan tab to start registering sessions.")
        return

    with st.expander("Register study session", expanded=False):
        subject = st.selectbox("Subject", subjects, format_func=lambda s: s.name, key="register_subject")
        topic = st.selectbox("Topic", subject.topics, format_func=lambda t: t.name, key="register_topic")
        col1, col2 = st.columns(2)
        with col1:
            total = st.number_input("Questions", min_value=0, step=1, key="register_total")
        with col2:
            correct = st.number_input("Correct", min_value=0, step=1, key="register_correct")
        pattern = st.text_input(
            "Revision days",
            value=config.get_default_revision_pattern(),
            help="Comma-separated day offsets, e.g. 7, 14, 30",
            key="register_pattern",
        )
        theory_finished = st.checkbox("Theory finished", value=topic.is_theory_completed, key="register_theory")
        day_zero = st.checkbox(
            "Count today as a completed revision (D0)",
            value=config.day_zero_revision_enabled(),
            key="register_day_zero",
        )

        if st.button("Save session", type="primary", key="register_submit"):
            offsets = revisions.parse_revision_pattern(pattern)
            try:
                ok = get_plan_service().register_session(
                    plan.id,
                    subject.id,
                    topic.id,
                    int(total),
                    int(correct),
                    offsets,
                    theory_finished,
                    day_zero=day_zero,
                )
            except InvalidCountsError as exc:
                st.error(str(exc))
                return
            if not ok:
                st.error("The topic no longer exists.")
                return
            st.rerun()


def _render_scheduled_entry(plan: Plan, entry) -> None:
    rev = entry.revision
    title = (
        f"{STATUS_LABELS[entry.status]} · {rev.label} · {entry.topic.name} "
        f"({entry.subject.name}) · {_format_day(rev.scheduled_date)}"
    )
    with st.expander(title):
        col1, col2 = st.columns(2)
        with col1:
            total = st.number_input("Questions", min_value=0, step=1, key=f"rev_total_{rev.id}")
        with col2:
            correct = st.number_input("Correct", min_value=0, step=1, key=f"rev_correct_{rev.id}")

        col_done, col_delete = st.columns(2)
        with col_done:
            if st.button("Complete", type="primary", use_container_width=True, key=f"rev_done_{rev.id}"):
                try:
                    get_plan_service().complete_revision(
                        plan.id, entry.subject.id, entry.topic.id, rev.id, int(total), int(correct)
                    )
                except InvalidCountsError as exc:
                    st.error(str(exc))
                    return
                st.rerun()
        with col_delete:
            if st.button("Delete", use_container_width=True, key=f"rev_delete_{rev.id}"):
                get_plan_service().delete_revision(plan.id, entry.subject.id, entry.topic.id, rev.id)
                st.rerun()


def _render_calendar(plan: Plan) -> None:
    st.markdown("### Next days")
    days = revisions_by_day(plan)
    today = date_math.to_local(date_math.now()).date()
    shown = False
    for offset in range(CALENDAR_DAYS):
        day = today + timedelta(days=offset)
        entries = days.get(day, [])
        if not entries:
            continue
        shown = True
        st.markdown(f"**{day.strftime('%a %d/%m')}**")
        for item in entries:
            mark = "✅" if item.is_completed else "⏳"
            st.markdown(f"- {mark} {item.label} · {item.topic_name} ({item.subject_name})")
    if not shown:
        st.caption(f"Nothing scheduled in the next {CALENDAR_DAYS} days.")
