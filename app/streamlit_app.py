"""
Study Planner - Main App

Streamlit UI for topic revisions, flashcard reviews and statistics.
"""

import streamlit as st

from app.router import PAGES
from app.state import current_plan, ensure_session_state, get_plan_service
from core import config


st.set_page_config(
    page_title="Study Planner",
    page_icon="📚",
    layout="centered"
)


def render_plan_selector() -> None:
    """Sidebar plan picker and plan creation."""
    service = get_plan_service()
    plans = service.list_plans()

    with st.sidebar:
        st.markdown("## 📚 Study Planner")
        if config.is_test_mode():
            st.warning("⚠️ **TEST MODE** - Using test storage (set TEST_MODE=false in .env for production)")

        if plans:
            ids = [p.id for p in plans]
            if st.session_state.plan_id not in ids:
                st.session_state.plan_id = ids[0]
            st.session_state.plan_id = st.selectbox(
                "Plan",
                ids,
                index=ids.index(st.session_state.plan_id),
                format_func=lambda pid: service.get_plan(pid).name,
            )

        with st.form("new_plan", clear_on_submit=True):
            name = st.text_input("New plan")
            if st.form_submit_button("Create plan") and name.strip():
                st.session_state.plan_id = service.create_plan(name.strip()).id
                st.rerun()

        if service.unsaved_plan_ids:
            st.caption("⚠️ Some changes are not saved yet; they will be retried on the next change.")


def main():
    """Main app entry point."""
    ensure_session_state()
    render_plan_selector()

    plan = current_plan()
    if plan is None:
        st.title("📚 Study Planner")
        st.info("Create a plan in the sidebar to get started.")
        return

    tabs = st.tabs([page.title for page in PAGES])
    for tab, page in zip(tabs, PAGES):
        with tab:
            page.render(plan)


if __name__ == "__main__":
    main()
