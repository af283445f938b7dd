"""
Session Statistics UI

Renders progress metrics and controls.
"""

import streamlit as st

from core.flashcards import ReviewPolicy


def render_session_stats() -> bool:
    """
    Render review progress metrics and exit button.

    Returns:
        True if quit button was clicked, False otherwise
    """
    session = st.session_state.review_session
    if session is None:
        return False

    col1, col2, col3, col4 = st.columns([2, 2, 2, 1])

    with col1:
        st.metric("Progress", f"{session.position}/{session.total}")

    with col2:
        st.metric("Reviewed", session.results.reviewed)

    with col3:
        if session.policy != ReviewPolicy.BROWSE and session.results.reviewed > 0:
            st.metric("Accuracy", f"{session.results.accuracy:.0f}%")

    with col4:
        st.markdown("<br>", unsafe_allow_html=True)
        if st.button("❌", help="Quit session", use_container_width=True):
            return True

    st.divider()
    return False


def render_session_complete():
    """Render the results of the last finished session."""
    results = st.session_state.last_results
    if results is None or results.reviewed == 0:
        return
    st.success(f"🎉 Session complete! You reviewed {results.reviewed} cards.")
    st.info(f"Correct: {results.correct} · Wrong: {results.wrong} · Accuracy: {results.accuracy:.1f}%")
