"""
Review session lifecycle helpers for Streamlit app.
"""

from __future__ import annotations

import streamlit as st

from app.state import get_plan_service
from core.flashcards import BinaryOutcome, Rating, ReviewPolicy, ReviewSession
from core.logging import get_logger

logger = get_logger(__name__)


def _begin(session: ReviewSession | None, message: str | None, label: str) -> None:
    if session is None:
        st.info(message or "No cards available.")
        return
    st.session_state.review_session = session
    st.session_state.review_label = label
    st.session_state.show_answer = False
    st.session_state.last_results = None


def start_deck_review(deck_id: str, sub_deck_id: str | None, policy: ReviewPolicy, label: str) -> None:
    """
    Start a review of a deck (or one of its sub-decks).
    """
    session, message = get_plan_service().start_card_review(
        st.session_state.plan_id,
        deck_id,
        sub_deck_id,
        policy,
    )
    _begin(session, message, label)


def start_error_deck_review() -> None:
    """
    Start a binary review of every card in the error deck.
    """
    session, message = get_plan_service().start_error_deck_review(st.session_state.plan_id)
    _begin(session, message, "Error deck")


def process_rating(rating: Rating | BinaryOutcome | None) -> None:
    """
    Rate the card in focus and move to the next one.
    """
    session: ReviewSession | None = st.session_state.review_session
    if session is None or session.current is None:
        return

    updated = get_plan_service().rate_card(
        st.session_state.plan_id,
        session,
        session.current.id,
        rating,
    )
    if updated is None:
        st.warning("This card could not be rated.")

    st.session_state.show_answer = False
    if session.is_finished:
        end_session()
    st.rerun()


def end_session() -> None:
    """
    End the current review session and keep its results for display.

    Ratings are committed one by one, so nothing is written here.
    """
    session: ReviewSession | None = st.session_state.review_session
    if session is not None:
        if session.policy != ReviewPolicy.BROWSE:
            st.session_state.last_results = session.results
        logger.info(
            "review_finished",
            plan_id=st.session_state.plan_id,
            reviewed=session.results.reviewed,
            correct=session.results.correct,
        )
    st.session_state.review_session = None
    st.session_state.review_label = None
    st.session_state.show_answer = False
