"""
Flashcards page rendering.
"""

from __future__ import annotations

import streamlit as st

from app.session_controller import (
    end_session,
    process_rating,
    start_deck_review,
    start_error_deck_review,
)
from app.state import get_plan_service
from app.ui import render_feedback_buttons, render_flashcard, render_session_complete, render_session_stats
from app.ui.flashcard_style import ANSWER_STYLE, ERROR_DECK_STYLE, QUESTION_STYLE
from core import date_math, plan_ops
from core.exceptions import ValidationError
from core.flashcards import ReviewPolicy, image_data_url
from core.schemas import FlashcardDeck, MediaSide, Plan
from core.session_builders import error_deck_cards, is_card_due


MODE_BUTTONS = [
    ("Review", ReviewPolicy.GRADUATED, "Spaced repetition over due cards"),
    ("Training", ReviewPolicy.BINARY, "Right/wrong drill; wrong answers go to the error deck"),
    ("Browse", ReviewPolicy.BROWSE, "Flip through every card without scoring"),
]


def render_flashcards_page(plan: Plan) -> None:
    """
    Render the active review session, or the deck overview.
    """
    if st.session_state.review_session is not None:
        _render_active_session()
        return

    st.subheader("Flashcards")
    render_session_complete()

    errors = len(error_deck_cards(plan))
    if st.button(
        f"🔁 Error deck ({errors})",
        use_container_width=True,
        disabled=errors == 0,
        key="start_error_deck",
    ):
        start_error_deck_review()
        st.rerun()

    query = st.text_input("🔍 Search decks or sub-decks", key="deck_search")
    decks = plan_ops.search_decks(plan, query)
    if query.strip() and not decks:
        st.caption("No deck matches the search.")
    for deck in decks:
        _render_deck(plan, deck)

    _render_new_deck_form(plan)


def _render_mode_buttons(deck_id: str, sub_deck_id: str | None, label: str) -> None:
    columns = st.columns(len(MODE_BUTTONS))
    key_base = sub_deck_id or deck_id
    for column, (title, policy, help_text) in zip(columns, MODE_BUTTONS):
        with column:
            if st.button(title, help=help_text, use_container_width=True, key=f"{policy.value}_{key_base}"):
                start_deck_review(deck_id, sub_deck_id, policy, label)
                st.rerun()


def _render_deck(plan: Plan, deck: FlashcardDeck) -> None:
    today = date_math.now()
    cards = [card for sub_deck in deck.sub_decks for card in sub_deck.cards]
    due_count = sum(1 for card in cards if is_card_due(card, today))

    with st.expander(f"📚 {deck.name} · {due_count} due / {len(cards)} cards"):
        _render_mode_buttons(deck.id, None, deck.name)

        for sub_deck in deck.sub_decks:
            sub_due = sum(1 for card in sub_deck.cards if is_card_due(card, today))
            st.markdown(f"**{sub_deck.name}** · {sub_due} due / {len(sub_deck.cards)} cards")
            _render_mode_buttons(deck.id, sub_deck.id, f"{deck.name} / {sub_deck.name}")
            _render_card_list(plan, deck, sub_deck)

        st.divider()
        _render_new_card_form(plan, deck)
        _render_new_sub_deck_form(plan, deck)
        if st.button("Delete deck", key=f"delete_deck_{deck.id}"):
            get_plan_service().delete_deck(plan.id, deck.id)
            st.rerun()


def _render_card_list(plan: Plan, deck: FlashcardDeck, sub_deck) -> None:
    for card in sub_deck.cards:
        col_text, col_delete = st.columns([6, 1])
        with col_text:
            flag = " ❗" if card.is_error else ""
            due = date_math.to_local(card.due_date).strftime("%d/%m")
            st.caption(f"{card.question} · {card.state} · due {due}{flag}")
        with col_delete:
            if st.button("🗑️", key=f"delete_card_{card.id}", help="Delete card"):
                get_plan_service().delete_card(plan.id, deck.id, sub_deck.id, card.id)
                st.rerun()
    if st.button("Delete sub-deck", key=f"delete_sub_deck_{sub_deck.id}"):
        get_plan_service().delete_sub_deck(plan.id, deck.id, sub_deck.id)
        st.rerun()


def _render_new_deck_form(plan: Plan) -> None:
    with st.form("new_deck", clear_on_submit=True):
        name = st.text_input("New deck")
        if st.form_submit_button("Create deck") and name.strip():
            get_plan_service().create_deck(plan.id, name.strip())
            st.rerun()


def _render_new_sub_deck_form(plan: Plan, deck: FlashcardDeck) -> None:
    with st.form(f"new_sub_deck_{deck.id}", clear_on_submit=True):
        name = st.text_input("New sub-deck")
        if st.form_submit_button("Create sub-deck") and name.strip():
            get_plan_service().create_sub_deck(plan.id, deck.id, name.strip())
            st.rerun()


def _render_new_card_form(plan: Plan, deck: FlashcardDeck) -> None:
    if not deck.sub_decks:
        st.caption("Create a sub-deck to add cards.")
        return
    with st.form(f"new_card_{deck.id}", clear_on_submit=True):
        sub_deck = st.selectbox("Sub-deck", deck.sub_decks, format_func=lambda sd: sd.name)
        question = st.text_area("Question")
        answer = st.text_area("Answer")
        media_url = st.text_input("Image URL (optional)")
        upload = st.file_uploader(
            "...or upload an image (max 5 MB)",
            type=["png", "jpg", "jpeg", "gif", "webp"],
            key=f"new_card_upload_{deck.id}",
        )
        media_side = st.radio(
            "Show image on",
            [MediaSide.QUESTION, MediaSide.ANSWER],
            format_func=lambda side: side.value.capitalize(),
            horizontal=True,
        )
        if st.form_submit_button("Add card"):
            if not question.strip() or not answer.strip():
                st.error("Question and answer are required.")
                return
            if upload is not None:
                try:
                    media_url = image_data_url(upload.getvalue(), upload.type)
                except ValidationError as exc:
                    st.error(str(exc))
                    return
            get_plan_service().add_card(
                plan.id,
                deck.id,
                sub_deck.id,
                question.strip(),
                answer.strip(),
                media_url=media_url,
                media_side=media_side,
            )
            st.rerun()


def _render_active_session() -> None:
    if render_session_stats():
        end_session()
        st.rerun()

    session = st.session_state.review_session
    card = session.current
    if card is None:
        end_session()
        st.rerun()
        return

    st.caption(st.session_state.review_label or "")
    corner = f"{session.position + 1}/{session.total}"
    question_style = ERROR_DECK_STYLE if session.from_error_deck else QUESTION_STYLE
    render_flashcard(card, MediaSide.QUESTION, corner_text=corner, style=question_style)
    st.markdown("<br>", unsafe_allow_html=True)

    if not st.session_state.show_answer:
        if st.button("Reveal Answer", use_container_width=True, type="primary"):
            st.session_state.show_answer = True
            st.rerun()
        return

    render_flashcard(card, MediaSide.ANSWER, style=ANSWER_STYLE)
    st.markdown("<br>", unsafe_allow_html=True)
    rating = render_feedback_buttons(session.policy, key_suffix=f"{session.position}")
    if rating is not None:
        process_rating(rating)
