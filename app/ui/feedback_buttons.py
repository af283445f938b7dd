"""
Feedback Button UI

Renders rating buttons for the graduated and binary review policies.
"""

from __future__ import annotations

from typing import Optional, Union

import streamlit as st

from core.flashcards import BinaryOutcome, Rating, ReviewPolicy


GRADUATED_CHOICES = [
    ("❌ Again", Rating.AGAIN),
    ("😰 Hard", Rating.HARD),
    ("👍 Good", Rating.GOOD),
    ("✨ Easy", Rating.EASY),
]

BINARY_CHOICES = [
    ("❌ Wrong", BinaryOutcome.WRONG),
    ("✅ Correct", BinaryOutcome.CORRECT),
]


def render_feedback_buttons(
    policy: ReviewPolicy,
    key_suffix: str = ""
) -> Optional[Union[Rating, BinaryOutcome]]:
    """
    Render feedback buttons for the session's policy.

    Returns:
        The selected rating, or None if no button was clicked
    """
    if policy == ReviewPolicy.BROWSE:
        if st.button("Next ➡️", use_container_width=True, key=f"next_{key_suffix}"):
            return BinaryOutcome.CORRECT
        return None

    if policy == ReviewPolicy.GRADUATED:
        st.markdown("**How well did you remember this card?**")
        choices = GRADUATED_CHOICES
    else:
        st.markdown("**Did you get it right?**")
        choices = BINARY_CHOICES

    columns = st.columns(len(choices))
    for column, (label, value) in zip(columns, choices):
        with column:
            if st.button(label, use_container_width=True, key=f"rate_{int(value)}_{key_suffix}"):
                return value
    return None
