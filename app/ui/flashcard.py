"""
Flashcard UI Component

Renders one face of a card, with its image when the image belongs to
that face.
"""

from __future__ import annotations

import html

import streamlit as st

from app.ui.flashcard_style import (
    CARD_MIN_HEIGHT,
    CARD_PADDING,
    FlashcardStyle,
    QUESTION_STYLE,
)
from core.schemas import Flashcard, MediaSide


def _media_html(card: Flashcard, side: MediaSide, style: FlashcardStyle) -> str:
    if not card.media_url or card.media_side != side:
        return ""
    url = html.escape(card.media_url, quote=True)
    return (
        f'<img src="{url}" style="max-width: 100%; max-height: {style.media_max_height}; '
        'margin-top: 15px; border-radius: 8px;" />'
    )


def render_flashcard(
    card: Flashcard,
    side: MediaSide = MediaSide.QUESTION,
    corner_text: str = "",
    style: FlashcardStyle | None = None,
) -> None:
    """
    Render the question or answer face of a card.

    Args:
        card: Card to render
        side: Which face to render
        corner_text: Optional text in top-right corner (e.g. "3/12")
        style: Style preset for the face
    """
    style = style or QUESTION_STYLE
    text = card.question if side == MediaSide.QUESTION else card.answer

    corner_html = ""
    if corner_text:
        corner_html = (
            f'<div style="position: absolute; top: 12px; right: 18px; '
            f'font-size: {style.corner_font_size}; color: {style.corner_color};">'
            f"{html.escape(corner_text)}</div>"
        )

    text_html = (
        f'<p style="font-size: {style.text_font_size}; color: {style.text_color}; '
        'margin: 0; text-align: center; line-height: 1.4; max-width: 100%; '
        'overflow-wrap: anywhere; white-space: pre-wrap;">'
        f"{html.escape(text)}</p>"
    )

    card_html = (
        f'<div style="background-color: {style.bg_color}; padding: {CARD_PADDING}; '
        'border-radius: 15px; text-align: center; box-shadow: 0 4px 6px '
        f'rgba(0, 0, 0, 0.1); min-height: {CARD_MIN_HEIGHT}; display: flex; '
        'flex-direction: column; align-items: center; justify-content: center; '
        f'position: relative;">{corner_html}{text_html}{_media_html(card, side, style)}</div>'
    )

    st.markdown(card_html, unsafe_allow_html=True)
