"""
Flashcard style presets and constants.
"""

from __future__ import annotations

from dataclasses import dataclass


CARD_PADDING = "30px 24px"
CARD_MIN_HEIGHT = "200px"
QUESTION_BG_COLOR = "#f0f2f6"
ANSWER_BG_COLOR = "#e8f4f8"
ERROR_ACCENT_COLOR = "#b91c1c"


@dataclass(frozen=True)
class FlashcardStyle:
    """
    Visual style preset for a card face.
    """
    text_font_size: str = "1.8em"
    text_color: str = "#1f1f1f"
    corner_font_size: str = "0.85em"
    corner_color: str = "#666"
    bg_color: str = QUESTION_BG_COLOR
    media_max_height: str = "260px"


QUESTION_STYLE = FlashcardStyle()

ANSWER_STYLE = FlashcardStyle(
    text_font_size="1.5em",
    bg_color=ANSWER_BG_COLOR,
)

ERROR_DECK_STYLE = FlashcardStyle(
    corner_color=ERROR_ACCENT_COLOR,
)
