"""
Flashcard review engine.

Quick start:
    from core import flashcards

    # Pure policy update
    card = flashcards.apply_graduated(card, flashcards.Rating.GOOD)

    # Session with a queue and one card in focus
    session = flashcards.ReviewSession(cards, flashcards.ReviewPolicy.BINARY)
    session.rate(session.current.id, flashcards.BinaryOutcome.WRONG)
"""

from core.flashcards.constants import (
    BINARY_RETRY_DAYS,
    DEFAULT_EASE,
    EASE_MIN,
    BinaryOutcome,
    Rating,
    ReviewPolicy,
)
from core.flashcards.media import MAX_IMAGE_BYTES, image_data_url
from core.flashcards.policies import apply_binary, apply_graduated, is_failure, review_card
from core.flashcards.review_session import ReviewSession, SessionResults

__all__ = [
    "BINARY_RETRY_DAYS",
    "DEFAULT_EASE",
    "EASE_MIN",
    "MAX_IMAGE_BYTES",
    "BinaryOutcome",
    "Rating",
    "ReviewPolicy",
    "apply_binary",
    "apply_graduated",
    "image_data_url",
    "is_failure",
    "review_card",
    "ReviewSession",
    "SessionResults",
]
