"""
Review Policies - pure card updates

Each policy is a function (card, rating) -> card. Nothing here touches
storage or the session queue; callers commit the returned card.

Graduated policy (SM-2-like):
- AGAIN: interval 0, repetitions 0, state learning
- HARD:  interval max(1, floor(interval * 1.2)), ease -0.15 (floor 1.3)
- GOOD:  1 day, then 6 days, then ceil(interval * ease); repetitions +1
- EASY:  4 days first, then ceil(interval * ease * 1.3); ease +0.15; repetitions +1
- due date = now + interval days

Binary policy (error deck):
- normal queue:  CORRECT -> due tomorrow; WRONG -> flagged and due tomorrow
- error queue:   CORRECT -> unflagged;    WRONG -> unchanged
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Union

from core import date_math
from core.flashcards.constants import (
    BINARY_RETRY_DAYS,
    EASE_MIN,
    EASY_BONUS,
    EASY_EASE_BONUS,
    FIRST_EASY_INTERVAL,
    FIRST_GOOD_INTERVAL,
    HARD_EASE_PENALTY,
    HARD_INTERVAL_FACTOR,
    INTERVAL_PRECISION,
    SECOND_GOOD_INTERVAL,
    BinaryOutcome,
    Rating,
    ReviewPolicy,
)
from core.schemas import CardState, Flashcard


def _ceil(value: float) -> int:
    return math.ceil(round(value, INTERVAL_PRECISION))


def _floor(value: float) -> int:
    return math.floor(round(value, INTERVAL_PRECISION))


def apply_graduated(
    card: Flashcard,
    rating: Rating,
    *,
    now: Optional[datetime] = None
) -> Flashcard:
    """
    Apply a graduated rating and return the rescheduled card.

    Args:
        card: Card being reviewed
        rating: AGAIN, HARD, GOOD or EASY
        now: Review timestamp (defaults to now)

    Returns:
        New Flashcard value; the input card is not modified
    """
    now = date_math.resolve_now(now)
    rating = Rating(rating)

    interval = card.interval
    ease = card.ease_factor
    repetitions = card.repetitions

    if rating == Rating.AGAIN:
        interval = 0
        repetitions = 0
        state = CardState.LEARNING
    elif rating == Rating.HARD:
        interval = max(1, _floor(interval * HARD_INTERVAL_FACTOR))
        ease = max(EASE_MIN, ease - HARD_EASE_PENALTY)
        state = CardState.REVIEW
    elif rating == Rating.GOOD:
        if repetitions == 0:
            interval = FIRST_GOOD_INTERVAL
        elif repetitions == 1:
            interval = SECOND_GOOD_INTERVAL
        else:
            interval = _ceil(interval * ease)
        repetitions += 1
        state = CardState.REVIEW
    else:
        if repetitions == 0:
            interval = FIRST_EASY_INTERVAL
        else:
            interval = _ceil(interval * ease * EASY_BONUS)
        ease = ease + EASY_EASE_BONUS
        repetitions += 1
        state = CardState.REVIEW

    return card.model_copy(update={
        "interval": interval,
        "ease_factor": round(ease, INTERVAL_PRECISION),
        "repetitions": repetitions,
        "state": state,
        "due_date": date_math.add_days(now, interval),
    })


def apply_binary(
    card: Flashcard,
    outcome: BinaryOutcome,
    *,
    from_error_deck: bool,
    now: Optional[datetime] = None
) -> Flashcard:
    """
    Apply a correct/wrong outcome and return the updated card.

    The graduated scheduling fields are carried over untouched.

    Args:
        card: Card being reviewed
        outcome: CORRECT or WRONG
        from_error_deck: True when the card is reviewed from the error deck
        now: Review timestamp (defaults to now)
    """
    outcome = BinaryOutcome(outcome)

    if from_error_deck:
        if outcome == BinaryOutcome.CORRECT:
            return card.model_copy(update={"is_error": False})
        return card

    now = date_math.resolve_now(now)
    update: dict = {"due_date": date_math.add_days(now, BINARY_RETRY_DAYS)}
    if outcome == BinaryOutcome.WRONG:
        update["is_error"] = True
    return card.model_copy(update=update)


def review_card(
    card: Flashcard,
    rating: Union[Rating, BinaryOutcome, None],
    policy: ReviewPolicy,
    *,
    from_error_deck: bool = False,
    now: Optional[datetime] = None
) -> Flashcard:
    """
    Dispatch a rating to the policy's update function.

    BROWSE leaves the card unchanged; the rating is ignored.
    """
    policy = ReviewPolicy(policy)
    if policy == ReviewPolicy.GRADUATED:
        return apply_graduated(card, Rating(rating), now=now)
    if policy == ReviewPolicy.BINARY:
        return apply_binary(card, BinaryOutcome(rating), from_error_deck=from_error_deck, now=now)
    return card


def is_failure(rating: Union[Rating, BinaryOutcome, None], policy: ReviewPolicy) -> bool:
    """True when the rating counts as a wrong answer for session results."""
    policy = ReviewPolicy(policy)
    if policy == ReviewPolicy.GRADUATED:
        return Rating(rating) == Rating.AGAIN
    if policy == ReviewPolicy.BINARY:
        return BinaryOutcome(rating) == BinaryOutcome.WRONG
    return False
