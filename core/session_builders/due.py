"""
Due-set selection for review sessions.

Cards are due when they were never reviewed (state "new") or their due
date falls on or before the end of "today". The comparison is date-only:
a card due at 08:00 is still included when the session starts at 21:00.

Pending topic revisions are always due; whether they are late, due today
or in the future is a display concern (see revision_board).

Every selection is shuffled so sessions do not repeat the same order.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Optional, TypeVar

from core import date_math
from core.exceptions import DeckNotFoundError
from core.schemas import CardState, Flashcard, Plan, Revision, Subject, Topic


T = TypeVar("T")

NOTHING_DUE_CARDS = "No cards due for review."
NOTHING_IN_ERROR_DECK = "The error deck is empty."
NOTHING_DUE_REVISIONS = "No pending revisions."
NOTHING_IN_DECK = "This deck has no cards."


@dataclass(frozen=True)
class DueSet(Generic[T]):
    """
    Result of a due selection.

    An empty selection is a normal outcome; `message` explains it.
    """
    items: list[T] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class DueRevision:
    """A pending revision with its owning subject and topic."""
    subject: Subject
    topic: Topic
    revision: Revision


def _shuffled(items: list[T], rng: Optional[random.Random]) -> list[T]:
    items = list(items)
    (rng or random).shuffle(items)
    return items


def is_card_due(card: Flashcard, today: datetime) -> bool:
    if card.state == CardState.NEW:
        return True
    return date_math.to_local(card.due_date) <= date_math.end_of_day(today)


def cards_in_scope(plan: Plan, deck_id: str, sub_deck_id: Optional[str] = None) -> list[Flashcard]:
    """
    All cards of a deck, or of one of its sub-decks.

    Raises:
        DeckNotFoundError: If the deck or sub-deck does not exist
    """
    deck = next((d for d in plan.flashcard_decks if d.id == deck_id), None)
    if deck is None:
        raise DeckNotFoundError(f"Deck {deck_id} not found", context={"deck_id": deck_id})

    if sub_deck_id is None:
        return [card for sub_deck in deck.sub_decks for card in sub_deck.cards]

    sub_deck = next((sd for sd in deck.sub_decks if sd.id == sub_deck_id), None)
    if sub_deck is None:
        raise DeckNotFoundError(
            f"Sub-deck {sub_deck_id} not found in deck {deck_id}",
            context={"deck_id": deck_id, "sub_deck_id": sub_deck_id},
        )
    return list(sub_deck.cards)


def error_deck_cards(plan: Plan) -> list[Flashcard]:
    """Every card flagged as answered wrong, across all decks."""
    return [
        card
        for deck in plan.flashcard_decks
        for sub_deck in deck.sub_decks
        for card in sub_deck.cards
        if card.is_error
    ]


def select_due_cards(
    plan: Plan,
    deck_id: str,
    sub_deck_id: Optional[str] = None,
    *,
    today: Optional[datetime] = None,
    rng: Optional[random.Random] = None
) -> DueSet[Flashcard]:
    """
    Select the due cards of a deck or sub-deck, shuffled.

    Args:
        plan: Plan owning the decks
        deck_id: Deck to review
        sub_deck_id: Restrict to one sub-deck
        today: Reference day (defaults to now)
        rng: Random source for the shuffle

    Raises:
        DeckNotFoundError: If the deck or sub-deck does not exist
    """
    today = date_math.resolve_now(today)
    due = [c for c in cards_in_scope(plan, deck_id, sub_deck_id) if is_card_due(c, today)]
    if not due:
        return DueSet(message=NOTHING_DUE_CARDS)
    return DueSet(items=_shuffled(due, rng))


def select_error_deck(plan: Plan, *, rng: Optional[random.Random] = None) -> DueSet[Flashcard]:
    """Select the whole error deck, shuffled, regardless of due dates."""
    cards = error_deck_cards(plan)
    if not cards:
        return DueSet(message=NOTHING_IN_ERROR_DECK)
    return DueSet(items=_shuffled(cards, rng))


def select_due_revisions(
    plan: Plan,
    *,
    subject_id: Optional[str] = None,
    topic_id: Optional[str] = None,
    rng: Optional[random.Random] = None
) -> DueSet[DueRevision]:
    """
    Select pending revisions of the plan, a subject, or a single topic.

    Unknown subject or topic ids simply select nothing.
    """
    due = []
    for subject in plan.subjects:
        if subject_id is not None and subject.id != subject_id:
            continue
        for topic in subject.topics:
            if topic_id is not None and topic.id != topic_id:
                continue
            for revision in topic.revisions:
                if not revision.is_completed:
                    due.append(DueRevision(subject=subject, topic=topic, revision=revision))

    if not due:
        return DueSet(message=NOTHING_DUE_REVISIONS)
    return DueSet(items=_shuffled(due, rng))
