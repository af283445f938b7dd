"""
Structural-sharing updates of a Plan.

Every function returns a new Plan in which only the path to the changed
entity is copied; untouched subjects, topics and decks are shared with
the input. Lookups raise NotFoundError subclasses.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from core.exceptions import (
    CardNotFoundError,
    DeckNotFoundError,
    SubjectNotFoundError,
    TopicNotFoundError,
)
from core.schemas import (
    Flashcard,
    FlashcardDeck,
    FlashcardSubDeck,
    MockExam,
    Plan,
    StudySession,
    Subject,
    Topic,
)


# ---- Plans ----

def new_plan(name: str) -> Plan:
    return Plan(name=name)


# ---- Subjects and topics ----

def find_subject(plan: Plan, subject_id: str) -> Subject:
    for subject in plan.subjects:
        if subject.id == subject_id:
            return subject
    raise SubjectNotFoundError(
        f"Subject {subject_id} not found",
        context={"plan_id": plan.id, "subject_id": subject_id},
    )


def find_topic(plan: Plan, subject_id: str, topic_id: str) -> Topic:
    subject = find_subject(plan, subject_id)
    for topic in subject.topics:
        if topic.id == topic_id:
            return topic
    raise TopicNotFoundError(
        f"Topic {topic_id} not found",
        context={"plan_id": plan.id, "subject_id": subject_id, "topic_id": topic_id},
    )


def _update_subject(plan: Plan, subject_id: str, fn: Callable[[Subject], Subject]) -> Plan:
    find_subject(plan, subject_id)
    return plan.model_copy(update={
        "subjects": [fn(s) if s.id == subject_id else s for s in plan.subjects],
    })


def replace_topic(plan: Plan, subject_id: str, topic: Topic) -> Plan:
    """Swap in a new value of an existing topic (matched by id)."""
    find_topic(plan, subject_id, topic.id)
    return _update_subject(
        plan,
        subject_id,
        lambda s: s.model_copy(update={
            "topics": [topic if t.id == topic.id else t for t in s.topics],
        }),
    )


def add_subject(plan: Plan, name: str) -> tuple[Plan, Subject]:
    subject = Subject(name=name)
    return plan.model_copy(update={"subjects": [*plan.subjects, subject]}), subject


def delete_subject(plan: Plan, subject_id: str) -> Plan:
    find_subject(plan, subject_id)
    return plan.model_copy(update={
        "subjects": [s for s in plan.subjects if s.id != subject_id],
    })


def add_topic(plan: Plan, subject_id: str, name: str) -> tuple[Plan, Topic]:
    topic = Topic(name=name)
    updated = _update_subject(
        plan,
        subject_id,
        lambda s: s.model_copy(update={"topics": [*s.topics, topic]}),
    )
    return updated, topic


def delete_topic(plan: Plan, subject_id: str, topic_id: str) -> Plan:
    find_topic(plan, subject_id, topic_id)
    return _update_subject(
        plan,
        subject_id,
        lambda s: s.model_copy(update={"topics": [t for t in s.topics if t.id != topic_id]}),
    )


def append_session(plan: Plan, session: StudySession) -> Plan:
    return plan.model_copy(update={"study_sessions": [*plan.study_sessions, session]})


def reset_progress(plan: Plan) -> Plan:
    """
    Clear the question history of a plan.

    Topic counters go back to zero, revisions and the theory flag are
    dropped, and the session history is emptied. Subjects, topics, mock
    exams and flashcards are kept.
    """
    subjects = [
        subject.model_copy(update={
            "topics": [
                topic.model_copy(update={
                    "questions_total": 0,
                    "questions_correct": 0,
                    "is_theory_completed": False,
                    "revisions": [],
                    "last_revision": None,
                })
                for topic in subject.topics
            ],
        })
        for subject in plan.subjects
    ]
    return plan.model_copy(update={"subjects": subjects, "study_sessions": []})


# ---- Mock exams ----

def add_mock_exam(plan: Plan, exam: MockExam) -> Plan:
    return plan.model_copy(update={"mock_exams": [*plan.mock_exams, exam]})


def delete_mock_exam(plan: Plan, exam_id: str) -> Plan:
    return plan.model_copy(update={
        "mock_exams": [e for e in plan.mock_exams if e.id != exam_id],
    })


# ---- Flashcard decks ----

def _find_deck(plan: Plan, deck_id: str) -> FlashcardDeck:
    for deck in plan.flashcard_decks:
        if deck.id == deck_id:
            return deck
    raise DeckNotFoundError(f"Deck {deck_id} not found", context={"deck_id": deck_id})


def _find_sub_deck(deck: FlashcardDeck, sub_deck_id: str) -> FlashcardSubDeck:
    for sub_deck in deck.sub_decks:
        if sub_deck.id == sub_deck_id:
            return sub_deck
    raise DeckNotFoundError(
        f"Sub-deck {sub_deck_id} not found in deck {deck.id}",
        context={"deck_id": deck.id, "sub_deck_id": sub_deck_id},
    )


def _update_deck(plan: Plan, deck_id: str, fn: Callable[[FlashcardDeck], FlashcardDeck]) -> Plan:
    _find_deck(plan, deck_id)
    return plan.model_copy(update={
        "flashcard_decks": [fn(d) if d.id == deck_id else d for d in plan.flashcard_decks],
    })


def _update_sub_deck(
    plan: Plan,
    deck_id: str,
    sub_deck_id: str,
    fn: Callable[[FlashcardSubDeck], FlashcardSubDeck]
) -> Plan:
    _find_sub_deck(_find_deck(plan, deck_id), sub_deck_id)
    return _update_deck(
        plan,
        deck_id,
        lambda d: d.model_copy(update={
            "sub_decks": [fn(sd) if sd.id == sub_deck_id else sd for sd in d.sub_decks],
        }),
    )


def add_deck(plan: Plan, name: str) -> tuple[Plan, FlashcardDeck]:
    deck = FlashcardDeck(name=name)
    return plan.model_copy(update={"flashcard_decks": [*plan.flashcard_decks, deck]}), deck


def delete_deck(plan: Plan, deck_id: str) -> Plan:
    _find_deck(plan, deck_id)
    return plan.model_copy(update={
        "flashcard_decks": [d for d in plan.flashcard_decks if d.id != deck_id],
    })


def add_sub_deck(plan: Plan, deck_id: str, name: str) -> tuple[Plan, FlashcardSubDeck]:
    sub_deck = FlashcardSubDeck(name=name)
    updated = _update_deck(
        plan,
        deck_id,
        lambda d: d.model_copy(update={"sub_decks": [*d.sub_decks, sub_deck]}),
    )
    return updated, sub_deck


def delete_sub_deck(plan: Plan, deck_id: str, sub_deck_id: str) -> Plan:
    _find_sub_deck(_find_deck(plan, deck_id), sub_deck_id)
    return _update_deck(
        plan,
        deck_id,
        lambda d: d.model_copy(update={
            "sub_decks": [sd for sd in d.sub_decks if sd.id != sub_deck_id],
        }),
    )


def add_card(plan: Plan, deck_id: str, sub_deck_id: str, card: Flashcard) -> Plan:
    return _update_sub_deck(
        plan,
        deck_id,
        sub_deck_id,
        lambda sd: sd.model_copy(update={"cards": [*sd.cards, card]}),
    )


def delete_card(plan: Plan, deck_id: str, sub_deck_id: str, card_id: str) -> Plan:
    sub_deck = _find_sub_deck(_find_deck(plan, deck_id), sub_deck_id)
    if not any(c.id == card_id for c in sub_deck.cards):
        raise CardNotFoundError(f"Card {card_id} not found", context={"card_id": card_id})
    return _update_sub_deck(
        plan,
        deck_id,
        sub_deck_id,
        lambda sd: sd.model_copy(update={"cards": [c for c in sd.cards if c.id != card_id]}),
    )


def find_card(plan: Plan, card_id: str) -> Optional[Flashcard]:
    for deck in plan.flashcard_decks:
        for sub_deck in deck.sub_decks:
            for card in sub_deck.cards:
                if card.id == card_id:
                    return card
    return None


def search_decks(plan: Plan, query: str) -> list[FlashcardDeck]:
    """Decks whose name, or the name of one of their sub-decks, contains query (case-insensitive)."""
    needle = query.strip().lower()
    if not needle:
        return list(plan.flashcard_decks)
    return [
        deck
        for deck in plan.flashcard_decks
        if needle in deck.name.lower() or any(needle in sd.name.lower() for sd in deck.sub_decks)
    ]


def replace_cards(plan: Plan, cards: Iterable[Flashcard]) -> tuple[Plan, list[str]]:
    """
    Write updated cards back into their sub-decks, matched by id.

    Only sub-decks that contain a replaced card are copied.

    Returns:
        Tuple of (updated_plan, ids_not_found); cards deleted while a
        session was running are skipped and reported.
    """
    by_id = {card.id: card for card in cards}
    found: set[str] = set()

    decks = []
    for deck in plan.flashcard_decks:
        sub_decks = []
        deck_changed = False
        for sub_deck in deck.sub_decks:
            hits = [c.id for c in sub_deck.cards if c.id in by_id]
            if not hits:
                sub_decks.append(sub_deck)
                continue
            found.update(hits)
            deck_changed = True
            sub_decks.append(sub_deck.model_copy(update={
                "cards": [by_id.get(c.id, c) for c in sub_deck.cards],
            }))
        decks.append(deck.model_copy(update={"sub_decks": sub_decks}) if deck_changed else deck)

    missing = [card_id for card_id in by_id if card_id not in found]
    return plan.model_copy(update={"flashcard_decks": decks}), missing
