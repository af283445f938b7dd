"""Tests for due-set selection."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from core import plan_ops, revisions
from core.exceptions import DeckNotFoundError
from core.flashcards import BinaryOutcome, apply_binary
from core.schemas import CardState, Flashcard, Plan
from core.session_builders import (
    cards_in_scope,
    is_card_due,
    select_due_cards,
    select_due_revisions,
    select_error_deck,
)
from core.session_builders.due import NOTHING_DUE_CARDS, NOTHING_DUE_REVISIONS, NOTHING_IN_ERROR_DECK


def _ids(cards) -> set[str]:
    return {card.id for card in cards}


class TestIsCardDue:
    """Tests for the inclusion rule of a single card."""

    def test_new_card_always_due(self, cards: dict[str, Flashcard], now: datetime) -> None:
        """New cards are due even with a future due date."""
        assert is_card_due(cards["new"], now)

    def test_due_earlier_today(self, cards: dict[str, Flashcard], now: datetime) -> None:
        """The comparison is date-only: 08:00 is due at 21:00 and at 06:00."""
        assert is_card_due(cards["due_this_morning"], now)
        assert is_card_due(cards["due_this_morning"], now.replace(hour=6))

    def test_due_tomorrow_not_due(self, cards: dict[str, Flashcard], now: datetime) -> None:
        """Half past midnight tomorrow is not due today."""
        assert not is_card_due(cards["due_tomorrow"], now)

    def test_end_of_day_in_study_time_zone(self, now: datetime) -> None:
        """End of day is local: 22:30 UTC is still March 10 in winter Amsterdam, 23:30 UTC is not."""
        late = Flashcard(
            question="q", answer="a", state=CardState.REVIEW,
            due_date=datetime(2024, 3, 10, 22, 30, tzinfo=timezone.utc),
        )
        next_day = late.model_copy(update={"due_date": datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc)})
        assert is_card_due(late, now)
        assert not is_card_due(next_day, now)


class TestSelectDueCards:
    """Tests for deck and sub-deck selection."""

    def test_exact_due_set(self, deck_plan: Plan, cards: dict[str, Flashcard], now: datetime) -> None:
        """The result is exactly the due cards of the deck."""
        deck = deck_plan.flashcard_decks[0]
        due = select_due_cards(deck_plan, deck.id, today=now, rng=random.Random(7))
        expected = {c.id for c in cards_in_scope(deck_plan, deck.id) if is_card_due(c, now)}
        assert _ids(due.items) == expected
        assert _ids(due.items) == _ids([cards["new"], cards["due_this_morning"], cards["overdue"]])
        assert due.message is None
        assert len(due) == 3

    def test_result_is_a_permutation(self, deck_plan: Plan, now: datetime) -> None:
        """Shuffling never drops or duplicates cards."""
        deck = deck_plan.flashcard_decks[0]
        for seed in range(5):
            due = select_due_cards(deck_plan, deck.id, today=now, rng=random.Random(seed))
            assert len(due.items) == len(_ids(due.items)) == 3

    def test_sub_deck_scope(self, deck_plan: Plan, cards: dict[str, Flashcard], now: datetime) -> None:
        """A sub-deck scope only looks at its own cards."""
        deck = deck_plan.flashcard_decks[0]
        advanced = deck.sub_decks[1]
        due = select_due_cards(deck_plan, deck.id, advanced.id, today=now)
        assert _ids(due.items) == {cards["overdue"].id}

    def test_nothing_due(self, deck_plan: Plan, now: datetime) -> None:
        """An empty selection carries a message instead of raising."""
        deck = deck_plan.flashcard_decks[0]
        past = now - timedelta(days=5)
        due = select_due_cards(deck_plan, deck.id, deck.sub_decks[1].id, today=past)
        assert due.is_empty
        assert due.message == NOTHING_DUE_CARDS

    def test_unknown_deck(self, deck_plan: Plan) -> None:
        """Unknown decks and sub-decks raise DeckNotFoundError."""
        deck = deck_plan.flashcard_decks[0]
        with pytest.raises(DeckNotFoundError):
            select_due_cards(deck_plan, "missing")
        with pytest.raises(DeckNotFoundError):
            select_due_cards(deck_plan, deck.id, "missing")


class TestErrorDeck:
    """Tests for the global error deck."""

    def test_flagged_cards_regardless_of_date(self, deck_plan: Plan, cards: dict[str, Flashcard]) -> None:
        """Every flagged card is selected, even when due in the future."""
        due = select_error_deck(deck_plan, rng=random.Random(1))
        assert _ids(due.items) == {cards["flagged_future"].id}

    def test_scenario_wrong_answer_enters_error_deck(
        self, deck_plan: Plan, cards: dict[str, Flashcard], now: datetime
    ) -> None:
        """A WRONG binary answer lands the card in the error deck, due tomorrow."""
        wrong = apply_binary(cards["overdue"], BinaryOutcome.WRONG, from_error_deck=False, now=now)
        assert wrong.due_date == now + timedelta(days=1)
        updated, missing = plan_ops.replace_cards(deck_plan, [wrong])
        assert missing == []
        assert cards["overdue"].id in _ids(select_error_deck(updated).items)

    def test_empty_error_deck(self, plan: Plan) -> None:
        """No flagged cards gives the empty-deck message."""
        due = select_error_deck(plan)
        assert due.is_empty
        assert due.message == NOTHING_IN_ERROR_DECK


class TestSelectDueRevisions:
    """Tests for pending revision selection."""

    @pytest.fixture
    def scheduled_plan(self, plan: Plan, now: datetime) -> Plan:
        subject = plan.subjects[0]
        for topic in subject.topics:
            updated, _ = revisions.register_session(topic, 4, 3, [1, 60], True, now=now)
            plan = plan_ops.replace_topic(plan, subject.id, updated)
        topic = plan.subjects[0].topics[0]
        done, _ = revisions.complete_revision(topic, topic.revisions[0].id, 2, 2, now=now)
        return plan_ops.replace_topic(plan, subject.id, done)

    def test_all_pending_regardless_of_date(self, scheduled_plan: Plan) -> None:
        """Pending revisions far in the future are still selected."""
        due = select_due_revisions(scheduled_plan, rng=random.Random(3))
        assert len(due) == 3
        assert all(not item.revision.is_completed for item in due.items)

    def test_topic_scope(self, scheduled_plan: Plan) -> None:
        """Scoping to one topic keeps its pending revisions only."""
        subject = scheduled_plan.subjects[0]
        topic = subject.topics[0]
        due = select_due_revisions(scheduled_plan, subject_id=subject.id, topic_id=topic.id)
        assert [item.revision.label for item in due.items] == ["D60"]
        assert due.items[0].topic.id == topic.id

    def test_nothing_pending(self, plan: Plan) -> None:
        """A plan without revisions gives the empty message."""
        due = select_due_revisions(plan)
        assert due.is_empty
        assert due.message == NOTHING_DUE_REVISIONS
