"""
Plan Service - in-memory plans with fire-and-forget persistence

Every mutating operation follows the same steps:
1. Validate user input (validation errors propagate to the caller)
2. Apply a pure operation to the current Plan, producing a new Plan
3. Swap the new Plan into memory (immediately visible)
4. Save it; storage failures are logged and retried on the next save

Not-found and conflict outcomes leave the plan untouched and are
reported as False/None rather than raised.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import Callable, Iterable, Optional, Tuple, Union

from pymongo.errors import PyMongoError

from core import plan_ops, revisions
from core.exceptions import ConflictError, NotFoundError, StorageError
from core.flashcards import BinaryOutcome, Rating, ReviewPolicy, ReviewSession
from core.logging import get_logger, plan_context
from core.schemas import Flashcard, FlashcardDeck, FlashcardSubDeck, MediaSide, MockExam, Plan, Subject, Topic
from core.session_builders import due
from core.storage import PlanStore

logger = get_logger(__name__)

PERSISTENCE_ERRORS = (StorageError, PyMongoError, OSError)


class PlanService:
    """
    Owns the in-memory plans of one user and their persistence.
    """

    def __init__(self, store: PlanStore):
        self.store = store
        self.plans: dict[str, Plan] = {}
        self._unsaved: set[str] = set()

    # ---- Loading and persistence ----

    def load(self) -> list[Plan]:
        """
        Load every plan from storage, replacing the in-memory copies.

        A storage failure leaves the service empty and is logged.
        """
        try:
            plans = self.store.get_plans()
        except PERSISTENCE_ERRORS as exc:
            logger.error("plans_load_failed", error=str(exc), exc_info=True)
            plans = []
        self.plans = {plan.id: plan for plan in plans}
        logger.info("plans_loaded", count=len(plans))
        return plans

    @property
    def unsaved_plan_ids(self) -> set[str]:
        """Plans whose last save failed and will be retried."""
        return set(self._unsaved)

    def _persist(self, plan_id: str) -> None:
        pending = [pid for pid in self._unsaved if pid != plan_id] + [plan_id]
        for pid in pending:
            plan = self.plans.get(pid)
            if plan is None:
                self._unsaved.discard(pid)
                continue
            with plan_context(pid):
                try:
                    self.store.save_plan(plan)
                except PERSISTENCE_ERRORS as exc:
                    self._unsaved.add(pid)
                    logger.error("plan_save_failed", plan_id=pid, error=str(exc), exc_info=True)
                else:
                    self._unsaved.discard(pid)

    def _commit(self, plan: Plan) -> Plan:
        self.plans[plan.id] = plan
        self._persist(plan.id)
        return plan

    def _apply(
        self,
        plan_id: str,
        operation: Callable[[Plan], Plan],
        event: str,
        **context: object
    ) -> bool:
        plan = self.plans.get(plan_id)
        if plan is None:
            logger.warning(f"{event}_failed", plan_id=plan_id, reason="plan_not_found", **context)
            return False
        with plan_context(plan_id):
            try:
                updated = operation(plan)
            except (NotFoundError, ConflictError) as exc:
                logger.warning(f"{event}_failed", plan_id=plan_id, reason=str(exc), **context)
                return False
            self._commit(updated)
            logger.info(event, plan_id=plan_id, **context)
        return True

    # ---- Plans ----

    def list_plans(self) -> list[Plan]:
        return sorted(self.plans.values(), key=lambda p: p.created_at)

    def get_plan(self, plan_id: str) -> Optional[Plan]:
        return self.plans.get(plan_id)

    def create_plan(self, name: str) -> Plan:
        plan = self._commit(plan_ops.new_plan(name))
        logger.info("plan_created", plan_id=plan.id)
        return plan

    def delete_plan(self, plan_id: str) -> bool:
        if self.plans.pop(plan_id, None) is None:
            return False
        self._unsaved.discard(plan_id)
        try:
            self.store.delete_plan(plan_id)
        except PERSISTENCE_ERRORS as exc:
            logger.error("plan_delete_failed", plan_id=plan_id, error=str(exc), exc_info=True)
        logger.info("plan_deleted", plan_id=plan_id)
        return True

    # ---- Subjects and topics ----

    def add_subject(self, plan_id: str, name: str) -> Optional[Subject]:
        created: list[Subject] = []

        def op(plan: Plan) -> Plan:
            updated, subject = plan_ops.add_subject(plan, name)
            created.append(subject)
            return updated

        if not self._apply(plan_id, op, "subject_added"):
            return None
        return created[0]

    def delete_subject(self, plan_id: str, subject_id: str) -> bool:
        return self._apply(
            plan_id,
            lambda plan: plan_ops.delete_subject(plan, subject_id),
            "subject_deleted",
            subject_id=subject_id,
        )

    def add_topic(self, plan_id: str, subject_id: str, name: str) -> Optional[Topic]:
        created: list[Topic] = []

        def op(plan: Plan) -> Plan:
            updated, topic = plan_ops.add_topic(plan, subject_id, name)
            created.append(topic)
            return updated

        if not self._apply(plan_id, op, "topic_added", subject_id=subject_id):
            return None
        return created[0]

    def delete_topic(self, plan_id: str, subject_id: str, topic_id: str) -> bool:
        return self._apply(
            plan_id,
            lambda plan: plan_ops.delete_topic(plan, subject_id, topic_id),
            "topic_deleted",
            subject_id=subject_id,
            topic_id=topic_id,
        )

    # ---- Revisions ----

    def register_session(
        self,
        plan_id: str,
        subject_id: str,
        topic_id: str,
        total: int,
        correct: int,
        offsets: Iterable[int],
        theory_finished: bool,
        *,
        day_zero: Optional[bool] = None,
        now: Optional[datetime] = None
    ) -> bool:
        """
        Record a study session and schedule its revisions.

        Raises:
            InvalidCountsError: If the counts are impossible
        """
        revisions.validate_counts(total, correct)
        offsets = revisions.normalize_offsets(offsets)

        def op(plan: Plan) -> Plan:
            topic = plan_ops.find_topic(plan, subject_id, topic_id)
            topic, session = revisions.register_session(
                topic, total, correct, offsets, theory_finished, day_zero=day_zero, now=now
            )
            return plan_ops.append_session(plan_ops.replace_topic(plan, subject_id, topic), session)

        return self._apply(
            plan_id,
            op,
            "session_registered",
            topic_id=topic_id,
            total=total,
            correct=correct,
            offsets=offsets,
        )

    def complete_revision(
        self,
        plan_id: str,
        subject_id: str,
        topic_id: str,
        revision_id: str,
        total: int,
        correct: int,
        *,
        now: Optional[datetime] = None
    ) -> bool:
        """
        Complete a pending revision with its question counts.

        Raises:
            InvalidCountsError: If the counts are impossible
        """
        revisions.validate_counts(total, correct)

        def op(plan: Plan) -> Plan:
            topic = plan_ops.find_topic(plan, subject_id, topic_id)
            topic, session = revisions.complete_revision(topic, revision_id, total, correct, now=now)
            return plan_ops.append_session(plan_ops.replace_topic(plan, subject_id, topic), session)

        return self._apply(
            plan_id,
            op,
            "revision_completed",
            topic_id=topic_id,
            revision_id=revision_id,
            total=total,
            correct=correct,
        )

    def delete_revision(self, plan_id: str, subject_id: str, topic_id: str, revision_id: str) -> bool:
        def op(plan: Plan) -> Plan:
            topic = plan_ops.find_topic(plan, subject_id, topic_id)
            return plan_ops.replace_topic(plan, subject_id, revisions.delete_revision(topic, revision_id))

        return self._apply(plan_id, op, "revision_deleted", topic_id=topic_id, revision_id=revision_id)

    def reset_progress(self, plan_id: str) -> bool:
        return self._apply(plan_id, plan_ops.reset_progress, "progress_reset")

    # ---- Mock exams ----

    def add_mock_exam(
        self,
        plan_id: str,
        institution: str,
        year: int,
        total: int,
        correct: int,
        duration: str = "",
        *,
        date: Optional[datetime] = None
    ) -> Optional[MockExam]:
        """
        Raises:
            InvalidCountsError: If the counts are impossible
        """
        revisions.validate_counts(total, correct)
        fields = {
            "institution": institution,
            "year": year,
            "questions_total": total,
            "questions_correct": correct,
            "duration": duration,
        }
        if date is not None:
            fields["date"] = date
        exam = MockExam(**fields)
        if not self._apply(plan_id, lambda plan: plan_ops.add_mock_exam(plan, exam), "mock_exam_added"):
            return None
        return exam

    def delete_mock_exam(self, plan_id: str, exam_id: str) -> bool:
        return self._apply(
            plan_id,
            lambda plan: plan_ops.delete_mock_exam(plan, exam_id),
            "mock_exam_deleted",
            exam_id=exam_id,
        )

    # ---- Decks and cards ----

    def create_deck(self, plan_id: str, name: str) -> Optional[FlashcardDeck]:
        created: list[FlashcardDeck] = []

        def op(plan: Plan) -> Plan:
            updated, deck = plan_ops.add_deck(plan, name)
            created.append(deck)
            return updated

        if not self._apply(plan_id, op, "deck_created"):
            return None
        return created[0]

    def create_sub_deck(self, plan_id: str, deck_id: str, name: str) -> Optional[FlashcardSubDeck]:
        created: list[FlashcardSubDeck] = []

        def op(plan: Plan) -> Plan:
            updated, sub_deck = plan_ops.add_sub_deck(plan, deck_id, name)
            created.append(sub_deck)
            return updated

        if not self._apply(plan_id, op, "sub_deck_created", deck_id=deck_id):
            return None
        return created[0]

    def add_card(
        self,
        plan_id: str,
        deck_id: str,
        sub_deck_id: str,
        question: str,
        answer: str,
        *,
        media_url: Optional[str] = None,
        media_side: Optional[MediaSide] = None
    ) -> Optional[Flashcard]:
        media_url = media_url.strip() if media_url else None
        card = Flashcard(
            question=question,
            answer=answer,
            media_url=media_url or None,
            media_type="image" if media_url else None,
            media_side=(media_side or MediaSide.QUESTION) if media_url else None,
        )
        if not self._apply(
            plan_id,
            lambda plan: plan_ops.add_card(plan, deck_id, sub_deck_id, card),
            "card_added",
            deck_id=deck_id,
            sub_deck_id=sub_deck_id,
        ):
            return None
        return card

    def delete_card(self, plan_id: str, deck_id: str, sub_deck_id: str, card_id: str) -> bool:
        return self._apply(
            plan_id,
            lambda plan: plan_ops.delete_card(plan, deck_id, sub_deck_id, card_id),
            "card_deleted",
            card_id=card_id,
        )

    def delete_sub_deck(self, plan_id: str, deck_id: str, sub_deck_id: str) -> bool:
        return self._apply(
            plan_id,
            lambda plan: plan_ops.delete_sub_deck(plan, deck_id, sub_deck_id),
            "sub_deck_deleted",
            deck_id=deck_id,
            sub_deck_id=sub_deck_id,
        )

    def delete_deck(self, plan_id: str, deck_id: str) -> bool:
        return self._apply(
            plan_id,
            lambda plan: plan_ops.delete_deck(plan, deck_id),
            "deck_deleted",
            deck_id=deck_id,
        )

    # ---- Card reviews ----

    def start_card_review(
        self,
        plan_id: str,
        deck_id: str,
        sub_deck_id: Optional[str] = None,
        policy: ReviewPolicy = ReviewPolicy.GRADUATED,
        *,
        today: Optional[datetime] = None,
        rng: Optional[random.Random] = None
    ) -> Tuple[Optional[ReviewSession], Optional[str]]:
        """
        Build a review session over the due cards of a deck or sub-deck.

        Browsing goes through every card of the scope, due or not.

        Returns:
            Tuple of (session, message); session is None when nothing is
            due or the deck does not exist, and message says why.
        """
        plan = self.plans.get(plan_id)
        if plan is None:
            return None, "Plan not found."

        policy = ReviewPolicy(policy)
        try:
            if policy == ReviewPolicy.BROWSE:
                cards = due.cards_in_scope(plan, deck_id, sub_deck_id)
                (rng or random).shuffle(cards)
                due_set = due.DueSet(items=cards) if cards else due.DueSet(message=due.NOTHING_IN_DECK)
            else:
                due_set = due.select_due_cards(plan, deck_id, sub_deck_id, today=today, rng=rng)
        except NotFoundError as exc:
            logger.warning("review_start_failed", plan_id=plan_id, reason=str(exc))
            return None, str(exc)

        if due_set.is_empty:
            return None, due_set.message
        logger.info("review_started", plan_id=plan_id, deck_id=deck_id, policy=policy.value, cards=len(due_set))
        return ReviewSession(due_set.items, policy, now=today), None

    def start_error_deck_review(
        self,
        plan_id: str,
        *,
        today: Optional[datetime] = None,
        rng: Optional[random.Random] = None
    ) -> Tuple[Optional[ReviewSession], Optional[str]]:
        """Review every flagged card with the binary policy."""
        plan = self.plans.get(plan_id)
        if plan is None:
            return None, "Plan not found."
        due_set = due.select_error_deck(plan, rng=rng)
        if due_set.is_empty:
            return None, due_set.message
        logger.info("review_started", plan_id=plan_id, deck_id="error_deck", policy="binary", cards=len(due_set))
        return ReviewSession(due_set.items, ReviewPolicy.BINARY, from_error_deck=True, now=today), None

    def rate_card(
        self,
        plan_id: str,
        session: ReviewSession,
        card_id: str,
        rating: Union[Rating, BinaryOutcome, None] = None
    ) -> Optional[Flashcard]:
        """
        Rate the card in focus and commit its new scheduling fields.

        Returns:
            The updated card, or None when the card is unknown, was deleted
            from the plan, is not in focus, or the session is over
        """
        if plan_id not in self.plans:
            logger.warning("card_review_failed", plan_id=plan_id, card_id=card_id, reason="plan_not_found")
            return None
        try:
            updated = session.rate(card_id, rating)
        except (NotFoundError, ConflictError) as exc:
            logger.warning("card_review_failed", plan_id=plan_id, card_id=card_id, reason=str(exc))
            return None

        if session.policy == ReviewPolicy.BROWSE:
            return updated

        updated_plan, missing = plan_ops.replace_cards(self.plans[plan_id], [updated])
        if missing:
            logger.warning("card_review_failed", plan_id=plan_id, card_id=card_id, reason="card_not_found")
            return None
        self._commit(updated_plan)
        logger.info(
            "card_reviewed",
            plan_id=plan_id,
            card_id=card_id,
            policy=session.policy.value,
            rating=None if rating is None else int(rating),
        )
        return updated

    def commit_review(self, plan_id: str, session: ReviewSession) -> bool:
        """Write every card changed in a session back to the plan."""
        cards = session.committed_cards()
        if not cards:
            return True
        missing: list[str] = []

        def op(plan: Plan) -> Plan:
            updated, not_found = plan_ops.replace_cards(plan, cards)
            missing.extend(not_found)
            return updated

        ok = self._apply(plan_id, op, "review_committed", cards=len(cards))
        if missing:
            logger.warning("review_cards_missing", plan_id=plan_id, card_ids=missing)
        return ok
