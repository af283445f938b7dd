"""
Session-scoped review queue.

A ReviewSession owns an explicit in-memory queue (list + cursor) of the
cards selected for one sitting. Exactly one card is in focus at a time.
Cards rated AGAIN are re-appended to the end of the queue so they can be
retried in the same session. The queue itself is never persisted; only
the committed card values are written back to the plan.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from core.exceptions import CardNotFoundError, CardNotInFocusError, SessionFinishedError
from core.flashcards.constants import BinaryOutcome, Rating, ReviewPolicy
from core.flashcards.policies import is_failure, review_card
from core.logging import get_logger
from core.schemas import Flashcard

logger = get_logger(__name__)


@dataclass
class SessionResults:
    correct: int = 0
    wrong: int = 0

    @property
    def reviewed(self) -> int:
        return self.correct + self.wrong

    @property
    def accuracy(self) -> float:
        if self.reviewed == 0:
            return 0.0
        return self.correct / self.reviewed * 100


class ReviewSession:
    """
    Sequential review of a fixed set of cards under one policy.
    """

    def __init__(
        self,
        cards: list[Flashcard],
        policy: ReviewPolicy = ReviewPolicy.GRADUATED,
        *,
        from_error_deck: bool = False,
        now: Optional[datetime] = None
    ):
        """
        Args:
            cards: Cards to review, already ordered (shuffled) by the caller
            policy: Review policy applied to every rating
            from_error_deck: Cards come from the error deck (binary policy)
            now: Fixed review timestamp; defaults to the time of each rating
        """
        self.policy = ReviewPolicy(policy)
        self.from_error_deck = from_error_deck
        self.now = now
        self.queue: list[Flashcard] = list(cards)
        self.position = 0
        self.results = SessionResults()
        self._card_ids = {card.id for card in cards}
        self._committed: dict[str, Flashcard] = {}

    @property
    def current(self) -> Optional[Flashcard]:
        """Card in focus, or None when the session is finished."""
        if self.position >= len(self.queue):
            return None
        return self.queue[self.position]

    @property
    def is_finished(self) -> bool:
        return self.position >= len(self.queue)

    @property
    def remaining(self) -> int:
        return max(0, len(self.queue) - self.position)

    @property
    def total(self) -> int:
        return len(self.queue)

    def rate(self, card_id: str, rating: Union[Rating, BinaryOutcome, None] = None) -> Flashcard:
        """
        Rate the card in focus and advance the cursor.

        Args:
            card_id: Id of the card being rated; must be the card in focus
            rating: Rating for the session's policy (ignored when browsing)

        Returns:
            The updated card

        Raises:
            CardNotFoundError: card_id is not part of this session
            SessionFinishedError: no card is left in the queue
            CardNotInFocusError: card_id is not the card in focus
        """
        if card_id not in self._card_ids:
            raise CardNotFoundError(
                f"Card {card_id} is not part of this review session",
                context={"card_id": card_id},
            )
        current = self.current
        if current is None:
            raise SessionFinishedError(
                "Review session has no cards left",
                context={"card_id": card_id},
            )
        if current.id != card_id:
            raise CardNotInFocusError(
                f"Card {card_id} is not the card in focus",
                context={"card_id": card_id, "current_card_id": current.id},
            )

        updated = review_card(
            current,
            rating,
            self.policy,
            from_error_deck=self.from_error_deck,
            now=self.now,
        )
        if self.policy != ReviewPolicy.BROWSE:
            self._committed[updated.id] = updated
            if is_failure(rating, self.policy):
                self.results.wrong += 1
            else:
                self.results.correct += 1

        if self.policy == ReviewPolicy.GRADUATED and Rating(rating) == Rating.AGAIN:
            self.queue.append(updated)

        self.position += 1
        logger.debug(
            "card_reviewed",
            card_id=card_id,
            policy=self.policy.value,
            rating=None if rating is None else int(rating),
            remaining=self.remaining,
        )
        return updated

    def committed_cards(self) -> list[Flashcard]:
        """Latest value of every card changed in this session."""
        return list(self._committed.values())
