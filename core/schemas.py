"""
Pydantic models for the study plan document.

A Plan is stored as one document: subjects own topics, topics own their
revisions, decks own sub-decks, sub-decks own cards. Attributes are
snake_case in Python and camelCase in the stored JSON; both spellings are
accepted on input.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core import date_math


# Entity invariants shared with the review engine
EASE_FACTOR_FLOOR = 1.3
DEFAULT_EASE_FACTOR = 2.5


def new_id() -> str:
    return str(uuid.uuid4())


class CardState(str, Enum):
    """Scheduling state of a flashcard."""
    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"


class MediaSide(str, Enum):
    """Which face of the card shows the attached media."""
    QUESTION = "question"
    ANSWER = "answer"


class PlanModel(BaseModel):
    """Base model: camelCase aliases, enums stored as plain strings."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


# ---- Revisions ----

class Revision(PlanModel):
    """
    One scheduled or completed review of a topic.

    The per-instance counts are only set once the revision is completed.
    """
    id: str = Field(default_factory=new_id)
    label: str
    scheduled_date: datetime
    is_completed: bool = False
    completed_date: Optional[datetime] = None
    questions_total: Optional[int] = Field(default=None, ge=0)
    questions_correct: Optional[int] = Field(default=None, ge=0)


class Topic(PlanModel):
    id: str = Field(default_factory=new_id)
    name: str
    questions_total: int = Field(default=0, ge=0)
    questions_correct: int = Field(default=0, ge=0)
    is_theory_completed: bool = False
    revisions: list[Revision] = Field(default_factory=list)
    last_revision: Optional[datetime] = None

    @model_validator(mode="after")
    def _correct_within_total(self) -> "Topic":
        if self.questions_correct > self.questions_total:
            raise ValueError(
                f"questions_correct ({self.questions_correct}) exceeds questions_total ({self.questions_total})"
            )
        return self


class Subject(PlanModel):
    id: str = Field(default_factory=new_id)
    name: str
    topics: list[Topic] = Field(default_factory=list)


class StudySession(PlanModel):
    """Append-only history entry used for the accuracy time series."""
    model_config = ConfigDict(frozen=True)

    date: datetime
    questions_total: int = Field(ge=0)
    questions_correct: int = Field(ge=0)


class MockExam(PlanModel):
    """A full practice exam; counts toward plan accuracy."""
    id: str = Field(default_factory=new_id)
    institution: str
    year: int
    questions_total: int = Field(ge=0)
    questions_correct: int = Field(ge=0)
    duration: str = ""  # e.g. "04:30"
    date: datetime = Field(default_factory=date_math.now)


# ---- Flashcards ----

class Flashcard(PlanModel):
    """
    A spaced-repetition card.

    Carries the fields of every review policy: the graduated policy uses
    state/interval/ease_factor/repetitions, the binary policy uses is_error.
    Both move due_date.
    """
    id: str = Field(default_factory=new_id)
    question: str
    answer: str
    media_url: Optional[str] = None
    media_type: Optional[str] = None  # "image"
    media_side: Optional[MediaSide] = None

    state: CardState = CardState.NEW
    interval: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = 0
    due_date: datetime = Field(default_factory=date_math.now)

    is_error: bool = False

    @field_validator("interval", "repetitions")
    @classmethod
    def _clamp_non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("ease_factor")
    @classmethod
    def _clamp_ease(cls, value: float) -> float:
        return max(EASE_FACTOR_FLOOR, value)


class FlashcardSubDeck(PlanModel):
    id: str = Field(default_factory=new_id)
    name: str
    cards: list[Flashcard] = Field(default_factory=list)


class FlashcardDeck(PlanModel):
    id: str = Field(default_factory=new_id)
    name: str
    sub_decks: list[FlashcardSubDeck] = Field(default_factory=list)


# ---- Plan ----

class Plan(PlanModel):
    """
    The single mutable aggregate persisted by the storage collaborator.
    """
    id: str = Field(default_factory=new_id)
    name: str
    created_at: datetime = Field(default_factory=date_math.now)
    subjects: list[Subject] = Field(default_factory=list)
    study_sessions: list[StudySession] = Field(default_factory=list)
    mock_exams: list[MockExam] = Field(default_factory=list)
    flashcard_decks: list[FlashcardDeck] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Serialize to the stored JSON shape (camelCase, ISO-8601 dates)."""
        return self.model_dump(mode="json", by_alias=True)
