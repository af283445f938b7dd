"""Pytest configuration and fixtures."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from core.schemas import (
    CardState,
    Flashcard,
    FlashcardDeck,
    FlashcardSubDeck,
    Plan,
    Subject,
    Topic,
)
from core.storage import LocalPlanStore

STUDY_TZ = "Europe/Amsterdam"


@pytest.fixture(autouse=True)
def study_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin every setting that influences scheduling."""
    monkeypatch.setenv("STUDY_TIMEZONE", STUDY_TZ)
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    for name in ("DAY_ZERO_REVISION", "TEST_MODE", "MONGO_URI", "LOCAL_STORE_PATH", "DEFAULT_REVISION_PATTERN"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tz() -> ZoneInfo:
    return ZoneInfo(STUDY_TZ)


@pytest.fixture
def now(tz: ZoneInfo) -> datetime:
    """A fixed evening in the study time zone."""
    return datetime(2024, 3, 10, 21, 0, tzinfo=tz)


@pytest.fixture
def topic() -> Topic:
    return Topic(name="Cardiology")


@pytest.fixture
def plan(topic: Topic) -> Plan:
    """A plan with two subjects, the first one holding `topic`."""
    return Plan(
        name="Residency",
        subjects=[
            Subject(name="Internal medicine", topics=[topic, Topic(name="Nephrology")]),
            Subject(name="Surgery", topics=[Topic(name="Trauma")]),
        ],
    )


@pytest.fixture
def cards(now: datetime) -> dict[str, Flashcard]:
    """
    Cards around the end-of-day boundary of `now` (21:00 local).
    """
    return {
        "new": Flashcard(question="q-new", answer="a", due_date=now + timedelta(days=30)),
        "due_this_morning": Flashcard(
            question="q-morning",
            answer="a",
            state=CardState.REVIEW,
            interval=3,
            repetitions=2,
            due_date=now.replace(hour=8),
        ),
        "overdue": Flashcard(
            question="q-overdue",
            answer="a",
            state=CardState.REVIEW,
            interval=6,
            repetitions=2,
            due_date=now - timedelta(days=2),
        ),
        "due_tomorrow": Flashcard(
            question="q-tomorrow",
            answer="a",
            state=CardState.REVIEW,
            interval=1,
            repetitions=1,
            due_date=(now + timedelta(days=1)).replace(hour=0, minute=30),
        ),
        "flagged_future": Flashcard(
            question="q-flagged",
            answer="a",
            state=CardState.REVIEW,
            interval=10,
            repetitions=3,
            due_date=now + timedelta(days=10),
            is_error=True,
        ),
    }


@pytest.fixture
def deck_plan(cards: dict[str, Flashcard]) -> Plan:
    """A plan with one deck split in two sub-decks."""
    basics = FlashcardSubDeck(
        name="Basics",
        cards=[cards["new"], cards["due_this_morning"], cards["due_tomorrow"]],
    )
    advanced = FlashcardSubDeck(name="Advanced", cards=[cards["overdue"], cards["flagged_future"]])
    return Plan(
        name="Flashcards",
        flashcard_decks=[FlashcardDeck(name="Pharmacology", sub_decks=[basics, advanced])],
    )


class FakeCollection:
    """In-memory stand-in for a pymongo collection."""

    def __init__(self) -> None:
        self.docs: dict[str, dict] = {}

    def find(self, query: dict) -> Iterator[dict]:
        return iter([copy.deepcopy(doc) for doc in self.docs.values()])

    def replace_one(self, query: dict, doc: dict, upsert: bool = False) -> None:
        key = query["_id"]
        if key in self.docs or upsert:
            self.docs[key] = copy.deepcopy(doc)

    def delete_one(self, query: dict) -> None:
        self.docs.pop(query["_id"], None)


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def local_store(tmp_path: Path) -> LocalPlanStore:
    return LocalPlanStore(tmp_path / "data" / "plans.json")
