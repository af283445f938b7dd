"""
Revision board listings for display.

Groups a plan's revisions the way the revisions page shows them:
scheduled (pending, soonest first), completed (newest first) and
finished topics. Also groups revisions by calendar day.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Optional

from core import date_math
from core.revisions import is_topic_finished, topic_accuracy
from core.schemas import Plan, Revision, Subject, Topic


RevisionStatus = Literal["completed", "late", "today", "future"]


@dataclass(frozen=True)
class BoardEntry:
    subject: Subject
    topic: Topic
    revision: Revision
    status: RevisionStatus


@dataclass(frozen=True)
class FinishedTopic:
    subject: Subject
    topic: Topic
    accuracy: float


@dataclass(frozen=True)
class RevisionBoard:
    scheduled: list[BoardEntry] = field(default_factory=list)
    completed: list[BoardEntry] = field(default_factory=list)
    finished: list[FinishedTopic] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarEntry:
    subject_name: str
    topic_name: str
    label: str
    is_completed: bool


def classify_revision(revision: Revision, today: datetime) -> RevisionStatus:
    """
    Display status of a revision relative to today (calendar days).
    """
    if revision.is_completed:
        return "completed"
    delta = date_math.days_between(today, revision.scheduled_date)
    if delta < 0:
        return "late"
    if delta == 0:
        return "today"
    return "future"


def build_revision_board(plan: Plan, today: Optional[datetime] = None) -> RevisionBoard:
    today = date_math.resolve_now(today)
    scheduled: list[BoardEntry] = []
    completed: list[BoardEntry] = []
    finished: list[FinishedTopic] = []

    for subject in plan.subjects:
        for topic in subject.topics:
            for revision in topic.revisions:
                entry = BoardEntry(
                    subject=subject,
                    topic=topic,
                    revision=revision,
                    status=classify_revision(revision, today),
                )
                if revision.is_completed:
                    completed.append(entry)
                else:
                    scheduled.append(entry)

            if is_topic_finished(topic):
                finished.append(FinishedTopic(subject=subject, topic=topic, accuracy=topic_accuracy(topic)))

    scheduled.sort(key=lambda e: date_math.to_local(e.revision.scheduled_date))
    completed.sort(
        key=lambda e: date_math.to_local(e.revision.completed_date or e.revision.scheduled_date),
        reverse=True,
    )
    return RevisionBoard(scheduled=scheduled, completed=completed, finished=finished)


def revisions_by_day(plan: Plan) -> dict[date, list[CalendarEntry]]:
    """Every revision keyed by the local day it is scheduled for."""
    days: dict[date, list[CalendarEntry]] = defaultdict(list)
    for subject in plan.subjects:
        for topic in subject.topics:
            for revision in topic.revisions:
                day = date_math.to_local(revision.scheduled_date).date()
                days[day].append(CalendarEntry(
                    subject_name=subject.name,
                    topic_name=topic.name,
                    label=revision.label,
                    is_completed=revision.is_completed,
                ))
    return dict(days)
