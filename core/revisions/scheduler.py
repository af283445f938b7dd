"""
Revision Scheduler - fixed-offset topic reviews

Registering a study session schedules one pending revision per requested
offset ("review again in 7, 14, 30 days"). Each revision is later
completed once or deleted. The topic's aggregate counters are kept in
sync with explicit deltas at every history change:

    register  -> += session counts
    complete  -> += revision counts
    delete    -> -= revision counts (completed only), floored at zero

All functions are pure: they return new Topic values and never touch
storage. Callers persist the result.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Tuple

from core import config, date_math
from core.exceptions import RevisionAlreadyCompletedError, RevisionNotFoundError
from core.schemas import Revision, StudySession, Topic


DAY_ZERO_LABEL = "D0"


def revision_label(offset: int) -> str:
    return f"D{offset}"


def normalize_offsets(offsets: Iterable[int]) -> list[int]:
    """Distinct positive offsets in encounter order; everything else is dropped."""
    result: list[int] = []
    for offset in offsets:
        if isinstance(offset, bool) or not isinstance(offset, int):
            continue
        if offset > 0 and offset not in result:
            result.append(offset)
    return result


def is_day_zero(revision: Revision) -> bool:
    return revision.label == DAY_ZERO_LABEL


def register_session(
    topic: Topic,
    total: int,
    correct: int,
    offsets: Iterable[int],
    theory_finished: bool,
    *,
    day_zero: Optional[bool] = None,
    now: Optional[datetime] = None
) -> Tuple[Topic, StudySession]:
    """
    Record a study session on a topic and schedule its follow-up revisions.

    Args:
        topic: Topic being studied
        total: Questions answered in the session
        correct: Questions answered correctly
        offsets: Requested review offsets in days
        theory_finished: New value of the topic's theory flag (overwrites)
        day_zero: Also record the session as a completed "D0" revision
            (defaults to the DAY_ZERO_REVISION setting)
        now: Session timestamp (defaults to now)

    Returns:
        Tuple of (updated_topic, session_entry); the caller appends the
        session entry to the plan history.
    """
    now = date_math.resolve_now(now)
    if day_zero is None:
        day_zero = config.day_zero_revision_enabled()

    session = StudySession(date=now, questions_total=total, questions_correct=correct)

    new_revisions = []
    if day_zero:
        new_revisions.append(Revision(
            label=DAY_ZERO_LABEL,
            scheduled_date=now,
            is_completed=True,
            completed_date=now,
            questions_total=total,
            questions_correct=correct,
        ))

    for offset in normalize_offsets(offsets):
        new_revisions.append(Revision(
            label=revision_label(offset),
            scheduled_date=date_math.add_days(now, offset),
        ))

    updated = topic.model_copy(update={
        "questions_total": topic.questions_total + total,
        "questions_correct": topic.questions_correct + correct,
        "is_theory_completed": theory_finished,
        "revisions": [*topic.revisions, *new_revisions],
    })
    return updated, session


def _find_revision(topic: Topic, revision_id: str) -> Revision:
    for revision in topic.revisions:
        if revision.id == revision_id:
            return revision
    raise RevisionNotFoundError(
        f"Revision {revision_id} not found on topic {topic.id}",
        context={"topic_id": topic.id, "revision_id": revision_id},
    )


def complete_revision(
    topic: Topic,
    revision_id: str,
    total: int,
    correct: int,
    *,
    now: Optional[datetime] = None
) -> Tuple[Topic, StudySession]:
    """
    Mark a pending revision as completed with its own question counts.

    Raises:
        RevisionNotFoundError: If the revision does not exist
        RevisionAlreadyCompletedError: If it was completed before

    Returns:
        Tuple of (updated_topic, session_entry)
    """
    now = date_math.resolve_now(now)
    revision = _find_revision(topic, revision_id)
    if revision.is_completed:
        raise RevisionAlreadyCompletedError(
            f"Revision {revision_id} is already completed",
            context={"topic_id": topic.id, "revision_id": revision_id},
        )

    completed = revision.model_copy(update={
        "is_completed": True,
        "completed_date": now,
        "questions_total": total,
        "questions_correct": correct,
    })
    updated = topic.model_copy(update={
        "questions_total": topic.questions_total + total,
        "questions_correct": topic.questions_correct + correct,
        "revisions": [completed if r.id == revision_id else r for r in topic.revisions],
        "last_revision": now,
    })
    session = StudySession(date=now, questions_total=total, questions_correct=correct)
    return updated, session


def delete_revision(topic: Topic, revision_id: str) -> Topic:
    """
    Remove a revision from a topic.

    A completed revision takes its counts with it; the subtraction is
    floored at zero in case the aggregate and history disagree, and the
    correct count never exceeds the total.

    Raises:
        RevisionNotFoundError: If the revision does not exist
    """
    revision = _find_revision(topic, revision_id)
    remaining = [r for r in topic.revisions if r.id != revision_id]

    if not revision.is_completed:
        return topic.model_copy(update={"revisions": remaining})

    total = max(0, topic.questions_total - (revision.questions_total or 0))
    correct = max(0, topic.questions_correct - (revision.questions_correct or 0))
    correct = min(correct, total)
    return topic.model_copy(update={
        "questions_total": total,
        "questions_correct": correct,
        "revisions": remaining,
    })


def is_topic_finished(topic: Topic) -> bool:
    """
    A topic is finished when it has at least one follow-up revision and
    every revision on it is completed.

    The day-zero record documents the initial session and does not make
    a topic finished on its own.
    """
    follow_ups = [r for r in topic.revisions if not is_day_zero(r)]
    if not follow_ups:
        return False
    return all(r.is_completed for r in topic.revisions)


def topic_accuracy(topic: Topic) -> float:
    if topic.questions_total == 0:
        return 0.0
    return topic.questions_correct / topic.questions_total * 100
