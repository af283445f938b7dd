"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

import pandas as pd

from core import config
from core.revisions import is_topic_finished
from core.schemas import Plan, StudySession


TOPIC_COLUMNS = [
    "subject_id",
    "subject_name",
    "topic_id",
    "questions_total",
    "questions_correct",
    "theory_completed",
    "completed_revisions",
    "pending_revisions",
    "finished",
]
SESSION_COLUMNS = ["date", "questions_total", "questions_correct"]


def load_topics_df(plan: Plan) -> pd.DataFrame:
    """
    One row per topic with its counters and revision tallies.
    """
    rows = []
    for subject in plan.subjects:
        for topic in subject.topics:
            completed = sum(1 for r in topic.revisions if r.is_completed)
            rows.append({
                "subject_id": subject.id,
                "subject_name": subject.name,
                "topic_id": topic.id,
                "questions_total": topic.questions_total,
                "questions_correct": topic.questions_correct,
                "theory_completed": bool(topic.is_theory_completed),
                "completed_revisions": completed,
                "pending_revisions": len(topic.revisions) - completed,
                "finished": is_topic_finished(topic),
            })
    if not rows:
        return pd.DataFrame(columns=TOPIC_COLUMNS)
    return pd.DataFrame(rows, columns=TOPIC_COLUMNS)


def load_sessions_df(sessions: list[StudySession]) -> pd.DataFrame:
    """
    Study sessions in chronological order, dates in the study time zone.
    """
    if not sessions:
        return pd.DataFrame(columns=SESSION_COLUMNS)

    df = pd.DataFrame(
        [
            {
                "date": s.date,
                "questions_total": s.questions_total,
                "questions_correct": s.questions_correct,
            }
            for s in sessions
        ],
        columns=SESSION_COLUMNS,
    )
    df["date"] = pd.to_datetime(df["date"], utc=True).dt.tz_convert(config.get_timezone().key)
    df = df.sort_values("date", kind="stable").reset_index(drop=True)
    return df
