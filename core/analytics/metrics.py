"""
Metric computations for the statistics dashboard.

All functions are read-only over a Plan.
"""

from __future__ import annotations

import pandas as pd

from core.analytics.queries import load_sessions_df, load_topics_df
from core.analytics.types import PlanStats, RevisionProgress
from core.schemas import Plan, StudySession


def accuracy_percent(correct: int, total: int) -> float:
    """Correct / total as a percentage; 0 when total is 0."""
    if total <= 0:
        return 0.0
    return correct / total * 100


def compute_plan_stats(plan: Plan) -> PlanStats:
    """
    Plan-level totals over every topic plus every mock exam.
    """
    topics_df = load_topics_df(plan)
    total_questions = int(topics_df["questions_total"].sum()) if not topics_df.empty else 0
    total_correct = int(topics_df["questions_correct"].sum()) if not topics_df.empty else 0

    for exam in plan.mock_exams:
        total_questions += exam.questions_total
        total_correct += exam.questions_correct

    return PlanStats(
        total_subjects=len(plan.subjects),
        total_topics=len(topics_df),
        total_questions=total_questions,
        total_correct=total_correct,
        accuracy=accuracy_percent(total_correct, total_questions),
    )


def compute_subject_performance(plan: Plan) -> pd.DataFrame:
    """
    Accuracy per subject, best first. Ties keep plan order.

    Subjects without questions appear with accuracy 0.
    """
    rows = []
    for subject in plan.subjects:
        total = sum(t.questions_total for t in subject.topics)
        correct = sum(t.questions_correct for t in subject.topics)
        rows.append({
            "subject_id": subject.id,
            "name": subject.name,
            "correct": correct,
            "total": total,
            "accuracy": accuracy_percent(correct, total),
        })

    columns = ["subject_id", "name", "correct", "total", "accuracy"]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values("accuracy", ascending=False, kind="stable").reset_index(drop=True)


def compute_accuracy_timeline(sessions: list[StudySession]) -> pd.DataFrame:
    """
    Cumulative accuracy after each study session, oldest first.

    Each row is one session; `accuracy` is the running correct/total ratio
    up to and including that session, not the session's own accuracy.
    """
    df = load_sessions_df(sessions)
    if df.empty:
        return pd.DataFrame(columns=["date", "total", "correct", "accuracy"])

    cumulative_total = df["questions_total"].astype("int64").cumsum()
    cumulative_correct = df["questions_correct"].astype("int64").cumsum()
    accuracy = (cumulative_correct / cumulative_total * 100).where(cumulative_total > 0, 0.0)

    return pd.DataFrame({
        "date": df["date"],
        "total": cumulative_total,
        "correct": cumulative_correct,
        "accuracy": accuracy.astype("float64"),
    })


def compute_revision_progress(plan: Plan) -> RevisionProgress:
    topics_df = load_topics_df(plan)
    if topics_df.empty:
        return RevisionProgress(
            completed_revisions=0,
            pending_revisions=0,
            finished_topics=0,
            theory_completed=0,
            theory_percentage=0.0,
        )

    theory_completed = int(topics_df["theory_completed"].sum())
    return RevisionProgress(
        completed_revisions=int(topics_df["completed_revisions"].sum()),
        pending_revisions=int(topics_df["pending_revisions"].sum()),
        finished_topics=int(topics_df["finished"].sum()),
        theory_completed=theory_completed,
        theory_percentage=theory_completed / len(topics_df) * 100,
    )
