"""
Types for statistics dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class PlanStats:
    """
    Plan-level totals; accuracy is a percentage (0 when nothing was answered).
    """
    total_subjects: int
    total_topics: int
    total_questions: int
    total_correct: int
    accuracy: float


@dataclass(frozen=True)
class RevisionProgress:
    completed_revisions: int
    pending_revisions: int
    finished_topics: int
    theory_completed: int
    theory_percentage: float


@dataclass(frozen=True)
class StatisticsDashboardData:
    """
    Precomputed metrics and series for the statistics page.
    """
    stats: PlanStats
    progress: RevisionProgress
    subject_performance: pd.DataFrame
    accuracy_timeline: pd.DataFrame
