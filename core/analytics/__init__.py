"""
Analytics package exports.
"""

from core.analytics.metrics import (
    accuracy_percent,
    compute_accuracy_timeline,
    compute_plan_stats,
    compute_revision_progress,
    compute_subject_performance,
)
from core.analytics.service import build_statistics_dashboard
from core.analytics.types import PlanStats, RevisionProgress, StatisticsDashboardData

__all__ = [
    "accuracy_percent",
    "compute_accuracy_timeline",
    "compute_plan_stats",
    "compute_revision_progress",
    "compute_subject_performance",
    "build_statistics_dashboard",
    "PlanStats",
    "RevisionProgress",
    "StatisticsDashboardData",
]
