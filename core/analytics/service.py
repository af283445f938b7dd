"""
Service layer to assemble the statistics dashboard of a plan.
"""

from __future__ import annotations

from core.analytics.metrics import (
    compute_accuracy_timeline,
    compute_plan_stats,
    compute_revision_progress,
    compute_subject_performance,
)
from core.analytics.types import StatisticsDashboardData
from core.schemas import Plan


def build_statistics_dashboard(plan: Plan) -> StatisticsDashboardData:
    """
    Build all KPI values and series needed by the statistics page.
    """
    return StatisticsDashboardData(
        stats=compute_plan_stats(plan),
        progress=compute_revision_progress(plan),
        subject_performance=compute_subject_performance(plan),
        accuracy_timeline=compute_accuracy_timeline(plan.study_sessions),
    )
