"""Tests for the statistics dashboard computations."""

from datetime import datetime, timedelta

import pytest

from core import plan_ops, revisions
from core.analytics import (
    accuracy_percent,
    build_statistics_dashboard,
    compute_accuracy_timeline,
    compute_plan_stats,
    compute_revision_progress,
    compute_subject_performance,
)
from core.schemas import MockExam, Plan, StudySession, Subject, Topic


class TestPlanStats:
    """Tests for plan-level totals."""

    def test_no_questions_means_zero_accuracy(self, plan: Plan) -> None:
        """Accuracy is exactly 0 without questions."""
        stats = compute_plan_stats(plan)
        assert stats.accuracy == 0
        assert (stats.total_subjects, stats.total_topics, stats.total_questions) == (2, 3, 0)

    def test_empty_plan(self) -> None:
        """A plan without subjects has zero everything."""
        stats = compute_plan_stats(Plan(name="Empty"))
        assert (stats.total_topics, stats.total_questions, stats.accuracy) == (0, 0, 0.0)

    def test_mock_exams_included(self) -> None:
        """Mock exams count toward the plan totals."""
        plan = Plan(
            name="Exams",
            subjects=[Subject(name="S", topics=[Topic(name="T", questions_total=10, questions_correct=5)])],
            mock_exams=[MockExam(institution="USP", year=2023, questions_total=90, questions_correct=75)],
        )
        stats = compute_plan_stats(plan)
        assert (stats.total_questions, stats.total_correct) == (100, 80)
        assert stats.accuracy == pytest.approx(80.0)

    def test_accuracy_percent(self) -> None:
        """The helper never divides by zero."""
        assert accuracy_percent(0, 0) == 0.0
        assert accuracy_percent(3, 4) == 75.0


class TestSubjectPerformance:
    """Tests for per-subject accuracy ranking."""

    def test_sorted_descending_with_stable_ties(self) -> None:
        """Best subject first; equal accuracies keep plan order."""
        plan = Plan(
            name="Ranking",
            subjects=[
                Subject(name="A", topics=[Topic(name="a", questions_total=2, questions_correct=1)]),
                Subject(name="B", topics=[Topic(name="b")]),
                Subject(name="C", topics=[
                    Topic(name="c1", questions_total=2, questions_correct=2),
                    Topic(name="c2", questions_total=2, questions_correct=0),
                ]),
                Subject(name="D", topics=[Topic(name="d", questions_total=4, questions_correct=4)]),
            ],
        )
        df = compute_subject_performance(plan)
        assert list(df["name"]) == ["D", "A", "C", "B"]
        assert list(df["accuracy"]) == [100.0, 50.0, 50.0, 0.0]
        assert list(df["total"]) == [4, 2, 4, 0]

    def test_empty(self) -> None:
        """No subjects gives an empty frame with the expected columns."""
        df = compute_subject_performance(Plan(name="Empty"))
        assert df.empty
        assert list(df.columns) == ["subject_id", "name", "correct", "total", "accuracy"]


class TestAccuracyTimeline:
    """Tests for the cumulative accuracy series."""

    def test_cumulative_in_date_order(self, now: datetime) -> None:
        """Each point is the running ratio, sessions sorted by date."""
        sessions = [
            StudySession(date=now, questions_total=10, questions_correct=7),
            StudySession(date=now - timedelta(days=2), questions_total=0, questions_correct=0),
            StudySession(date=now + timedelta(days=1), questions_total=10, questions_correct=3),
        ]
        df = compute_accuracy_timeline(sessions)
        assert list(df["total"]) == [0, 10, 20]
        assert list(df["correct"]) == [0, 7, 10]
        assert list(df["accuracy"]) == pytest.approx([0.0, 70.0, 50.0])
        assert df["date"].is_monotonic_increasing

    def test_dates_in_study_time_zone(self, now: datetime) -> None:
        """Dates are expressed in the configured zone."""
        df = compute_accuracy_timeline([StudySession(date=now, questions_total=1, questions_correct=1)])
        assert str(df["date"].dt.tz) == "Europe/Amsterdam"
        assert df["date"].iloc[0].hour == 21

    def test_no_sessions(self) -> None:
        """No sessions gives an empty series."""
        assert compute_accuracy_timeline([]).empty


class TestRevisionProgress:
    """Tests for revision and theory progress."""

    def test_counts(self, plan: Plan, now: datetime) -> None:
        """Completed and pending instances, finished topics and theory share."""
        subject = plan.subjects[0]
        topic, _ = revisions.register_session(subject.topics[0], 5, 5, [7, 14], True, now=now)
        topic, _ = revisions.complete_revision(topic, topic.revisions[0].id, 2, 2, now=now)
        plan = plan_ops.replace_topic(plan, subject.id, topic)

        progress = compute_revision_progress(plan)
        assert (progress.completed_revisions, progress.pending_revisions) == (1, 1)
        assert progress.finished_topics == 0
        assert progress.theory_completed == 1
        assert progress.theory_percentage == pytest.approx(100 / 3)

    def test_dashboard(self, plan: Plan, now: datetime) -> None:
        """The dashboard bundles every metric of the plan."""
        subject = plan.subjects[0]
        topic, session = revisions.register_session(subject.topics[0], 10, 7, [7], True, now=now)
        plan = plan_ops.append_session(plan_ops.replace_topic(plan, subject.id, topic), session)

        dashboard = build_statistics_dashboard(plan)
        assert dashboard.stats.accuracy == pytest.approx(70.0)
        assert dashboard.progress.pending_revisions == 1
        assert list(dashboard.subject_performance["name"]) == ["Internal medicine", "Surgery"]
        assert list(dashboard.accuracy_timeline["accuracy"]) == pytest.approx([70.0])
