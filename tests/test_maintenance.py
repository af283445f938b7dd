"""Tests for the reset-progress maintenance script."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from core import revisions
from core.plan_ops import replace_topic
from core.schemas import Plan
from core.storage import LocalPlanStore
from scripts.maintenance import reset_plan_progress


@pytest.fixture
def store_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "plans.json"
    monkeypatch.setenv("LOCAL_STORE_PATH", str(path))
    monkeypatch.setattr(reset_plan_progress, "configure_logging", lambda **kwargs: None)
    return path


@pytest.fixture
def studied_plan(plan: Plan, now: datetime, store_path: Path) -> Plan:
    subject = plan.subjects[0]
    topic, _ = revisions.register_session(subject.topics[0], 10, 7, [7], True, now=now)
    studied = replace_topic(plan, subject.id, topic)
    LocalPlanStore(store_path).save_plan(studied)
    return studied


class TestResetPlanProgress:
    """Tests for the command-line entry point."""

    def test_reset_with_yes(self, studied_plan: Plan, store_path: Path) -> None:
        """--yes skips the prompt and clears the stored progress."""
        assert reset_plan_progress.main(["--plan-id", studied_plan.id, "--yes"]) == 0

        stored = LocalPlanStore(store_path).get_plans()[0]
        topic = stored.subjects[0].topics[0]
        assert topic.questions_total == 0
        assert topic.revisions == []
        assert [s.name for s in stored.subjects] == [s.name for s in studied_plan.subjects]

    def test_cancelled_prompt(
        self, studied_plan: Plan, store_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Anything but 'yes' leaves the plan untouched."""
        monkeypatch.setattr("builtins.input", lambda prompt: "no")
        assert reset_plan_progress.main(["--plan-id", studied_plan.id]) == 0
        assert LocalPlanStore(store_path).get_plans()[0].subjects[0].topics[0].questions_total == 10

    def test_unknown_plan(self, studied_plan: Plan, capsys: pytest.CaptureFixture[str]) -> None:
        """An unknown id exits with status 1."""
        assert reset_plan_progress.main(["--plan-id", "missing", "--yes"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_list(self, studied_plan: Plan, capsys: pytest.CaptureFixture[str]) -> None:
        """--list prints every plan id and name."""
        assert reset_plan_progress.main(["--list"]) == 0
        assert f"{studied_plan.id}  {studied_plan.name}" in capsys.readouterr().out
