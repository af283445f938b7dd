"""
Reset the progress of a study plan.

DANGEROUS: This deletes the plan's study history!
Subjects, topics, decks and cards are kept; every topic counter,
revision and theory flag is cleared, along with the session log.

Usage:
    python -m scripts.maintenance.reset_plan_progress --plan-id ID [--yes]
    python -m scripts.maintenance.reset_plan_progress --list
"""

from __future__ import annotations

import argparse
import sys

from core import plan_ops
from core.logging import configure_logging, get_logger
from core.storage import get_store

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reset the progress of a study plan.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--plan-id", help="Id of the plan to reset")
    group.add_argument("--list", action="store_true", help="List plans and exit")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    store = get_store()
    plans = {plan.id: plan for plan in store.get_plans()}

    if args.list:
        for plan in plans.values():
            print(f"{plan.id}  {plan.name}")
        return 0

    plan = plans.get(args.plan_id)
    if plan is None:
        print(f"Plan {args.plan_id} not found.")
        return 1

    topics = sum(len(subject.topics) for subject in plan.subjects)
    print("=" * 60)
    print(f"WARNING: Reset progress of '{plan.name}'")
    print("=" * 60)
    print()
    print("This will DELETE:")
    print(f"  - Question counters and revisions of {topics} topic(s)")
    print(f"  - {len(plan.study_sessions)} logged study session(s)")
    print()

    if not args.yes:
        response = input("Are you sure you want to reset? (type 'yes' to confirm): ")
        if response.lower() != "yes":
            print("\nCancelled. No changes made.")
            return 0

    store.save_plan(plan_ops.reset_progress(plan))
    logger.info("progress_reset", plan_id=plan.id)
    print("✓ Progress reset complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
