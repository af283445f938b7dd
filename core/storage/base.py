"""
Storage collaborator contract.

A store loads every plan of the user and upserts one plan at a time,
keyed by plan id. Stored documents use the camelCase JSON shape of
Plan.to_document().
"""

from __future__ import annotations

from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from core.logging import get_logger
from core.schemas import Plan

logger = get_logger(__name__)


class PlanStore(Protocol):
    def get_plans(self) -> list[Plan]:
        ...

    def save_plan(self, plan: Plan) -> None:
        ...

    def delete_plan(self, plan_id: str) -> None:
        ...


def migrate_plan_document(doc: dict) -> dict:
    """
    Fill in collections missing from documents written by older versions.
    """
    migrated = dict(doc)
    migrated.pop("_id", None)
    if migrated.get("studySessions") is None:
        migrated["studySessions"] = []
    if migrated.get("mockExams") is None:
        migrated["mockExams"] = []
    if migrated.get("flashcardDecks") is None:
        migrated["flashcardDecks"] = []
    return migrated


def plans_from_documents(docs) -> list[Plan]:
    """
    Validate stored documents into Plans, skipping unreadable ones.
    """
    plans = []
    for doc in docs:
        try:
            plans.append(Plan.model_validate(migrate_plan_document(doc)))
        except PydanticValidationError as exc:
            logger.warning(
                "plan_document_invalid",
                plan_id=doc.get("id") or doc.get("_id"),
                errors=exc.error_count(),
            )
    return plans
