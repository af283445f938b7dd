"""
Plan storage backends.

Quick start:
    from core import storage

    store = storage.get_store()
    plans = store.get_plans()
    store.save_plan(plan)
"""

from core import config
from core.storage.base import PlanStore, migrate_plan_document, plans_from_documents
from core.storage.local import LocalPlanStore
from core.storage.mongo import MongoPlanStore


def get_store() -> PlanStore:
    """Build the store selected by STORAGE_BACKEND."""
    if config.get_storage_backend() == "mongo":
        return MongoPlanStore()
    return LocalPlanStore(config.get_local_store_path())


__all__ = [
    "PlanStore",
    "LocalPlanStore",
    "MongoPlanStore",
    "get_store",
    "migrate_plan_document",
    "plans_from_documents",
]
