"""
MongoDB plan store.

One document per plan, keyed by `_id = plan.id`.
"""

from __future__ import annotations

from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from core import config
from core.exceptions import StorageConnectionError, StorageError
from core.logging import get_logger
from core.schemas import Plan
from core.storage.base import plans_from_documents

logger = get_logger(__name__)

# Global connection pool (reused across requests)
_client: Optional[MongoClient] = None
_collection: Optional[Collection] = None


# ---- Connection Management ----

def get_collection() -> Collection:
    """
    Get a connection to the MongoDB plans collection.

    Uses a persistent connection pool that's reused across Streamlit
    reruns to avoid a cold start on every query.

    Returns:
        MongoDB collection object
    """
    global _client, _collection

    if _collection is not None:
        return _collection

    _client = MongoClient(
        config.get_mongo_uri(),
        maxPoolSize=10,
        minPoolSize=1,
        maxIdleTimeMS=60000,
        serverSelectionTimeoutMS=5000,
    )
    _collection = _client[config.get_db_name()][config.get_collection_name()]
    return _collection


def close_connection() -> None:
    global _client, _collection
    if _client is not None:
        _client.close()
    _client = None
    _collection = None


def _wrap(exc: PyMongoError, operation: str, **context: object) -> StorageError:
    if isinstance(exc, (ConnectionFailure, ServerSelectionTimeoutError)):
        return StorageConnectionError(
            f"MongoDB unreachable during {operation}: {exc}",
            context={"operation": operation, **context},
        )
    return StorageError(
        f"MongoDB {operation} failed: {exc}",
        context={"operation": operation, **context},
    )


class MongoPlanStore:
    """Plan store backed by a MongoDB collection."""

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_collection()
        return self._collection

    def get_plans(self) -> list[Plan]:
        try:
            docs = list(self.collection.find({}))
        except PyMongoError as exc:
            raise _wrap(exc, "get_plans") from exc
        return plans_from_documents(docs)

    def save_plan(self, plan: Plan) -> None:
        doc = plan.to_document()
        doc["_id"] = plan.id
        try:
            self.collection.replace_one({"_id": plan.id}, doc, upsert=True)
        except PyMongoError as exc:
            raise _wrap(exc, "save_plan", plan_id=plan.id) from exc
        logger.debug("plan_saved", plan_id=plan.id, backend="mongo")

    def delete_plan(self, plan_id: str) -> None:
        try:
            self.collection.delete_one({"_id": plan_id})
        except PyMongoError as exc:
            raise _wrap(exc, "delete_plan", plan_id=plan_id) from exc
