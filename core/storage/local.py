"""
Local JSON-file plan store.

All plans live in one JSON array. Writes go to a temporary file that
replaces the previous file, so a crash never leaves a half-written store.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Union

from core.exceptions import StorageError
from core.logging import get_logger
from core.schemas import Plan
from core.storage.base import plans_from_documents

logger = get_logger(__name__)


class LocalPlanStore:
    """Plan store backed by a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_documents(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            logger.error("local_store_unreadable", path=str(self.path), error=str(exc))
            return []
        except OSError as exc:
            raise StorageError(
                f"Cannot read plan store {self.path}: {exc}",
                context={"path": str(self.path)},
            ) from exc
        if not isinstance(data, list):
            logger.error("local_store_unreadable", path=str(self.path), error="not a JSON array")
            return []
        return [doc for doc in data if isinstance(doc, dict)]

    def _write_documents(self, docs: list[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(docs, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(
                f"Cannot write plan store {self.path}: {exc}",
                context={"path": str(self.path)},
            ) from exc

    def get_plans(self) -> list[Plan]:
        return plans_from_documents(self._read_documents())

    def save_plan(self, plan: Plan) -> None:
        docs = self._read_documents()
        doc = plan.to_document()
        for i, existing in enumerate(docs):
            if existing.get("id") == plan.id:
                docs[i] = doc
                break
        else:
            docs.append(doc)
        self._write_documents(docs)
        logger.debug("plan_saved", plan_id=plan.id, backend="local")

    def delete_plan(self, plan_id: str) -> None:
        docs = self._read_documents()
        self._write_documents([d for d in docs if d.get("id") != plan_id])
