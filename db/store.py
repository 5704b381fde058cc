"""
db.store - Document-store facade over the documents table.

Exposes the small surface the import pipeline depends on:
query / get / set / update / delete, plus WriteBatch for staging
several writes and committing them in one transaction.

Each public call opens and closes its own session, so the store is
safe to share between request handlers.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import config
from db.engine import get_session
from db.models import Document

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the store cannot complete an operation."""
    pass


class DocumentNotFound(StoreError):
    """Raised when updating a document that does not exist."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"No document {doc_id!r} in {collection!r}")
        self.collection = collection
        self.doc_id = doc_id


class BatchLimitError(StoreError):
    """Raised when a batch would exceed the per-transaction ceiling."""
    pass


def to_jsonable(value: Any) -> Any:
    """Dates become ISO strings; containers are converted recursively."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def merge_fields(base: dict, patch: dict) -> dict:
    """Return base with patch merged in; nested maps merge instead of replacing."""
    merged = dict(base)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_fields(merged[key], value)
        else:
            merged[key] = value
    return merged


class WriteBatch:
    """
    Staged writes applied atomically by commit().

    Staging never touches the database; a failed commit leaves
    nothing behind.
    """

    def __init__(self, store: "DocumentStore", max_ops: int):
        self._store = store
        self._max_ops = max_ops
        self._ops: list[tuple[str, str, str, Optional[dict]]] = []
        self._committed = False

    def __len__(self) -> int:
        return len(self._ops)

    def _stage(self, op: str, collection: str, doc_id: str, fields: Optional[dict]):
        if self._committed:
            raise StoreError("Batch already committed")
        if len(self._ops) >= self._max_ops:
            raise BatchLimitError(
                f"Batch limit of {self._max_ops} operations reached"
            )
        self._ops.append((op, collection, doc_id, fields))

    def set(self, collection: str, doc_id: str, fields: dict) -> None:
        self._stage("set", collection, doc_id, to_jsonable(fields))

    def update(self, collection: str, doc_id: str, fields: dict) -> None:
        self._stage("update", collection, doc_id, to_jsonable(fields))

    def delete(self, collection: str, doc_id: str) -> None:
        self._stage("delete", collection, doc_id, None)

    def commit(self) -> None:
        if self._committed:
            raise StoreError("Batch already committed")
        self._committed = True
        self._store._apply(self._ops)


class DocumentStore:
    """Collection/document operations backed by SQLAlchemy."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = get_session,
        max_batch_ops: int = config.MAX_BATCH_OPS,
    ):
        self._session_factory = session_factory
        self.max_batch_ops = max_batch_ops

    # ── Reads ──────────────────────────────────────────────────────────

    def query(
        self,
        collection: str,
        filters: Optional[dict] = None,
    ) -> list[tuple[str, dict]]:
        """
        Return [(id, fields), …] for a collection, oldest first.
        filters is an equality match on top-level fields.
        """
        session = self._open()
        try:
            rows = (
                session.query(Document)
                .filter(Document.collection == collection)
                .order_by(Document.created_at, Document.id)
                .all()
            )
        except SQLAlchemyError as exc:
            raise StoreError(f"Query on {collection!r} failed: {exc}") from exc
        finally:
            session.close()

        result = []
        for doc in rows:
            data = doc.data or {}
            if filters and any(data.get(k) != v for k, v in filters.items()):
                continue
            result.append((doc.id, data))
        return result

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        session = self._open()
        try:
            doc = session.get(Document, (collection, doc_id))
            return dict(doc.data or {}) if doc else None
        except SQLAlchemyError as exc:
            raise StoreError(f"Read of {collection}/{doc_id} failed: {exc}") from exc
        finally:
            session.close()

    # ── Writes ─────────────────────────────────────────────────────────

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    def batch(self) -> WriteBatch:
        return WriteBatch(self, self.max_batch_ops)

    def set(self, collection: str, doc_id: str, fields: dict) -> None:
        b = self.batch()
        b.set(collection, doc_id, fields)
        b.commit()

    def update(self, collection: str, doc_id: str, fields: dict) -> None:
        b = self.batch()
        b.update(collection, doc_id, fields)
        b.commit()

    def delete(self, collection: str, doc_id: str) -> None:
        b = self.batch()
        b.delete(collection, doc_id)
        b.commit()

    # ── Private helpers ────────────────────────────────────────────────

    def _open(self) -> Session:
        try:
            return self._session_factory()
        except RuntimeError as exc:
            raise StoreError(str(exc)) from exc

    def _apply(self, ops: Iterable[tuple[str, str, str, Optional[dict]]]) -> None:
        """Apply staged operations in a single transaction."""
        session = self._open()
        try:
            now = datetime.now(timezone.utc)
            for op, collection, doc_id, fields in ops:
                doc = session.get(Document, (collection, doc_id))
                if op == "set":
                    if doc is None:
                        session.add(Document(collection=collection, id=doc_id,
                                             data=fields, created_at=now,
                                             updated_at=now))
                    else:
                        doc.data = fields
                        doc.updated_at = now
                elif op == "update":
                    if doc is None:
                        raise DocumentNotFound(collection, doc_id)
                    doc.data = merge_fields(dict(doc.data or {}), fields)
                    doc.updated_at = now
                elif op == "delete":
                    if doc is not None:
                        session.delete(doc)
                session.flush()
            session.commit()
        except StoreError:
            session.rollback()
            raise
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error(f"Batch commit failed: {exc}")
            raise StoreError(f"Commit failed: {exc}") from exc
        finally:
            session.close()
