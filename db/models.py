"""
db.models - SQLAlchemy ORM declarations.

Tables
------
documents  - one row per stored document.  The payload is schemaless
             JSON addressed by (collection, id), which is all the import
             pipeline needs from a document database.  Collection paths
             are company-scoped, e.g. "companies/c1/employees".
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON, Index
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Document(Base):
    __tablename__ = "documents"

    # ── Primary key ────────────────────────────────────────────────────
    collection = Column(String(300), primary_key=True)
    id         = Column(String(64), primary_key=True)

    # ── Payload ────────────────────────────────────────────────────────
    data = Column(JSON, nullable=False, default=dict)

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("ix_documents_collection_created", "collection", "created_at"),
    )
