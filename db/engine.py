"""
db.engine - Engine and session factory behind the document store.

init_db() may be called again with another URL (tests do this per
case); the previous engine is disposed first.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

logger = logging.getLogger(__name__)

_engine = None
_SessionLocal: sessionmaker | None = None


def _configure_sqlite(engine) -> None:
    @event.listens_for(engine, "connect")
    def _pragmas(dbapi_conn, _rec):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA journal_mode=WAL")
        cur.execute("PRAGMA synchronous=NORMAL")
        cur.execute("PRAGMA busy_timeout=5000")    # chunk commits may overlap a scan
        cur.close()


def init_db(db_url: str) -> None:
    """Bind the session factory to db_url and create the documents table."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(db_url, echo=False)
    if db_url.startswith("sqlite"):
        _configure_sqlite(_engine)

    Base.metadata.create_all(_engine)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.debug(f"Document store bound to {_engine.url!r}")


def get_session() -> Session:
    """New session; the document store closes it after each call."""
    if _SessionLocal is None:
        raise RuntimeError("Document store not initialised - call init_db() first")
    return _SessionLocal()
