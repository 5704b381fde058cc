"""
db - Document store layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    DocumentStore   → collection/document operations + atomic batches
"""

from db.engine import init_db, get_session          # noqa: F401
from db.models import Base, Document                # noqa: F401
from db.store import (                              # noqa: F401
    DocumentStore,
    WriteBatch,
    StoreError,
    DocumentNotFound,
    BatchLimitError,
)
