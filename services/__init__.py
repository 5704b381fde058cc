"""
services - Workflow layer sitting between API/CLI and the import engine.
"""

from services.import_service import (                # noqa: F401
    ImportSession,
    ImportStateError,
    ImportSummary,
    export_records,
)
