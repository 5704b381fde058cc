"""
services.import_service - One CSV import, from upload to summary.

ImportSession walks the steps

    upload → preview → importing → complete
                  ↘ error

and keeps the parsed/validated state between them.  The session owns
its identifier lookup; nothing is shared between sessions.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field
from typing import Optional

import config
from db.store import DocumentStore
from import_engine.csv_parser import ParsedRow, read_csv
from import_engine.export import error_rows_csv, records_csv
from import_engine.field_map import ImportConfig
from import_engine.importer import ProgressCallback, run_import
from import_engine.report import ErrorRow, ImportResult, ValidationResult
from import_engine.resolver import (
    fetch_clients_map,
    fetch_existing_identifiers,
    resolve_client_references,
)
from import_engine.validator import validate_rows

logger = logging.getLogger(__name__)

UPLOAD, PREVIEW, IMPORTING, COMPLETE, ERROR = (
    "upload", "preview", "importing", "complete", "error",
)


class ImportStateError(Exception):
    """Raised when a step is invoked out of order or has nothing to do."""
    pass


@dataclass
class ImportSummary:
    result: ImportResult
    skipped_count: int = 0
    error_rows: list[ErrorRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = self.result.to_dict()
        d["skipped"] = self.skipped_count
        d["error_rows"] = [r.to_dict() for r in self.error_rows]
        return d


class ImportSession:

    def __init__(self, cfg: ImportConfig, company_id: str, store: DocumentStore):
        self.config = cfg
        self.company_id = company_id
        self.store = store
        self.reset()

    def reset(self) -> None:
        self.step = UPLOAD
        self.rows: list[ParsedRow] = []
        self.validation: Optional[ValidationResult] = None
        self.summary: Optional[ImportSummary] = None
        self.error: Optional[str] = None

    def cancel(self) -> None:
        """Abort before the write phase; parsed state is discarded."""
        self.reset()

    # ── Step 1: upload → preview ───────────────────────────────────────

    def load_file(self, content: str | bytes) -> ValidationResult:
        """
        Parse, resolve and validate an uploaded file.
        File-level and store errors put the session in the error step
        and propagate.
        """
        self.reset()
        try:
            rows = read_csv(content)
            existing = fetch_existing_identifiers(self.store, self.config, self.company_id)
            if self.config.resolve_client_reference:
                clients = fetch_clients_map(self.store, self.config, self.company_id)
                resolve_client_references(rows, self.config.client_reference, clients)
            validation = validate_rows(rows, self.config, existing)
        except Exception as exc:
            self.step = ERROR
            self.error = str(exc)
            raise

        self.rows = rows
        self.validation = validation
        self.step = PREVIEW
        logger.info(f"{self.config.entity_name}: {validation.total_count} rows "
                    f"({validation.new_count} new, {validation.update_count} update, "
                    f"{validation.error_count} error)")
        return validation

    def preview(self, page: int = 1, only_errors: bool = False,
                page_size: int = config.PREVIEW_PAGE_SIZE) -> dict:
        """One page of rows in file order, tagged new / update / error."""
        v = self._require_validation()
        rows = list(v.error_rows) if only_errors else [*v.valid_rows, *v.error_rows]
        rows.sort(key=lambda r: r.row_number)

        pages = max(1, math.ceil(len(rows) / page_size))
        page = min(max(1, page), pages)
        start = (page - 1) * page_size
        return {
            "counts": v.counts(),
            "page": page,
            "pages": pages,
            "rows": [r.to_dict() for r in rows[start:start + page_size]],
        }

    def error_csv(self) -> bytes:
        return error_rows_csv(self._require_validation().error_rows, self.config)

    # ── Step 2: preview → complete ─────────────────────────────────────

    def execute(
        self,
        on_progress: Optional[ProgressCallback] = None,
        cancel: Optional[threading.Event] = None,
        chunk_size: Optional[int] = None,
    ) -> ImportSummary:
        """Write the valid rows; error rows are always skipped."""
        v = self._require_validation()
        if not v.valid_rows:
            raise ImportStateError("インポートするデータがありません")

        self.step = IMPORTING
        try:
            result = run_import(
                v.valid_rows, self.config,
                store=self.store, company_id=self.company_id,
                on_progress=on_progress, chunk_size=chunk_size, cancel=cancel,
            )
        except Exception as exc:
            self.step = ERROR
            self.error = str(exc)
            raise

        self.summary = ImportSummary(
            result=result,
            skipped_count=v.error_count,
            error_rows=list(v.error_rows),
        )
        self.step = COMPLETE
        return self.summary

    # ── Private helpers ────────────────────────────────────────────────

    def _require_validation(self) -> ValidationResult:
        if self.validation is None:
            raise ImportStateError("CSVファイルが読み込まれていません")
        return self.validation


def export_records(store: DocumentStore, cfg: ImportConfig, company_id: str) -> bytes:
    """All stored records of one entity as a CSV in the import layout."""
    docs = store.query(cfg.collection_path(company_id))
    return records_csv((fields for _id, fields in docs), cfg)
