"""
import_engine.importer - Chunked write phase of an import.

Valid rows are written in fixed-size chunks, one atomic batch per
chunk, strictly one chunk after another.  A row that cannot be staged
is recorded and skipped; a chunk whose commit fails has all of its
staged rows moved to failed_rows.  The run then continues with the
next chunk - failures never abort the whole import.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional, Sequence

import config as app_config
from db.store import DocumentStore, WriteBatch
from import_engine.converter import set_nested, to_record
from import_engine.field_map import ImportConfig
from import_engine.report import (
    FailedRow,
    ImportProgress,
    ImportResult,
    ValidatedRow,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ImportProgress], None]


def chunked(rows: Sequence[ValidatedRow], size: int) -> Iterator[Sequence[ValidatedRow]]:
    for start in range(0, len(rows), size):
        yield rows[start:start + size]


def _stage_row(
    batch: WriteBatch,
    store: DocumentStore,
    row: ValidatedRow,
    cfg: ImportConfig,
    collection: str,
    now: str,
) -> str:
    """Stage one create/update and return the document id it targets."""
    record = to_record(row.original_data, cfg.field_mappings)

    identifier = (row.original_data.get(cfg.identifier_column) or "").strip()
    if identifier:
        set_nested(record, cfg.identifier_field.split("."), identifier)

    if cfg.resolve_client_reference:
        ref = cfg.client_reference
        client_id = row.original_data.get(ref.id_key)
        if client_id:
            record[ref.target_field] = client_id

    if row.is_update:
        if not row.existing_id:
            raise ValueError("更新対象のIDがありません")
        record["updatedAt"] = now
        batch.update(collection, row.existing_id, record)
        return row.existing_id

    doc_id = store.new_id()
    record["createdAt"] = now
    record["updatedAt"] = now
    batch.set(collection, doc_id, record)
    return doc_id


def run_import(
    valid_rows: Sequence[ValidatedRow],
    cfg: ImportConfig,
    *,
    store: DocumentStore,
    company_id: str,
    on_progress: Optional[ProgressCallback] = None,
    chunk_size: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> ImportResult:
    """
    Write valid_rows into the entity's collection.

    Parameters
    ----------
    valid_rows  : rows that passed validation, in file order
    cfg         : entity import config
    on_progress : called after every chunk with rows processed so far
    chunk_size  : rows per atomic batch (default config.IMPORT_CHUNK_SIZE)
    cancel      : when set, no further chunk is started

    Returns
    -------
    ImportResult; row and chunk failures are reported, never raised
    """
    size = app_config.IMPORT_CHUNK_SIZE if chunk_size is None else chunk_size
    if size < 1 or size > store.max_batch_ops:
        raise ValueError(
            f"chunk_size must be between 1 and {store.max_batch_ops}, got {size}"
        )

    collection = cfg.collection_path(company_id)
    result = ImportResult()
    total = len(valid_rows)
    processed = 0

    for index, chunk in enumerate(chunked(valid_rows, size), start=1):
        if cancel is not None and cancel.is_set():
            result.cancelled = True
            logger.warning(f"{cfg.entity_name}: import cancelled before chunk {index} "
                           f"({processed}/{total} rows processed)")
            break

        now = datetime.now(timezone.utc).isoformat()
        batch = store.batch()
        staged: list[ValidatedRow] = []
        created: list[str] = []
        updated: list[str] = []

        for row in chunk:
            try:
                doc_id = _stage_row(batch, store, row, cfg, collection, now)
            except Exception as exc:
                result.failed_rows.append(
                    FailedRow(row.row_number, str(exc), row.original_data)
                )
                continue
            staged.append(row)
            (updated if row.is_update else created).append(doc_id)

        try:
            if staged:
                batch.commit()
        except Exception as exc:
            logger.warning(f"{cfg.entity_name}: chunk {index} failed, "
                           f"{len(staged)} rows rolled back: {exc}")
            for row in staged:
                result.failed_rows.append(
                    FailedRow(row.row_number, f"書き込みに失敗しました: {exc}",
                              row.original_data)
                )
        else:
            result.created_ids.extend(created)
            result.updated_ids.extend(updated)
            result.success_count += len(staged)
            logger.info(f"{cfg.entity_name}: chunk {index} committed "
                        f"({len(created)} created, {len(updated)} updated)")

        processed += len(chunk)
        if on_progress is not None:
            on_progress(ImportProgress(current=processed, total=total))

    logger.info(f"{cfg.entity_name}: import finished - {result.success_count} written, "
                f"{len(result.failed_rows)} failed / {total} rows")
    return result
