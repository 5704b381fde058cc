"""
import_engine.export - Downloadable CSV artifacts.

All output is UTF-8 with a BOM so spreadsheet tools pick the right
encoding.  Every field is quoted and inner quotes are doubled.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable

from import_engine.converter import to_row
from import_engine.encoding import UTF8_BOM
from import_engine.field_map import ImportConfig
from import_engine.report import ErrorRow, FailedRow

REASON_COLUMN = "エラー内容"


def _write(header: list[str], rows: Iterable[list[str]]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(header)
    writer.writerows(rows)
    return UTF8_BOM + buf.getvalue().encode("utf-8")


def template_csv(cfg: ImportConfig) -> bytes:
    """Header of every column plus one sample row."""
    columns = cfg.columns
    return _write(columns, [[cfg.sample_data.get(c, "") for c in columns]])


def error_rows_csv(error_rows: Iterable[ErrorRow], cfg: ImportConfig) -> bytes:
    """Rejected rows as submitted, with their messages in a final column."""
    columns = cfg.columns
    return _write(
        columns + [REASON_COLUMN],
        ([r.original_data.get(c, "") for c in columns] + ["; ".join(r.errors)]
         for r in error_rows),
    )


def failed_rows_csv(failed_rows: Iterable[FailedRow], cfg: ImportConfig) -> bytes:
    """Rows that failed during the write phase, same layout as error_rows_csv."""
    columns = cfg.columns
    return _write(
        columns + [REASON_COLUMN],
        ([r.data.get(c, "") for c in columns] + [r.error] for r in failed_rows),
    )


def records_csv(records: Iterable[dict], cfg: ImportConfig) -> bytes:
    """Stored records flattened back into the import layout."""
    columns = cfg.columns
    rows = []
    for rec in records:
        flat = to_row(rec, cfg.field_mappings)
        rows.append([flat[c] for c in columns])
    return _write(columns, rows)


def filename_for(cfg: ImportConfig, kind: str) -> str:
    return f"{cfg.collection}_{kind}.csv"
