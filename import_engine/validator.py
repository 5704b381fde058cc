"""
import_engine.validator - Per-row checks and valid/error partitioning.

A row with any error is rejected as a whole; there is no partial
acceptance of the columns that did pass.
"""

from __future__ import annotations

from typing import Iterable

from import_engine.csv_parser import ParsedRow
from import_engine.field_map import FieldMapping, ImportConfig
from import_engine.report import ErrorRow, ValidatedRow, ValidationResult
from import_engine.resolver import resolve_existing


def validate_row(row: dict[str, str], mappings: Iterable[FieldMapping]) -> list[str]:
    """Return every violation in the row, in mapping order."""
    errors: list[str] = []
    for m in mappings:
        value = (row.get(m.csv_column) or "").strip()
        if not value:
            if m.required:
                errors.append(f"{m.csv_column}は必須です")
            continue
        msg = m.type.check(value, m)
        if msg:
            errors.append(msg)
    return errors


def validate_rows(
    rows: list[ParsedRow],
    config: ImportConfig,
    existing: dict[str, str],
) -> ValidationResult:
    """Validate and classify each row as new / update / error."""
    result = ValidationResult()
    for row in rows:
        is_update, existing_id = resolve_existing(
            row.data, config.identifier_column, existing
        )
        errors = validate_row(row.data, config.field_mappings)
        if errors:
            result.error_rows.append(ErrorRow(
                row_number=row.row_number,
                original_data=row.data,
                is_update=is_update,
                existing_id=existing_id,
                errors=errors,
            ))
        else:
            result.valid_rows.append(ValidatedRow(
                row_number=row.row_number,
                original_data=row.data,
                is_update=is_update,
                existing_id=existing_id,
            ))
    return result
