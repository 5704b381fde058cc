"""
import_engine.report - Value objects produced by one import run.

Nothing here outlives the request that created it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ValidatedRow:
    row_number: int
    original_data: dict[str, str]
    is_update: bool = False
    existing_id: Optional[str] = None

    @property
    def status(self) -> str:
        return "update" if self.is_update else "new"

    def to_dict(self) -> dict:
        return {
            "row_number": self.row_number,
            "status": self.status,
            "is_update": self.is_update,
            "existing_id": self.existing_id,
            "data": self.original_data,
        }


@dataclass
class ErrorRow(ValidatedRow):
    errors: list[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "error"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["errors"] = self.errors
        return d


@dataclass
class ValidationResult:
    valid_rows: list[ValidatedRow] = field(default_factory=list)
    error_rows: list[ErrorRow] = field(default_factory=list)

    @property
    def new_count(self) -> int:
        return sum(1 for r in self.valid_rows if not r.is_update)

    @property
    def update_count(self) -> int:
        return sum(1 for r in self.valid_rows if r.is_update)

    @property
    def error_count(self) -> int:
        return len(self.error_rows)

    @property
    def total_count(self) -> int:
        return len(self.valid_rows) + len(self.error_rows)

    def counts(self) -> dict:
        return {
            "total": self.total_count,
            "new": self.new_count,
            "update": self.update_count,
            "error": self.error_count,
        }


@dataclass
class FailedRow:
    row_number: int
    error: str
    data: dict[str, str]

    def to_dict(self) -> dict:
        return {"row_number": self.row_number, "error": self.error, "data": self.data}


@dataclass(frozen=True)
class ImportProgress:
    current: int
    total: int


def progress_percent(progress: ImportProgress) -> int:
    if not progress.total:
        return 0
    return round(progress.current / progress.total * 100)


@dataclass
class ImportResult:
    success_count: int = 0
    created_ids: list[str] = field(default_factory=list)
    updated_ids: list[str] = field(default_factory=list)
    failed_rows: list[FailedRow] = field(default_factory=list)
    cancelled: bool = False

    def to_dict(self) -> dict:
        return {
            "success_count": self.success_count,
            "created_ids": self.created_ids,
            "updated_ids": self.updated_ids,
            "created": len(self.created_ids),
            "updated": len(self.updated_ids),
            "failed": len(self.failed_rows),
            "failed_rows": [f.to_dict() for f in self.failed_rows],
            "cancelled": self.cancelled,
        }
