"""
import_engine - CSV import pipeline.

Public API:
    read_csv(file_content)                    → [ParsedRow]
    validate_rows(rows, config, existing)     → ValidationResult
    run_import(valid_rows, config, store=…)   → ImportResult
"""

from import_engine.csv_parser import read_csv, CsvFormatError          # noqa: F401
from import_engine.field_map import FieldMapping, ImportConfig        # noqa: F401
from import_engine.field_types import FieldType                       # noqa: F401
from import_engine.importer import run_import                         # noqa: F401
from import_engine.report import ImportResult, ValidationResult       # noqa: F401
from import_engine.validator import validate_rows                     # noqa: F401
