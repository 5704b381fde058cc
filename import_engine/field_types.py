"""
import_engine.field_types - The closed set of column value types.

Every FieldType member owns three behaviours, looked up from the
tables at the bottom of this module:

  convert(value)         raw CSV string  → typed value (never raises)
  check(value, mapping)  raw CSV string  → error message or None
  to_text(value)         typed value     → CSV string (for exports)

Adding a member without registering all three fails at import time.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Optional


class FieldType(str, Enum):
    STRING  = "string"
    NUMBER  = "number"
    BOOLEAN = "boolean"
    DATE    = "date"
    ARRAY   = "array"
    EMAIL   = "email"
    ENUM    = "enum"

    def convert(self, value: str) -> Any:
        return _CONVERTERS[self](value)

    def check(self, value: str, mapping) -> Optional[str]:
        return _CHECKS[self](value, mapping)

    def to_text(self, value: Any) -> str:
        if value is None:
            return ""
        return _FORMATTERS[self](value)


# ── Literals / patterns ────────────────────────────────────────────────

TRUE_LITERALS    = frozenset({"true", "1", "はい"})
FALSE_LITERALS   = frozenset({"false", "0", "いいえ"})
BOOLEAN_LITERALS = TRUE_LITERALS | FALSE_LITERALS

_NUMBER_RE     = re.compile(r"^[+-]?\d+(\.\d+)?$", re.ASCII)
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)", re.ASCII)
_DATE_RE       = re.compile(r"^(\d{4})([-/])(\d{2})\2(\d{2})$", re.ASCII)
_EMAIL_RE      = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ARRAY_SEP_RE  = re.compile(r"[,，、]")


def parse_date(value: str) -> Optional[date]:
    """YYYY-MM-DD, YYYY/MM/DD or an ISO timestamp → date, else None."""
    value = value.strip()
    m = _DATE_RE.match(value)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(3)), int(m.group(4)))
        except ValueError:
            return None
    if not value.isascii():
        return None
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


# ── Converters ─────────────────────────────────────────────────────────

def _to_number(value: str) -> int:
    # Leading integer part only; anything else becomes 0
    m = _INT_PREFIX_RE.match(value)
    return int(m.group(1)) if m else 0


def _to_boolean(value: str) -> bool:
    return value.strip().lower() in TRUE_LITERALS


def _to_array(value: str) -> list[str]:
    return [item.strip() for item in _ARRAY_SEP_RE.split(value) if item.strip()]


def _passthrough(value: str) -> str:
    return value


def _stripped(value: str) -> str:
    # Same value the email/enum checks saw
    return value.strip()


# ── Checks ─────────────────────────────────────────────────────────────

def _check_none(value: str, mapping) -> Optional[str]:
    return None


def _check_number(value: str, mapping) -> Optional[str]:
    if not _NUMBER_RE.match(value.strip()):
        return f"{mapping.csv_column}は数値で入力してください"
    return None


def _check_date(value: str, mapping) -> Optional[str]:
    if not _DATE_RE.match(value.strip()) or parse_date(value) is None:
        return (f"{mapping.csv_column}の日付形式が正しくありません"
                f"（YYYY-MM-DD または YYYY/MM/DD）")
    return None


def _check_email(value: str, mapping) -> Optional[str]:
    if not _EMAIL_RE.match(value.strip()):
        return f"{mapping.csv_column}のメールアドレス形式が正しくありません"
    return None


def _check_boolean(value: str, mapping) -> Optional[str]:
    if value.strip().lower() not in BOOLEAN_LITERALS:
        return (f"{mapping.csv_column}は true/false/1/0/はい/いいえ "
                f"のいずれかで入力してください")
    return None


def _check_enum(value: str, mapping) -> Optional[str]:
    if value not in mapping.options:
        allowed = "、".join(mapping.options)
        return f"{mapping.csv_column}は次のいずれかを入力してください: {allowed}"
    return None


# ── Formatters ─────────────────────────────────────────────────────────

def _format_boolean(value: Any) -> str:
    return "true" if value else "false"


def _format_date(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)


def _format_array(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


# ── Dispatch tables ────────────────────────────────────────────────────

_CONVERTERS: dict[FieldType, Callable[[str], Any]] = {
    FieldType.STRING:  _passthrough,
    FieldType.NUMBER:  _to_number,
    FieldType.BOOLEAN: _to_boolean,
    FieldType.DATE:    parse_date,
    FieldType.ARRAY:   _to_array,
    FieldType.EMAIL:   _stripped,
    FieldType.ENUM:    _stripped,
}

_CHECKS: dict[FieldType, Callable[[str, Any], Optional[str]]] = {
    FieldType.STRING:  _check_none,
    FieldType.NUMBER:  _check_number,
    FieldType.BOOLEAN: _check_boolean,
    FieldType.DATE:    _check_date,
    FieldType.ARRAY:   _check_none,
    FieldType.EMAIL:   _check_email,
    FieldType.ENUM:    _check_enum,
}

_FORMATTERS: dict[FieldType, Callable[[Any], str]] = {
    FieldType.STRING:  str,
    FieldType.NUMBER:  str,
    FieldType.BOOLEAN: _format_boolean,
    FieldType.DATE:    _format_date,
    FieldType.ARRAY:   _format_array,
    FieldType.EMAIL:   str,
    FieldType.ENUM:    str,
}

for _table in (_CONVERTERS, _CHECKS, _FORMATTERS):
    _missing = set(FieldType) - set(_table)
    if _missing:
        raise RuntimeError(f"FieldType without handler: {sorted(m.value for m in _missing)}")
