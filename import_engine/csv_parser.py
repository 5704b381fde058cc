"""
import_engine.csv_parser - CSV text → rows of fields → ParsedRow records.

Responsibilities:
  • Line-ending normalisation (CRLF / CR → LF)
  • Quote handling: "" inside quotes is a literal quote; commas and
    newlines inside quotes belong to the field
  • Whitespace trimming of closed fields (quoted content is kept as-is
    unless TRIM_QUOTED is on)
  • Header zipping, blank-line skipping and physical row numbering
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import config
from import_engine.encoding import decode


class CsvFormatError(Exception):
    """Raised when the file cannot be read as header + data rows."""
    pass


@dataclass
class ParsedRow:
    row_number: int                       # header is row 1
    data: dict[str, str] = field(default_factory=dict)


def _finish_field(
    chars: list[str],
    q_start: Optional[int],
    q_end: Optional[int],
    trim_quoted: bool,
) -> str:
    """Join a field buffer, trimming only what lies outside the quotes."""
    value = "".join(chars)
    if q_start is None or trim_quoted:
        return value.strip()
    end = q_end if q_end is not None and q_end >= q_start else len(value)
    return value[:q_start].lstrip() + value[q_start:end] + value[end:].rstrip()


def tokenize(text: str, *, trim_quoted: Optional[bool] = None) -> list[list[str]]:
    """Split CSV text into rows of fields in a single left-to-right pass."""
    if trim_quoted is None:
        trim_quoted = config.TRIM_QUOTED
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    rows: list[list[str]] = []
    row: list[str] = []
    chars: list[str] = []
    in_quotes = False
    q_start: Optional[int] = None         # buffer offset of first opening quote
    q_end: Optional[int] = None           # buffer offset of last closing quote

    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            if not in_quotes:
                in_quotes = True
                if q_start is None:
                    q_start = len(chars)
            elif i + 1 < n and text[i + 1] == '"':
                chars.append('"')
                i += 1
            else:
                in_quotes = False
                q_end = len(chars)
        elif ch == "," and not in_quotes:
            row.append(_finish_field(chars, q_start, q_end, trim_quoted))
            chars, q_start, q_end = [], None, None
        elif ch == "\n" and not in_quotes:
            row.append(_finish_field(chars, q_start, q_end, trim_quoted))
            rows.append(row)
            row, chars, q_start, q_end = [], [], None, None
        else:
            chars.append(ch)
        i += 1

    # Flush the last row unless the input ended on a line break
    if chars or row or q_start is not None:
        row.append(_finish_field(chars, q_start, q_end, trim_quoted))
        rows.append(row)
    return rows


def is_blank_row(fields: list[str]) -> bool:
    return len(fields) == 1 and fields[0] == ""


def parse_rows(text: str, *, trim_quoted: Optional[bool] = None) -> list[ParsedRow]:
    """
    Tokenize text and zip every data row against the header.

    Row numbers follow tokenized-row position, so skipped blank
    lines still consume a number.  Raises CsvFormatError when there
    is no header + data.
    """
    rows = tokenize(text, trim_quoted=trim_quoted)
    if len(rows) < 2:
        raise CsvFormatError("CSVファイルにはヘッダー行とデータ行が必要です")

    header = rows[0]
    parsed: list[ParsedRow] = []
    for row_number, fields in enumerate(rows[1:], start=2):
        if is_blank_row(fields):
            continue
        data = {
            col: (fields[idx] if idx < len(fields) else "")
            for idx, col in enumerate(header)
        }
        parsed.append(ParsedRow(row_number=row_number, data=data))
    return parsed


def read_csv(raw: str | bytes, *, trim_quoted: Optional[bool] = None) -> list[ParsedRow]:
    """Decode an uploaded file and parse it into ParsedRow records."""
    if not raw:
        raise CsvFormatError("CSVファイルが空です")
    return parse_rows(decode(raw), trim_quoted=trim_quoted)
