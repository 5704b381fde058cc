"""
import_engine.encoding - Byte buffer → text.

Order of checks:
  • UTF-8 BOM  → decode remainder as UTF-8
  • chardet reports Shift-JIS / EUC-JP (and the bytes decode cleanly) → that table
  • valid UTF-8 → UTF-8
  • strict cp932 / EUC-JP attempts for samples too short for chardet
  • anything else → UTF-8 with replacement characters

Malformed bytes decode to U+FFFD instead of raising; the validator
rejects the resulting garbage as format errors.
"""

from __future__ import annotations

import logging

import chardet

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"

# chardet name (lower-cased) → Python codec
_LEGACY_JAPANESE = {
    "shift_jis":   "cp932",
    "shift-jis":   "cp932",
    "sjis":        "cp932",
    "cp932":       "cp932",
    "windows-31j": "cp932",
    "euc-jp":      "euc_jp",
    "euc_jp":      "euc_jp",
}

_FALLBACK_CODECS = ("cp932", "euc_jp")


def _decodes(raw: bytes, codec: str) -> bool:
    try:
        raw.decode(codec)
    except UnicodeDecodeError:
        return False
    return True


def detect_encoding(raw: bytes) -> str:
    """Return the codec name decode() would use for raw."""
    if raw.startswith(UTF8_BOM):
        return "utf-8-sig"

    guess = chardet.detect(raw)
    name = (guess.get("encoding") or "").lower()
    codec = _LEGACY_JAPANESE.get(name)
    if codec and _decodes(raw, codec):
        logger.debug(f"chardet: {name} (confidence {guess.get('confidence')})")
        return codec

    if _decodes(raw, "utf-8"):
        return "utf-8"
    for codec in _FALLBACK_CODECS:
        if _decodes(raw, codec):
            logger.debug(f"chardet guessed {name!r}; falling back to {codec}")
            return codec
    return "utf-8"


def decode(raw: str | bytes) -> str:
    """Decode an uploaded CSV; str input only has its BOM stripped."""
    if isinstance(raw, str):
        return raw[1:] if raw.startswith("\ufeff") else raw
    codec = detect_encoding(raw)
    return raw.decode(codec, errors="replace")
