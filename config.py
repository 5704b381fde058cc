"""
SiteOps - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR            = Path(__file__).resolve().parent
IMPORT_CONFIGS_PATH = os.environ.get("SITEOPS_IMPORT_CONFIGS", "")   # optional JSON override

# ── Database (document store) ──────────────────────────────────────────
DB_URL = os.environ.get("SITEOPS_DB", f"sqlite:///{BASE_DIR / 'siteops.sqlite'}")

# Hosted store refuses batches with more operations than this
MAX_BATCH_OPS = int(os.environ.get("SITEOPS_MAX_BATCH_OPS", "500"))

# ── CSV import ─────────────────────────────────────────────────────────
# Rows per atomic write chunk; must stay under MAX_BATCH_OPS
IMPORT_CHUNK_SIZE = int(os.environ.get("SITEOPS_IMPORT_CHUNK_SIZE", "400"))
TRIM_QUOTED       = os.environ.get("SITEOPS_TRIM_QUOTED", "0") == "1"
PREVIEW_PAGE_SIZE = 10

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("SITEOPS_HOST", "0.0.0.0")
PORT   = int(os.environ.get("SITEOPS_PORT", "5000"))
DEBUG  = os.environ.get("SITEOPS_DEBUG", "0") == "1"
SECRET = os.environ.get("SITEOPS_SECRET", "siteops-dev-key-change-in-prod")
MAX_UPLOAD_MB = int(os.environ.get("SITEOPS_MAX_UPLOAD_MB", "20"))

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("SITEOPS_LOG_LEVEL", "INFO").upper()
