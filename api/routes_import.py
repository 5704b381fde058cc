"""
api.routes_import - /api/v1/import and /api/v1/export endpoints.

Uploads are accepted as multipart (field 'csv_file') or as a raw
request body (Content-Type: text/csv).  Every call is scoped to the
calling admin's company.
"""

from __future__ import annotations

import io

from flask import abort, current_app, g, jsonify, request, send_file

from api import api_bp
from api.auth import admin_required
from db.store import DocumentStore
from import_engine.export import filename_for, template_csv
from import_engine.field_map import ImportConfig
from schema import get_config
from services.import_service import ImportSession, export_records

EXTENSION_KEY = "siteops"


def get_configs() -> dict[str, ImportConfig]:
    return current_app.extensions[EXTENSION_KEY]["configs"]


def get_store() -> DocumentStore:
    return current_app.extensions[EXTENSION_KEY]["store"]


def _config_or_404(entity: str) -> ImportConfig:
    cfg = get_config(get_configs(), entity)
    if cfg is None:
        abort(404)
    return cfg


def _upload_content() -> bytes:
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            abort(400)
        content = f.read()
    else:
        content = request.get_data()
    if not content:
        abort(400)
    return content


def _csv_response(payload: bytes, filename: str):
    return send_file(
        io.BytesIO(payload),
        mimetype="text/csv; charset=utf-8",
        as_attachment=True,
        download_name=filename,
    )


def _load_session(entity: str) -> ImportSession:
    cfg = _config_or_404(entity)
    session = ImportSession(cfg, g.actor.company_id, get_store())
    session.load_file(_upload_content())
    return session


@api_bp.route("/import/<entity>/template")
@admin_required
def import_template(entity: str):
    """GET /api/v1/import/<entity>/template - header + sample row."""
    cfg = _config_or_404(entity)
    return _csv_response(template_csv(cfg), filename_for(cfg, "template"))


@api_bp.route("/import/<entity>/preview", methods=["POST"])
@admin_required
def import_preview(entity: str):
    """
    POST /api/v1/import/<entity>/preview?page=1&errors_only=0

    Validate without writing; returns counts and one page of rows.
    """
    page = request.args.get("page", 1, type=int)
    only_errors = request.args.get("errors_only", "0") == "1"
    session = _load_session(entity)
    return jsonify(session.preview(page=page, only_errors=only_errors))


@api_bp.route("/import/<entity>", methods=["POST"])
@admin_required
def import_execute(entity: str):
    """
    POST /api/v1/import/<entity>

    Validate and write.  Rows with validation errors are skipped and
    listed in the response together with the progress events.
    """
    session = _load_session(entity)
    progress: list[dict] = []
    summary = session.execute(
        on_progress=lambda p: progress.append({"current": p.current, "total": p.total})
    )
    body = summary.to_dict()
    body["progress"] = progress
    return jsonify(body)


@api_bp.route("/import/<entity>/errors", methods=["POST"])
@admin_required
def import_errors(entity: str):
    """POST /api/v1/import/<entity>/errors - rejected rows with reasons as CSV."""
    session = _load_session(entity)
    return _csv_response(session.error_csv(), filename_for(session.config, "errors"))


@api_bp.route("/export/<entity>")
@admin_required
def export_entity(entity: str):
    """GET /api/v1/export/<entity> - stored records in the import layout."""
    cfg = _config_or_404(entity)
    payload = export_records(get_store(), cfg, g.actor.company_id)
    return _csv_response(payload, filename_for(cfg, "export"))
