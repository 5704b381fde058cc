"""
api.errors - JSON error handlers for the API blueprint.
"""

import logging

from flask import jsonify

from api import api_bp
from db.store import StoreError
from import_engine.csv_parser import CsvFormatError
from services.import_service import ImportStateError

logger = logging.getLogger(__name__)


@api_bp.errorhandler(CsvFormatError)
def api_csv_format(e):
    return jsonify({"error": str(e)}), 400


@api_bp.errorhandler(ImportStateError)
def api_import_state(e):
    return jsonify({"error": str(e)}), 400


@api_bp.errorhandler(StoreError)
def api_store_unavailable(e):
    logger.error(f"Store error: {e}")
    return jsonify({"error": "data store unavailable"}), 503


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(401)
def api_unauthorized(_e):
    return jsonify({"error": "authentication required"}), 401


@api_bp.errorhandler(403)
def api_forbidden(_e):
    return jsonify({"error": "admin role required"}), 403


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(413)
def api_too_large(_e):
    return jsonify({"error": "file too large"}), 413


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
