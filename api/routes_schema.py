"""
api.routes_schema - /api/v1/schema/* endpoints.

Expose the import configs so clients can render column help and
build files without hard-coding the layouts.
"""

from flask import jsonify

from api import api_bp
from api.routes_import import get_configs


def _mapping_dict(m) -> dict:
    d = {"csv_column": m.csv_column, "field": m.field,
         "type": m.type.value, "required": m.required}
    if m.options:
        d["options"] = list(m.options)
    return d


@api_bp.route("/schema/entities")
def schema_entities():
    """List importable entity types."""
    return jsonify({
        key: {"entity_name": cfg.entity_name, "collection": cfg.collection}
        for key, cfg in get_configs().items()
    })


@api_bp.route("/schema/entities/<entity>")
def schema_entity(entity: str):
    """Column layout of one entity type."""
    cfg = get_configs().get(entity)
    if cfg is None:
        return jsonify({"error": "unknown entity type"}), 404
    return jsonify({
        "entity_name": cfg.entity_name,
        "identifier_column": cfg.identifier_column,
        "identifier_field": cfg.identifier_field,
        "resolve_client_reference": cfg.resolve_client_reference,
        "columns": [_mapping_dict(m) for m in cfg.field_mappings],
    })
