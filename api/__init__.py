"""
api - HTTP surface of the admin console.

One Blueprint under /api/v1; the import/export routes, the schema
routes and the JSON error handlers all register on it.
"""

from flask import Blueprint

api_bp = Blueprint("api", __name__, url_prefix="/api/v1")

# Route modules register through their @api_bp decorators
from api import routes_import     # noqa: F401, E402
from api import routes_schema     # noqa: F401, E402
from api import errors            # noqa: F401, E402
