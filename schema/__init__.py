"""
schema - Entity import configs.

Public API:
    loader.load_configs(path=None)  → {entity type: ImportConfig}
    entities.EMPLOYEE / CLIENT / SITE
"""

from schema.loader import load_configs, get_config          # noqa: F401
from schema.entities import EMPLOYEE, CLIENT, SITE, BUILTIN  # noqa: F401
