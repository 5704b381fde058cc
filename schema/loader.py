"""
schema.loader - Build the entity-type → ImportConfig mapping.

Built-in configs come from schema.entities; an optional JSON file
(config.IMPORT_CONFIGS_PATH) may add entity types or replace built-ins.
The result is a plain dict that callers pass along explicitly.

JSON layout:
    {"employee": {"entityName": …, "collection": …, "identifierField": …,
                  "identifierColumn": …, "fieldMappings": [{…}], …}, …}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from import_engine.field_map import ImportConfig
from schema.entities import BUILTIN

logger = logging.getLogger(__name__)


def load_configs(path: Optional[str | Path] = None) -> dict[str, ImportConfig]:
    """Return built-in configs, overlaid with those in path (if given)."""
    configs = dict(BUILTIN)
    if not path:
        return configs

    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)

    for entity_type, data in raw.items():
        try:
            configs[entity_type] = ImportConfig.from_dict(data)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"{path}: invalid import config {entity_type!r}: {exc}") from exc

    logger.info(f"Loaded {len(raw)} import config(s) from {path}")
    return configs


def get_config(configs: dict[str, ImportConfig], entity_type: str) -> Optional[ImportConfig]:
    return configs.get(entity_type)
