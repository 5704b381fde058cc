"""
import_engine.resolver - Match incoming rows against stored records.

The lookups are built once per import from a point-in-time scan of
the store and are read-only afterwards.  Matching is exact on the
identifier string.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from db.store import DocumentStore
from import_engine.converter import get_nested
from import_engine.csv_parser import ParsedRow
from import_engine.field_map import ClientReference, ImportConfig

logger = logging.getLogger(__name__)


class ClientMatch(NamedTuple):
    id: str
    name: str


def _identifier(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def fetch_existing_identifiers(
    store: DocumentStore,
    config: ImportConfig,
    company_id: str,
) -> dict[str, str]:
    """Scan the entity's collection → {identifier value: document id}."""
    lookup: dict[str, str] = {}
    for doc_id, fields in store.query(config.collection_path(company_id)):
        key = _identifier(get_nested(fields, config.identifier_field.split(".")))
        if key:
            lookup[key] = doc_id
    logger.info(f"{config.entity_name}: {len(lookup)} existing identifiers loaded")
    return lookup


def fetch_clients_map(
    store: DocumentStore,
    config: ImportConfig,
    company_id: str,
) -> dict[str, ClientMatch]:
    """Scan the company's clients → {client code: ClientMatch}."""
    ref = config.client_reference
    clients: dict[str, ClientMatch] = {}
    for doc_id, fields in store.query(config.client_collection_path(company_id)):
        code = _identifier(fields.get(ref.client_code_field))
        if code:
            clients[code] = ClientMatch(doc_id, str(fields.get(ref.client_name_field) or ""))
    return clients


def resolve_existing(
    row: dict[str, str],
    identifier_column: str,
    existing: dict[str, str],
) -> tuple[bool, Optional[str]]:
    """Return (is_update, existing_id) for one row."""
    key = _identifier(row.get(identifier_column))
    if key and key in existing:
        return True, existing[key]
    return False, None


def resolve_client_references(
    rows: list[ParsedRow],
    reference: ClientReference,
    clients: dict[str, ClientMatch],
) -> int:
    """
    Inject the matched client id into each row and backfill a blank
    client name.  Runs before validation.  Returns the match count.
    """
    matched = 0
    for row in rows:
        code = _identifier(row.data.get(reference.code_column))
        client = clients.get(code) if code else None
        if client is None:
            continue
        row.data[reference.id_key] = client.id
        if not row.data.get(reference.name_column):
            row.data[reference.name_column] = client.name
        matched += 1
    return matched
