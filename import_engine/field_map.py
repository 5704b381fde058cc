"""
import_engine.field_map - CSV column ↔ record field bindings.

FieldMapping binds one CSV column to one (possibly nested) record
field.  ImportConfig groups the mappings of one entity kind together
with its upsert identifier and template sample row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from import_engine.field_types import FieldType


@dataclass(frozen=True)
class FieldMapping:
    csv_column: str
    field: str                      # dot-separated path, e.g. "address.city"
    type: FieldType = FieldType.STRING
    required: bool = False
    options: tuple[str, ...] = ()   # only for FieldType.ENUM

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self.field.split("."))

    @classmethod
    def from_dict(cls, data: dict) -> "FieldMapping":
        return cls(
            csv_column=data["csvColumn"],
            field=data["field"],
            type=FieldType(data.get("type", "string")),
            required=bool(data.get("required", False)),
            options=tuple(data.get("options") or ()),
        )


@dataclass(frozen=True)
class ClientReference:
    """
    Columns used to link a row to a client record by its code.
    On a match the client id is stored on the row under id_key
    and written to the record as target_field.
    """
    code_column: str = "取引先コード"
    name_column: str = "取引先名"
    client_code_field: str = "clientCode"
    client_name_field: str = "clientName"
    client_collection: str = "clients"
    id_key: str = "_clientId"
    target_field: str = "clientId"


@dataclass(frozen=True)
class ImportConfig:
    entity_name: str
    collection: str
    identifier_field: str
    identifier_column: str
    field_mappings: tuple[FieldMapping, ...]
    sample_data: dict = field(default_factory=dict)
    resolve_client_reference: bool = False
    client_reference: ClientReference = field(default_factory=ClientReference)

    def __post_init__(self):
        seen: set[str] = set()
        for m in self.field_mappings:
            if m.csv_column in seen:
                raise ValueError(
                    f"{self.entity_name}: duplicate CSV column {m.csv_column!r}"
                )
            seen.add(m.csv_column)
            if m.type is FieldType.ENUM and not m.options:
                raise ValueError(
                    f"{self.entity_name}: enum column {m.csv_column!r} has no options"
                )

    @property
    def columns(self) -> list[str]:
        return [m.csv_column for m in self.field_mappings]

    def mapping_for(self, csv_column: str) -> Optional[FieldMapping]:
        for m in self.field_mappings:
            if m.csv_column == csv_column:
                return m
        return None

    def collection_path(self, company_id: str) -> str:
        return f"companies/{company_id}/{self.collection}"

    def client_collection_path(self, company_id: str) -> str:
        return f"companies/{company_id}/{self.client_reference.client_collection}"

    @classmethod
    def from_dict(cls, data: dict) -> "ImportConfig":
        return cls(
            entity_name=data["entityName"],
            collection=data["collection"],
            identifier_field=data["identifierField"],
            identifier_column=data["identifierColumn"],
            field_mappings=tuple(
                FieldMapping.from_dict(m) for m in data.get("fieldMappings", [])
            ),
            sample_data=dict(data.get("sampleData") or {}),
            resolve_client_reference=bool(data.get("resolveClientReference", False)),
        )
