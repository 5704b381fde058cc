import json

import pytest

from import_engine.field_map import FieldMapping, ImportConfig
from import_engine.field_types import FieldType
from schema import BUILTIN, get_config, load_configs

VENDOR = {
    "entityName": "協力会社",
    "collection": "vendors",
    "identifierField": "vendorCode",
    "identifierColumn": "協力会社コード",
    "fieldMappings": [
        {"csvColumn": "協力会社コード", "field": "vendorCode"},
        {"csvColumn": "協力会社名", "field": "vendorName", "required": True},
        {"csvColumn": "区分", "field": "kind", "type": "enum", "options": ["一次", "二次"]},
    ],
    "sampleData": {"協力会社コード": "V001"},
}


def test_builtin_configs():
    configs = load_configs()
    assert set(configs) == {"employee", "client", "site"}
    assert get_config(configs, "site").resolve_client_reference
    assert get_config(configs, "vendor") is None


def test_json_file_adds_entity_types(tmp_path):
    path = tmp_path / "configs.json"
    path.write_text(json.dumps({"vendor": VENDOR}, ensure_ascii=False), encoding="utf-8")

    configs = load_configs(path)
    vendor = configs["vendor"]

    assert configs["employee"] is BUILTIN["employee"]
    assert vendor.columns == ["協力会社コード", "協力会社名", "区分"]
    assert vendor.mapping_for("区分").type is FieldType.ENUM
    assert vendor.mapping_for("協力会社名").required
    assert vendor.collection_path("c1") == "companies/c1/vendors"


def test_invalid_json_config(tmp_path):
    path = tmp_path / "configs.json"
    path.write_text(json.dumps({"vendor": {"entityName": "x"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_configs(path)


def test_duplicate_column_is_rejected():
    with pytest.raises(ValueError):
        ImportConfig("x", "xs", "code", "コード",
                     (FieldMapping("コード", "code"), FieldMapping("コード", "other")))


def test_enum_without_options_is_rejected():
    with pytest.raises(ValueError):
        ImportConfig("x", "xs", "code", "コード",
                     (FieldMapping("区分", "kind", FieldType.ENUM),))
