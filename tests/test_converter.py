from datetime import date

import pytest

from import_engine.converter import get_nested, set_nested, to_record, to_row
from import_engine.field_map import FieldMapping
from import_engine.field_types import FieldType

MAPPINGS = (
    FieldMapping("市区町村", "address.city"),
    FieldMapping("郵便番号", "address.postalCode"),
    FieldMapping("基本給", "salary.baseSalary", FieldType.NUMBER),
    FieldMapping("職長", "employment.isForeman", FieldType.BOOLEAN),
    FieldMapping("入社日", "employment.hireDate", FieldType.DATE),
    FieldMapping("資格", "qualifications", FieldType.ARRAY),
    FieldMapping("性別", "gender", FieldType.ENUM, options=("男性", "女性")),
)


def test_sibling_paths_share_one_parent():
    record = to_record({"市区町村": "渋谷区", "郵便番号": "150-0001"}, MAPPINGS)
    assert record == {"address": {"city": "渋谷区", "postalCode": "150-0001"}}


def test_blank_and_absent_columns_are_left_out():
    record = to_record({"市区町村": "", "基本給": "250000"}, MAPPINGS)
    assert record == {"salary": {"baseSalary": 250000}}


@pytest.mark.parametrize("raw,expected", [
    ("250000", 250000),
    ("-15", -15),
    ("12.5", 12),
    ("12abc", 12),
    ("abc", 0),
])
def test_number_conversion(raw, expected):
    assert FieldType.NUMBER.convert(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("true", True), ("TRUE", True), ("1", True), ("はい", True),
    ("false", False), ("0", False), ("いいえ", False), ("yes", False),
])
def test_boolean_conversion(raw, expected):
    assert FieldType.BOOLEAN.convert(raw) is expected


def test_date_conversion():
    assert FieldType.DATE.convert("2020-04-01") == date(2020, 4, 1)
    assert FieldType.DATE.convert("2020/04/01") == date(2020, 4, 1)
    assert FieldType.DATE.convert("2020-02-30") is None
    assert FieldType.DATE.convert("soon") is None


def test_array_splits_on_ascii_and_fullwidth_commas():
    assert FieldType.ARRAY.convert("足場組立,玉掛け") == ["足場組立", "玉掛け"]
    assert FieldType.ARRAY.convert("足場組立，玉掛け , ,溶接") == ["足場組立", "玉掛け", "溶接"]
    assert FieldType.ARRAY.convert("足場組立、玉掛け") == ["足場組立", "玉掛け"]


def test_enum_value_passes_through_unchanged():
    assert to_record({"性別": "女性"}, MAPPINGS) == {"gender": "女性"}


def test_padded_enum_and_email_are_stored_stripped():
    assert FieldType.ENUM.convert(" 男性 ") == "男性"
    assert FieldType.EMAIL.convert(" a@example.jp ") == "a@example.jp"
    assert FieldType.STRING.convert(" 渋谷区 ") == " 渋谷区 "


def test_fullwidth_digits_are_not_numbers_or_dates():
    assert FieldType.NUMBER.convert("１２３") == 0
    assert FieldType.DATE.convert("２０２０-０４-０１") is None


def test_set_nested_replaces_non_dict_intermediate():
    record = {"address": "old"}
    set_nested(record, ("address", "city"), "新宿区")
    assert record == {"address": {"city": "新宿区"}}


def test_get_nested_default():
    record = {"address": {"city": "渋谷区"}}
    assert get_nested(record, ("address", "city")) == "渋谷区"
    assert get_nested(record, ("address", "building"), "-") == "-"
    assert get_nested(record, ("address", "city", "x")) is None


def test_flattening_and_converting_again_is_stable():
    row = {
        "市区町村": "渋谷区",
        "基本給": "250000",
        "職長": "はい",
        "入社日": "2020/04/01",
        "資格": "足場組立，玉掛け",
        "性別": "男性",
    }
    record = to_record(row, MAPPINGS)
    flat = to_row(record, MAPPINGS)
    assert flat["郵便番号"] == ""
    assert flat["入社日"] == "2020-04-01"
    assert to_record(flat, MAPPINGS) == record
