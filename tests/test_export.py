from import_engine.csv_parser import parse_rows, tokenize
from import_engine.encoding import UTF8_BOM, decode
from import_engine.export import (
    REASON_COLUMN,
    error_rows_csv,
    failed_rows_csv,
    filename_for,
    records_csv,
    template_csv,
)
from import_engine.report import ErrorRow, FailedRow
from schema import CLIENT, EMPLOYEE


def _read(payload: bytes):
    assert payload.startswith(UTF8_BOM)
    return parse_rows(decode(payload), trim_quoted=False)


def test_template_has_header_and_sample_row():
    payload = template_csv(EMPLOYEE)
    assert payload.startswith(UTF8_BOM)

    rows = tokenize(decode(payload), trim_quoted=False)
    assert rows[0] == EMPLOYEE.columns
    assert rows[1] == [EMPLOYEE.sample_data.get(c, "") for c in EMPLOYEE.columns]


def test_error_rows_survive_quoting():
    data = {
        "取引先コード": "C1",
        "取引先名": '株式会社"テスト", 本社',
        "番地": "1-1\n2F",
        "担当者名": "  佐藤  ",
    }
    row = ErrorRow(row_number=2, original_data=data, errors=["a", "b"])

    parsed = _read(error_rows_csv([row], CLIENT))

    assert len(parsed) == 1
    for column, value in data.items():
        assert parsed[0].data[column] == value
    assert parsed[0].data[REASON_COLUMN] == "a; b"
    assert parsed[0].data["FAX"] == ""


def test_failed_rows_carry_the_write_error():
    row = FailedRow(row_number=5, error="書き込みに失敗しました: boom",
                    data={"取引先コード": "C1", "取引先名": "株式会社テスト"})
    parsed = _read(failed_rows_csv([row], CLIENT))
    assert parsed[0].data["取引先名"] == "株式会社テスト"
    assert parsed[0].data[REASON_COLUMN] == "書き込みに失敗しました: boom"


def test_records_are_flattened_into_the_import_layout():
    record = {
        "employeeCode": "E1",
        "lastName": "山田",
        "salary": {"baseSalary": 250000},
        "employment": {"isForeman": True, "hireDate": "2020-04-01"},
        "qualifications": ["足場組立", "玉掛け"],
    }
    data = _read(records_csv([record], EMPLOYEE))[0].data

    assert data["社員番号"] == "E1"
    assert data["基本給"] == "250000"
    assert data["職長"] == "true"
    assert data["入社日"] == "2020-04-01"
    assert data["資格"] == "足場組立,玉掛け"
    assert data["名"] == ""


def test_filename():
    assert filename_for(CLIENT, "template") == "clients_template.csv"
