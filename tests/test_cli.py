from main import create_app
from schema import EMPLOYEE

EMPLOYEES_CSV = "社員番号,氏,名\nE1,山田,太郎\nE2,,花子\nE3,鈴木,一郎\n"


def _write_csv(tmp_path):
    path = tmp_path / "staff.csv"
    path.write_bytes(EMPLOYEES_CSV.encode("utf-8"))
    return path


def test_import_csv(app, store, tmp_path):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["import-csv", "employee", str(_write_csv(tmp_path)),
                                 "--company", "c1", "--chunk-size", "1"])

    assert result.exit_code == 0, result.output
    assert "3 rows: 2 new, 0 update, 1 error" in result.output
    assert "Row 3: 氏は必須です" in result.output
    assert "2/2 (100%)" in result.output
    assert "Done: 2 created" in result.output
    assert len(store.query(EMPLOYEE.collection_path("c1"))) == 2


def test_import_csv_dry_run(app, store, tmp_path):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["import-csv", "employee", str(_write_csv(tmp_path)),
                                 "--company", "c1", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert store.query(EMPLOYEE.collection_path("c1")) == []


def test_import_csv_unknown_entity(app, tmp_path):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["import-csv", "vendor", str(_write_csv(tmp_path)),
                                 "--company", "c1"])
    assert result.exit_code != 0


def test_export_template(app, tmp_path):
    out = tmp_path / "template.csv"
    result = app.test_cli_runner().invoke(args=["export-template", "site", str(out)])

    assert result.exit_code == 0, result.output
    text = out.read_bytes().decode("utf-8-sig")
    assert text.startswith('"現場コード","現場名"')


def test_failed_rows_are_written_out(configs, flaky_store, tmp_path):
    app = create_app(configs=configs, store=flaky_store(1))
    failed_out = tmp_path / "failed.csv"

    result = app.test_cli_runner().invoke(args=[
        "import-csv", "employee", str(_write_csv(tmp_path)),
        "--company", "c1", "--failed-out", str(failed_out),
    ])

    assert result.exit_code == 0, result.output
    assert "2 failed" in result.output
    text = failed_out.read_bytes().decode("utf-8-sig")
    assert "書き込みに失敗しました" in text
    assert "山田" in text and "鈴木" in text
