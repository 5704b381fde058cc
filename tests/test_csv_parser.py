import pytest

from import_engine.csv_parser import CsvFormatError, parse_rows, read_csv, tokenize


def test_comma_inside_quotes_is_part_of_the_field():
    rows = tokenize('名前,年齢\n"田中, 太郎",30', trim_quoted=False)
    assert rows == [["名前", "年齢"], ["田中, 太郎", "30"]]


def test_doubled_quote_inside_quotes_is_a_literal_quote():
    assert tokenize('a\n"say ""hi"""', trim_quoted=False) == [["a"], ['say "hi"']]


def test_newline_inside_quotes_stays_in_the_field():
    rows = tokenize('name,note\n"x","line1\nline2"\n', trim_quoted=False)
    assert rows == [["name", "note"], ["x", "line1\nline2"]]


def test_crlf_and_lone_cr_are_line_breaks():
    assert tokenize("a,b\r\n1,2\r3,4", trim_quoted=False) == [["a", "b"], ["1", "2"], ["3", "4"]]


def test_trailing_newline_does_not_add_a_row():
    assert tokenize("a,b\n1,2\n", trim_quoted=False) == [["a", "b"], ["1", "2"]]


def test_unquoted_fields_are_trimmed():
    assert tokenize("  a  , b \n", trim_quoted=False) == [["a", "b"]]


def test_whitespace_inside_quotes_is_kept_by_default():
    assert tokenize('"  a  ",  "b"  ', trim_quoted=False) == [["  a  ", "b"]]


def test_legacy_mode_trims_quoted_fields():
    assert tokenize('"  a  ",b', trim_quoted=True) == [["a", "b"]]


def test_rows_zip_against_header_and_pad_missing_fields():
    rows = parse_rows("a,b,c\n1\n", trim_quoted=False)
    assert len(rows) == 1
    assert rows[0].row_number == 2
    assert rows[0].data == {"a": "1", "b": "", "c": ""}


def test_blank_lines_are_skipped_but_keep_their_row_number():
    rows = parse_rows("h1,h2\nA,1\n\nB,2\n", trim_quoted=False)
    assert [r.row_number for r in rows] == [2, 4]
    assert rows[1].data == {"h1": "B", "h2": "2"}


def test_header_only_file_is_rejected():
    with pytest.raises(CsvFormatError):
        parse_rows("社員番号,氏,名")


def test_empty_input_is_rejected():
    with pytest.raises(CsvFormatError):
        parse_rows("")
    with pytest.raises(CsvFormatError):
        read_csv(b"")


def test_read_csv_decodes_bytes():
    rows = read_csv("氏,名\n山田,太郎\n".encode("utf-8"), trim_quoted=False)
    assert rows[0].data == {"氏": "山田", "名": "太郎"}
