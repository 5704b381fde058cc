from import_engine.csv_parser import parse_rows
from import_engine.encoding import UTF8_BOM, decode, detect_encoding

SAMPLE = (
    "社員番号,氏,名,住所\n"
    "EMP001,山田,太郎,東京都渋谷区神南一丁目\n"
    "EMP002,佐藤,花子,大阪府大阪市北区梅田二丁目\n"
    "EMP003,鈴木,一郎,愛知県名古屋市中村区名駅三丁目\n"
    "EMP004,高橋,美咲,福岡県福岡市博多区博多駅前四丁目\n"
    "EMP005,田中,健太,北海道札幌市中央区北五条西二丁目\n"
    "EMP006,伊藤,さくら,宮城県仙台市青葉区中央一丁目\n"
    "EMP007,渡辺,大輔,広島県広島市中区基町五丁目\n"
)


def test_utf8_bom_is_stripped():
    raw = UTF8_BOM + SAMPLE.encode("utf-8")
    assert detect_encoding(raw) == "utf-8-sig"
    assert decode(raw) == SAMPLE


def test_plain_utf8():
    assert decode(SAMPLE.encode("utf-8")) == SAMPLE


def test_shift_jis_header_is_recovered():
    text = decode(SAMPLE.encode("shift_jis"))
    assert text == SAMPLE
    rows = parse_rows(text)
    assert list(rows[0].data) == ["社員番号", "氏", "名", "住所"]


def test_euc_jp_is_decoded():
    assert decode(SAMPLE.encode("euc_jp")) == SAMPLE


def test_malformed_bytes_do_not_raise():
    text = decode(b"a,b\n\xff\xfe,1\n")
    assert text.startswith("a,b\n")


def test_str_input_only_loses_its_bom():
    assert decode("\ufeffa,b\n1,2") == "a,b\n1,2"
    assert decode("a,b") == "a,b"
