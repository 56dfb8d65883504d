"""Tests for CSV decoding/encoding and atomic persistence."""

import io

import pytest

from csvql.config import Settings
from csvql.core.errors import CodecError
from csvql.core.table import new_table
from csvql.storage import decode, encode, read_table, save_table, write_text
from utils.table_helpers import PEOPLE_CSV, table_rows


def test_decode_keeps_text_and_header_order():
    df = decode(io.StringIO("b,a,c\n007,,x y\n1.50,NA,null\n"))
    assert list(df.columns) == ["b", "a", "c"]
    # nothing is coerced: leading zeros, empty fields and NA spellings survive
    assert table_rows(df) == [["007", "", "x y"], ["1.50", "NA", "null"]]


def test_decode_quoted_fields():
    df = decode(io.StringIO('name,note\n"Lee, Ann","said ""hi"""\n'))
    assert table_rows(df) == [["Lee, Ann", 'said "hi"']]


def test_decode_header_only():
    df = decode(io.StringIO("id,name\n"))
    assert list(df.columns) == ["id", "name"]
    assert len(df) == 0


def test_decode_rejects_duplicate_column_names():
    with pytest.raises(CodecError, match="duplicate column name.*: tag"):
        decode(io.StringIO("id,tag,tag\n1,x,y\n2,p,q\n"))


def test_decode_header_cells_kept_verbatim():
    df = decode(io.StringIO("007,NA,\n1,2,3\n"))
    assert list(df.columns) == ["007", "NA", ""]
    assert table_rows(df) == [["1", "2", "3"]]


def test_decode_empty_input():
    with pytest.raises(CodecError, match="no columns"):
        decode(io.StringIO(""))


def test_decode_custom_delimiter():
    df = decode(io.StringIO("a;b\n1;2\n"), Settings(delimiter=";"))
    assert table_rows(df) == [["1", "2"]]


def test_read_table_strips_bom(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes(b"\xef\xbb\xbfid,name\n1,A\n")
    assert list(read_table(path).columns) == ["id", "name"]


def test_encode_with_and_without_header(people):
    assert encode(people) == PEOPLE_CSV
    assert encode(people, include_header=False) == "1,A,20\n2,B,30\n3,C,40\n"


def test_encode_quotes_when_needed():
    df = new_table(["note"], [["a,b"]])
    assert encode(df) == 'note\n"a,b"\n'


def test_save_table_round_trip(tmp_path, people):
    path = tmp_path / "out.csv"
    save_table(people, path)
    assert path.read_text(encoding="utf-8") == PEOPLE_CSV
    assert table_rows(read_table(path)) == table_rows(people)
    assert not (tmp_path / "out.csv.part").exists()


def test_save_empty_table_keeps_header(tmp_path):
    path = tmp_path / "empty.csv"
    save_table(new_table(["id", "name"]), path)
    assert path.read_text(encoding="utf-8") == "id,name\n"


def test_write_text_failure_leaves_target_untouched(tmp_path):
    target = tmp_path / "data.csv"
    target.write_text("original\n", encoding="utf-8")
    with pytest.raises(CodecError, match="failed to save"):
        write_text("café\n", target, encoding="ascii")
    assert target.read_text(encoding="utf-8") == "original\n"
    assert not (tmp_path / "data.csv.part").exists()


def test_write_text_missing_directory(tmp_path):
    with pytest.raises(CodecError):
        write_text("x\n", tmp_path / "missing" / "out.csv")
