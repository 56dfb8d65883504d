"""Tests for the insert, update and delete CLI commands."""

from __future__ import annotations

import argparse

import pytest

from csvql.interfaces.cli.main import _parse_rows_arg, cmd_delete, cmd_insert, cmd_update, main
from csvql.core.errors import CsvqlError


ORIGINAL = "id,name,age\n1,A,20\n2,B,30\n3,C,40\n"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


class TestCmdInsert:
    """Tests for cmd_insert."""

    def test_insert_values(self, people_csv, capsys):
        args = argparse.Namespace(
            file=str(people_csv), config=None, values=["id=4,name=D", "id=5"], from_csv=None
        )
        assert cmd_insert(args) == 0
        assert capsys.readouterr().out == f"Successfully inserted 2 rows into {people_csv}\n"
        assert people_csv.read_text(encoding="utf-8") == ORIGINAL + "4,D,\n5,,\n"

    def test_insert_unknown_column_writes_nothing(self, people_csv):
        args = argparse.Namespace(
            file=str(people_csv), config=None, values=["id=4", "salary=1"], from_csv=None
        )
        assert cmd_insert(args) == 1
        assert people_csv.read_text(encoding="utf-8") == ORIGINAL

    def test_insert_from_csv(self, people_csv, tmp_path, capsys):
        source = tmp_path / "more.csv"
        source.write_text("id,name,age\n7,G,70\n8,H,80\n", encoding="utf-8")
        args = argparse.Namespace(file=str(people_csv), config=None, values=None, from_csv=str(source))
        assert cmd_insert(args) == 0
        assert "Successfully inserted 2 rows" in capsys.readouterr().out
        assert people_csv.read_text(encoding="utf-8").endswith("7,G,70\n8,H,80\n")

    def test_insert_from_missing_csv(self, people_csv, tmp_path):
        args = argparse.Namespace(
            file=str(people_csv), config=None, values=None, from_csv=str(tmp_path / "nope.csv")
        )
        assert cmd_insert(args) == 2


class TestCmdUpdate:
    """Tests for cmd_update."""

    def test_update(self, people_csv, capsys):
        args = argparse.Namespace(file=str(people_csv), config=None, set="age=99", where="name = 'B'")
        assert cmd_update(args) == 0
        assert capsys.readouterr().out == f"Successfully updated 1 row in {people_csv}\n"
        assert "2,B,99" in people_csv.read_text(encoding="utf-8")

    def test_update_no_match(self, people_csv, capsys):
        args = argparse.Namespace(file=str(people_csv), config=None, set="age=99", where="age > 100")
        assert cmd_update(args) == 0
        assert capsys.readouterr().out == "No rows match the WHERE condition. No updates performed.\n"
        assert people_csv.read_text(encoding="utf-8") == ORIGINAL

    def test_update_without_where(self, people_csv):
        args = argparse.Namespace(file=str(people_csv), config=None, set="age=99", where="")
        assert cmd_update(args) == 1
        assert people_csv.read_text(encoding="utf-8") == ORIGINAL


class TestCmdDelete:
    """Tests for cmd_delete."""

    @staticmethod
    def _args(path, where=None, rows=None, all_rows=False):
        return argparse.Namespace(file=str(path), config=None, where=where, rows=rows, all=all_rows)

    def test_delete_where(self, people_csv, capsys):
        assert cmd_delete(self._args(people_csv, where="age >= 30")) == 0
        assert capsys.readouterr().out == f"Successfully deleted 2 rows from {people_csv}\n"
        assert people_csv.read_text(encoding="utf-8") == "id,name,age\n1,A,20\n"

    def test_delete_no_match(self, people_csv, capsys):
        assert cmd_delete(self._args(people_csv, where="name = Z")) == 0
        assert "No deletions performed" in capsys.readouterr().out

    def test_delete_rows(self, people_csv):
        assert cmd_delete(self._args(people_csv, rows="1,3")) == 0
        assert people_csv.read_text(encoding="utf-8") == "id,name,age\n2,B,30\n"

    def test_delete_rows_out_of_range(self, people_csv):
        assert cmd_delete(self._args(people_csv, rows="4")) == 1
        assert people_csv.read_text(encoding="utf-8") == ORIGINAL

    def test_delete_all(self, people_csv):
        assert cmd_delete(self._args(people_csv, all_rows=True)) == 0
        assert people_csv.read_text(encoding="utf-8") == "id,name,age\n"

    def test_delete_empty_where(self, people_csv):
        assert cmd_delete(self._args(people_csv, where="")) == 1
        assert people_csv.read_text(encoding="utf-8") == ORIGINAL


def test_parse_rows_arg():
    assert _parse_rows_arg("1, 3,,5") == [1, 3, 5]
    with pytest.raises(CsvqlError, match="invalid row number"):
        _parse_rows_arg("1,x")


def test_main_delete_options_are_exclusive(people_csv):
    with pytest.raises(SystemExit):
        main(["delete", "-f", str(people_csv), "--all", "--rows", "1"])
    assert people_csv.read_text(encoding="utf-8") == ORIGINAL


def test_main_update_round_trip(people_csv, capsys):
    code = main(["--errors-only", "update", "-f", str(people_csv), "--set", "name='Bee'", "-w", "id = 2"])
    assert code == 0
    assert "Successfully updated 1 row" in capsys.readouterr().out
    assert "2,Bee,30" in people_csv.read_text(encoding="utf-8")
