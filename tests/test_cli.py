"""Tests for the command line order file handling."""

from argparse import Namespace

from game import cmd_parse, read_orders


def test_read_orders(tmp_path):
    path = tmp_path / "orders.txt"
    path.write_text("control C1\n", encoding="utf-8")
    assert read_orders(path) == "control C1\n"


def test_missing_file_reports_error(tmp_path, capsys):
    assert read_orders(tmp_path / "nope.txt") is None
    assert "not found" in capsys.readouterr().out


def test_parse_rejects_file_that_is_not_utf8(tmp_path, capsys):
    path = tmp_path / "orders.txt"
    path.write_bytes(b"control C1\n\xff\xfe\x80\n")

    assert cmd_parse(Namespace(file=str(path))) == 1
    assert "not valid UTF-8" in capsys.readouterr().out


def test_parse_echoes_orders(tmp_path, capsys):
    path = tmp_path / "orders.txt"
    path.write_text("control C1\nlaunch S1\n", encoding="utf-8")

    assert cmd_parse(Namespace(file=str(path))) == 1
    out = capsys.readouterr().out
    assert "control C1" in out
    assert ";; 1 orders, 1 errors" in out
