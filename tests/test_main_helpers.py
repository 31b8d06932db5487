import argparse

import pytest


def test_fmt_symbol_escapes_whitespace(m):
    assert m._fmt_symbol(" ") == "' '"
    assert m._fmt_symbol("\n") == "'\\n'"
    assert m._fmt_symbol("\t") == "'\\t'"
    assert m._fmt_symbol("\r") == "'\\r'"
    assert m._fmt_symbol("x") == "'x'"


def test_fmt_symbol_bytes(m):
    assert m._fmt_symbol(ord("A")) == "'A'"
    assert m._fmt_symbol(ord("\n")) == "'\\n'"
    assert m._fmt_symbol(0) == "0x00"
    assert m._fmt_symbol(0xFF) == "0xFF"


def test_truncate(m):
    assert m._truncate("0101", 10, "bits") == "0101"
    assert m._truncate("0" * 12, 10, "bits") == "0" * 10 + "... (12 bits total)"


def test_compression_ratio(m):
    assert m._compression_ratio(0, 0) == 0.0
    assert m._compression_ratio(88, 32) == pytest.approx(63.636, abs=1e-3)
    assert m._compression_ratio(8, 8) == 0.0


def test_read_input_text_and_file(m, text_file):
    parser = m.get_parser()
    assert m._read_input(parser.parse_args(["hello"])) == "hello"
    data = m._read_input(parser.parse_args(["-f", str(text_file)]))
    assert data == text_file.read_bytes()


def test_read_input_missing_file_raises(m, tmp_path):
    args = m.get_parser().parse_args(["-f", str(tmp_path / "nope.txt")])
    with pytest.raises(OSError):
        m._read_input(args)


def test_cli_parser_options(m):
    parser = m.get_parser()
    ns = parser.parse_args(["hello world"])
    assert ns.text == "hello world"
    assert ns.file is None
    assert ns.max_display == m.MAX_DISPLAY
    assert not ns.no_codes

    ns2 = parser.parse_args(["-f", "in.txt", "-w", "20", "--no-codes"])
    assert ns2.file == "in.txt"
    assert ns2.max_display == 20
    assert ns2.no_codes


def test_truncate_with_explicit_total(m):
    assert m._truncate("abcdef", 3, "symbols", 9) == "abc... (9 symbols total)"


def test_non_negative_int(m):
    assert m._non_negative_int("0") == 0
    assert m._non_negative_int("42") == 42
    with pytest.raises(argparse.ArgumentTypeError):
        m._non_negative_int("-3")
    with pytest.raises(argparse.ArgumentTypeError):
        m._non_negative_int("ten")


def test_cli_parser_rejects_negative_max_display(m):
    with pytest.raises(SystemExit):
        m.get_parser().parse_args(["abcdefgh", "-w", "-3"])
