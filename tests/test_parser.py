"""Tokenizer and command record tests.

Run:
    pytest tests/test_parser.py -v
"""
import pytest

from core.lexer import GCodeLexer, TokenType
from core.parser import CommandRecord, Mnemonic, parse_command_number, parse_gcode
from utils.errors import ErrorCollector, ErrorSeverity, ErrorType


def test_single_motion_command():
    records = parse_gcode("G1 X10 Y-2.5 E0.4")

    assert len(records) == 1
    record = records[0]
    assert record.mnemonic == Mnemonic.GENERAL
    assert record.major_number == 1
    assert record.value_for('x') == 10.0
    assert record.value_for('y') == -2.5
    assert record.value_for('e') == pytest.approx(0.4)
    assert record.value_for('z') is None


def test_value_lookup_is_case_insensitive():
    record = parse_gcode("g1 x3 y4")[0]
    assert record.value_for('X') == 3.0
    assert record.value_for('y') == 4.0


def test_several_commands_on_one_line():
    records = parse_gcode("G21 G90 G1 X1")

    assert [r.major_number for r in records] == [21, 90, 1]
    assert dict(records[0].arguments) == {}
    assert dict(records[1].arguments) == {}
    assert records[2].value_for('x') == 1.0


def test_comments_are_skipped():
    records = parse_gcode("(start) G0 Y2 ; move (not a word X9)\n; only a comment")

    assert len(records) == 1
    assert records[0].value_for('y') == 2.0
    assert records[0].value_for('x') is None


def test_line_numbers_follow_source():
    records = parse_gcode("G90\n\nN20 G1 X1\nM104 S200")

    assert [r.line_number for r in records] == [1, 3, 4]
    assert records[1].value_for('n') is None
    assert records[2].mnemonic == Mnemonic.MISCELLANEOUS
    assert records[2].major_number == 104
    assert records[2].value_for('s') == 200.0


def test_extrusion_word_is_not_an_exponent():
    record = parse_gcode("G1 X1E5")[0]
    assert record.value_for('x') == 1.0
    assert record.value_for('e') == 5.0


def test_command_numbers():
    assert parse_command_number("01") == (1, 0)
    assert parse_command_number("90.1") == (90, 1)
    assert parse_command_number("1.0") == (1, 0)
    assert parse_command_number("59.3") == (59, 3)


def test_words_without_command_are_reported():
    collector = ErrorCollector()
    records = parse_gcode("X10 Y10\nG1 X1", collector)

    assert len(records) == 1
    errors = collector.get_errors_for_line(1)
    assert len(errors) == 2
    assert all(e.severity == ErrorSeverity.WARNING for e in errors)
    assert not collector.has_errors()


def test_unknown_characters_do_not_stop_parsing():
    collector = ErrorCollector()
    records = parse_gcode("G1 X1 @ Y2\nG1 X5", collector)

    assert len(records) == 2
    assert records[0].value_for('y') == 2.0
    assert collector.has_errors()
    assert collector.get_all_errors()[0].error_type == ErrorType.SYNTAX


def test_duplicate_word_keeps_last_value():
    collector = ErrorCollector()
    record = parse_gcode("G1 X1 X2", collector)[0]

    assert record.value_for('x') == 2.0
    assert collector.warning_count() == 1


def test_unclosed_comment_is_an_error():
    collector = ErrorCollector()
    tokens = GCodeLexer(collector).tokenize("G1 X1 (never closed")

    assert tokens[-3].type == TokenType.COMMENT
    assert collector.has_errors()


def test_command_record_is_immutable():
    record = CommandRecord(Mnemonic.GENERAL, 1, arguments={'X': 1})

    assert record.value_for('x') == 1.0
    with pytest.raises(TypeError):
        record.arguments['y'] = 2.0
    with pytest.raises(AttributeError):
        record.major_number = 2


def test_overflowing_number_is_rejected():
    collector = ErrorCollector()
    records = parse_gcode("G1 X" + "9" * 400 + " Y3\nG1 Y1", collector)

    assert records[0].value_for('x') is None
    assert records[0].value_for('y') == 3.0
    errors = collector.get_errors_for_line(1)
    assert len(errors) == 1
    assert errors[0].error_type == ErrorType.SYNTAX
    assert errors[0].severity == ErrorSeverity.ERROR
