import io

import pytest

from algokit.divcalc import InvalidCharacterError, evaluate_line, evaluate_text, main


@pytest.mark.parametrize("a, b", [(10, 2), (7, 3), (100, 7), (0, 5), (9, 10)])
def test_two_numbers_divide(a, b):
    assert evaluate_line(f"{a} {b}") == a // b


def test_single_number_is_itself():
    assert evaluate_line("42") == 42


def test_empty_line_is_zero():
    assert evaluate_line("") == 0


def test_division_chains_left_to_right():
    assert evaluate_line("100 5 2") == evaluate_line(f"{evaluate_line('100 5')} 2")


@pytest.mark.parametrize("line", ["10 0", "10  2", "10 ", "8 2 0"])
def test_zero_or_missing_divisor(line):
    with pytest.raises(ZeroDivisionError):
        evaluate_line(line)


@pytest.mark.parametrize("line", ["1x", "10 -2", "3\t4"])
def test_invalid_character(line):
    with pytest.raises(InvalidCharacterError):
        evaluate_line(line)


def test_invalid_character_is_value_error():
    with pytest.raises(ValueError):
        evaluate_line("a")


def test_text_yields_line_per_newline_including_trailing():
    assert list(evaluate_text("8 2\n9 3\n")) == [
        evaluate_line("8 2"),
        evaluate_line("9 3"),
        evaluate_line(""),
    ]


def test_text_keeps_results_before_error():
    results = evaluate_text("8 2\n1 0\n5 5\n")
    assert next(results) == evaluate_line("8 2")
    with pytest.raises(ZeroDivisionError):
        next(results)


def test_main_prints_results(monkeypatch, capsys):
    text = "20 4\n30 3 5"
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    assert main() == 0
    expected = "".join(f"{value}\n" for value in evaluate_text(text))
    assert capsys.readouterr().out == expected


def test_main_reports_division_by_zero(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("6 3\n6 0\n"))
    assert main() == 1
    captured = capsys.readouterr()
    assert captured.out == f"{evaluate_line('6 3')}\n"
    assert "Division by zero!" in captured.err


def test_main_reports_invalid_character(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("6 x\n"))
    assert main() == 1
    assert "Invalid character!" in capsys.readouterr().err