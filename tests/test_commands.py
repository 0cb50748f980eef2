"""Tests for the command layer."""

import math

from Calculator import commands


def test_parse_and_eval_returns_number():
    assert commands.parse_and_eval("10-4") == 6.0
    assert commands.parse_and_eval("2^3^2") == 64.0


def test_parse_and_eval_returns_error_message():
    result = commands.parse_and_eval("(1+2")
    assert isinstance(result, str)
    assert "')'" in result


def test_calculate_returns_error_message():
    assert commands.calculate("1+") == "Unexpected end of input"


def test_calculate_returns_ieee_values():
    assert commands.calculate("1/0") == math.inf


def test_invoke_success():
    assert commands.invoke("parse_and_eval", {"inp": "2^3^2"}) == {"result": 64.0}
    assert commands.invoke("calculate", {"inp": "2^3^2"}) == {"result": 512.0}


def test_invoke_error_carries_code():
    assert commands.invoke("calculate", {"inp": "1+"}) == {
        "error": "Unexpected end of input", "code": "3012", "equation": "1+"}


def test_invoke_unknown_command():
    result = commands.invoke("solve", {"inp": "1+1"})
    assert result["code"] == "9999"
    assert "solve" in result["error"]


def test_invoke_missing_argument():
    assert "error" in commands.invoke("calculate", {})
    assert "error" in commands.invoke("calculate", {"inp": 5})


def test_invoke_error_carries_equation():
    result = commands.invoke("parse_and_eval", {"inp": "(1+2"})
    assert result["code"] == "3009"
    assert result["equation"] == "(1+2"
