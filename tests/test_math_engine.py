"""Tests for the precedence-climbing parser, the tree evaluator and calculate()."""

import math

import pytest

from Calculator import MathEngine
from Calculator import Tokenizer
from Calculator import error as E
from Calculator.MathEngine import BinOp, Number, Operator


def calc(text):
    return MathEngine.calculate(text, postfix=False)


# --- Arithmetic ---

@pytest.mark.parametrize("text, expected", [
    ("2+3", 5.0),
    ("10-4", 6.0),
    ("3*7", 21.0),
    ("15/4", 3.75),
    ("1.5+2.25", 3.75),
    ("  42  ", 42.0),
    ("2 + 3 * 4", 14.0),
])
def test_basic_arithmetic(text, expected):
    assert calc(text) == pytest.approx(expected)


def test_precedence():
    assert calc("2+3*4") == 14.0
    assert calc("(2+3)*4") == 20.0
    assert calc("10-2*3+4/2") == 6.0
    assert calc("2*3^2") == 18.0


def test_left_associativity():
    assert calc("10-3-2") == 5.0
    assert calc("100/10/5") == 2.0
    assert calc("8/2*4") == 16.0


def test_power_is_right_associative():
    assert calc("2^3^2") == 512.0
    assert calc("(2^3)^2") == 64.0


def test_nested_parentheses():
    assert calc("((2+3)*(4-1))") == 15.0
    assert calc("((((7))))") == 7.0


@pytest.mark.parametrize("text", [
    "(1+2)*(3-4)/(5+6)",
    "((1-2)-3)*(4/(5-6))",
    "(1.5*(2.5+(3.5/7)))-(8/(4*2))",
])
def test_fully_parenthesized_matches_python(text):
    assert calc(text) == pytest.approx(eval(text))


def test_long_chain_is_not_limited_by_recursion():
    assert calc("+".join(["1"] * 5000)) == 5000.0


# --- IEEE-754 edge cases are results, not errors ---

def test_division_by_zero_is_infinity():
    assert calc("5/0") == math.inf
    assert calc("0-5/0") == -math.inf


def test_zero_divided_by_zero_is_nan():
    assert math.isnan(calc("0/0"))


def test_zero_to_negative_power_is_infinity():
    assert calc("0^(0-1)") == math.inf


def test_negative_base_fractional_exponent_is_nan():
    assert math.isnan(calc("(0-8)^0.5"))


def test_overflow_is_infinity():
    assert calc("10^400") == math.inf


def test_ieee_helpers():
    assert MathEngine.ieee_divide(-1.0, 0.0) == -math.inf
    assert MathEngine.ieee_divide(1.0, -0.0) == -math.inf
    assert MathEngine.ieee_power(-10.0, 401.0) == -math.inf
    assert MathEngine.ieee_power(2.0, 10.0) == 1024.0


# --- Tree shape ---

def test_tree_groups_subtraction_left():
    tree = MathEngine.parse(Tokenizer.tokenize("1-2-3"))
    assert tree == BinOp(BinOp(Number(1), Operator.SUBTRACT, Number(2)), Operator.SUBTRACT, Number(3))


def test_tree_groups_power_right():
    tree = MathEngine.parse(Tokenizer.tokenize("2^3^2"))
    assert tree == BinOp(Number(2), Operator.POWER, BinOp(Number(3), Operator.POWER, Number(2)))


def test_tree_multiplication_binds_tighter():
    tree = MathEngine.parse(Tokenizer.tokenize("1+2*3"))
    assert tree == BinOp(Number(1), Operator.ADD, BinOp(Number(2), Operator.MULTIPLY, Number(3)))


def test_node_evaluate():
    assert BinOp(Number(6), Operator.DIVIDE, Number(4)).evaluate() == 1.5
    assert Number(3).evaluate() == 3.0


def test_parse_accepts_tokens_without_end():
    tokens = [Tokenizer.Token(Tokenizer.TokenType.NUMBER, 4.0)]
    assert MathEngine.evaluate_tokens(tokens) == 4.0


# --- Errors ---

@pytest.mark.parametrize("text, code", [
    ("(1+2", "3009"),
    ("1+2)", "3010"),
    ("", "3000"),
    ("   ", "3000"),
    ("1+", "3012"),
    ("*2", "3011"),
    ("()", "3011"),
    ("-3", "3011"),
    ("2(3)", "3014"),
    ("1 2", "3014"),
    ("1..2+3", "3008"),
    ("2#3", "3013"),
])
def test_syntax_errors(text, code):
    with pytest.raises(E.MathError) as info:
        calc(text)
    assert info.value.code == code


def test_missing_right_paren_describes_expected_and_actual():
    with pytest.raises(E.SyntaxError) as info:
        calc("(1+2")
    assert info.value.expected == "RightParen"
    assert info.value.actual == "End"


def test_error_carries_equation():
    with pytest.raises(E.MathError) as info:
        calc("(1+2")
    assert info.value.equation == "(1+2"


def test_deep_nesting_is_a_syntax_error():
    text = "(" * 500 + "1" + ")" * 500
    with pytest.raises(E.SyntaxError) as info:
        calc(text)
    assert info.value.code == "3026"


def test_long_power_chain_is_a_syntax_error_without_calculate():
    tokens = Tokenizer.tokenize("^".join(["1"] * 3000))
    with pytest.raises(E.SyntaxError) as info:
        MathEngine.evaluate_tokens(tokens)
    assert info.value.code == "3026"


def test_unexpected_exception_is_wrapped(monkeypatch):
    def boom(problem):
        raise ValueError("broken tokenizer")

    monkeypatch.setattr(MathEngine.Tokenizer, "tokenize", boom)
    with pytest.raises(E.MathError) as info:
        calc("1+1")
    assert info.value.code == "9999"
    assert info.value.equation == "1+1"


# --- Evaluator selection ---

def test_calculate_uses_tree_evaluator_by_default():
    assert MathEngine.calculate("2^3^2") == 512.0


def test_calculate_uses_postfix_evaluator_from_settings(write_config):
    write_config(postfix_evaluator=True)
    assert MathEngine.calculate("2^3^2") == 64.0


def test_explicit_argument_overrides_settings(write_config):
    write_config(postfix_evaluator=True)
    assert MathEngine.calculate("2^3^2", postfix=False) == 512.0


def test_debug_output(write_config, capsys):
    write_config(debug=True)
    MathEngine.calculate("1+2")
    assert "Final AST:" in capsys.readouterr().out


# --- Rendering ---

@pytest.mark.parametrize("value, places, expected", [
    (14.0, 10, ("14", False)),
    (3.75, 10, ("3.75", False)),
    (0.1 + 0.2, 10, ("0.3", True)),
    (2 / 3, 2, ("0.67", True)),
    (1e20, 10, ("100000000000000000000", False)),
    (-1e-12, 10, ("0", True)),
    (math.inf, 10, ("∞", False)),
    (-math.inf, 10, ("-∞", False)),
])
def test_render(value, places, expected):
    assert MathEngine.render(value, places) == expected


def test_render_nan():
    assert MathEngine.render(math.nan, 10) == ("NaN", False)


def test_render_reads_decimal_places(write_config):
    write_config(decimal_places=3)
    assert MathEngine.render(1 / 3) == ("0.333", True)
