# MathEngine.py
"""""
Core calculation engine of the calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens (see Tokenizer.py).
2) Parser (AST): builds an Abstract Syntax Tree with precedence climbing.
3) Evaluator: walks the tree and computes a float (IEEE-754 semantics, no exceptions
   for division by zero or overflow).
4) Formatter: renders results for the display using the user's decimal places.

The postfix (shunting-yard) alternative lives in PostfixEngine.py; calculate() picks
one of the two depending on the 'postfix_evaluator' setting.
"""""

import math
from decimal import Decimal, localcontext
from enum import Enum

from . import config_manager as config_manager
from . import Tokenizer
from . import error as E
from .Tokenizer import TokenType

# Debug toggle for optional prints in this module
debug = False

# Parser recursion guard; deeper nesting is reported as a SyntaxError
MAX_NESTING = 200


class Operator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"


TOKEN_TO_OPERATOR = {
    TokenType.PLUS: Operator.ADD,
    TokenType.MINUS: Operator.SUBTRACT,
    TokenType.STAR: Operator.MULTIPLY,
    TokenType.SLASH: Operator.DIVIDE,
    TokenType.CARET: Operator.POWER,
}

PRECEDENCE = {
    Operator.ADD: 3,
    Operator.SUBTRACT: 3,
    Operator.MULTIPLY: 5,
    Operator.DIVIDE: 5,
    Operator.POWER: 7,
}

RIGHT_ASSOCIATIVE = {Operator.POWER}


# -----------------------------
# IEEE-754 arithmetic helpers
# -----------------------------

def ieee_divide(left_value, right_value):
    """l / r with IEEE results instead of ZeroDivisionError."""
    if right_value == 0:
        if left_value == 0 or math.isnan(left_value):
            return math.nan
        # Sign follows both operands, including a negative zero divisor
        return math.copysign(math.inf, left_value) * math.copysign(1.0, right_value)
    return left_value / right_value


def _is_odd_integer(value):
    return math.isfinite(value) and value.is_integer() and value % 2 == 1


def ieee_power(base, exponent):
    """l ** r following C pow(): inf on overflow or zero to a negative power, nan for
    a negative base with a fractional exponent."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


APPLY = {
    Operator.ADD: lambda l, r: l + r,
    Operator.SUBTRACT: lambda l, r: l - r,
    Operator.MULTIPLY: lambda l, r: l * r,
    Operator.DIVIDE: ieee_divide,
    Operator.POWER: ieee_power,
}


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST leaf for a numeric literal."""
    def __init__(self, value):
        self.value = float(value)

    def evaluate(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, Number) and self.value == other.value

    def __repr__(self):
        return f"Number({self.value})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self):
        return evaluate(self)

    def __eq__(self, other):
        return (isinstance(other, BinOp) and self.operator == other.operator
                and self.left == other.left and self.right == other.right)

    def __repr__(self):
        return f"BinOp({self.operator.value!r}, left={self.left}, right={self.right})"


def evaluate(tree):
    """Evaluate an expression tree post-order.

    Uses an explicit stack, so a long chain like 1+1+...+1 (a left-deep tree)
    is not limited by the interpreter's recursion depth.
    """
    values = []
    pending = [(tree, False)]
    while pending:
        node, children_done = pending.pop()
        if isinstance(node, Number):
            values.append(node.value)
        elif children_done:
            right_value = values.pop()
            left_value = values.pop()
            values.append(APPLY[node.operator](left_value, right_value))
        else:
            pending.append((node, True))
            pending.append((node.right, False))
            pending.append((node.left, False))
    return values[0]


# -----------------------------
# Parser (precedence climbing)
# -----------------------------

class ClimbingParser:
    """Recursive-descent parser that threads a minimum precedence through expression()."""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.position = 0
        self.depth = 0

    def peek(self):
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return Tokenizer.END

    def next(self):
        token = self.peek()
        self.position += 1
        return token

    def assert_next(self, kind):
        token = self.next()
        if token.kind == kind:
            return
        if kind == TokenType.RIGHT_PAREN:
            raise E.SyntaxError(f"Expected RightParen actual {token!r}", code="3009",
                                expected="RightParen", actual=repr(token))
        if kind == TokenType.END and token.kind == TokenType.RIGHT_PAREN:
            raise E.SyntaxError("Unmatched RightParen", code="3010",
                                expected="End", actual=repr(token))
        raise E.SyntaxError(f"Expected {Tokenizer.Token(kind)!r} actual {token!r}", code="3014",
                            expected=repr(Tokenizer.Token(kind)), actual=repr(token))

    def primary(self):
        token = self.next()

        # Parenthesized sub-expression
        if token.kind == TokenType.LEFT_PAREN:
            self.depth += 1
            if self.depth > MAX_NESTING:
                raise E.SyntaxError("Expression nested too deeply", code="3026")
            inner_tree = self.expression(0)
            self.assert_next(TokenType.RIGHT_PAREN)
            self.depth -= 1
            return inner_tree

        elif token.kind == TokenType.NUMBER:
            return Number(token.value)

        elif token.kind == TokenType.END:
            raise E.SyntaxError("Unexpected end of input", code="3012",
                                expected="Number or LeftParen", actual="End")
        else:
            raise E.SyntaxError(f"Unexpected token {token!r}", code="3011",
                                expected="Number or LeftParen", actual=repr(token))

    def expression(self, min_precedence):
        current_tree = self.primary()
        while True:
            operator = TOKEN_TO_OPERATOR.get(self.peek().kind)
            # End, RightParen and anything that is not an operator stop the loop
            if operator is None or PRECEDENCE[operator] < min_precedence:
                break
            self.next()
            if operator in RIGHT_ASSOCIATIVE:
                inner_precedence = PRECEDENCE[operator]
            else:
                inner_precedence = PRECEDENCE[operator] + 1
            right_side = self.expression(inner_precedence)
            current_tree = BinOp(current_tree, operator, right_side)
        return current_tree

    def parse(self):
        try:
            tree = self.expression(0)
        except RecursionError:
            # Long "^" chains recurse once per operator
            raise E.SyntaxError("Expression nested too deeply", code="3026")
        self.assert_next(TokenType.END)
        return tree


def parse(tokens):
    """Build the AST for a token list; raises E.SyntaxError."""
    return ClimbingParser(tokens).parse()


def evaluate_tokens(tokens):
    """Parse and evaluate a pre-tokenized sequence (used by the GUI's symbol buffer)."""
    if not tokens:
        raise E.SyntaxError("Empty expression", code="3000")
    final_tree = parse(tokens)
    if debug == True:
        print("Final AST:")
        print(final_tree)
    return evaluate(final_tree)


# -----------------------------
# Result formatting
# -----------------------------

def render(result, decimal_places=None):
    """Format a float for the display.

    Returns:
        (rendered_value, rounding_flag)
    where rounding_flag tells whether digits were cut off.
    """
    if decimal_places is None:
        decimal_places = config_manager.load_setting_value("decimal_places")

    if math.isnan(result):
        return "NaN", False
    if math.isinf(result):
        return ("∞" if result > 0 else "-∞"), False

    if result.is_integer():
        return str(Decimal(int(result))), False

    exact = Decimal(repr(result))
    # Temporary precision boost prevents InvalidOperation in quantize() for long results
    with localcontext() as context:
        context.prec = 128
        rounded = exact.quantize(Decimal(1).scaleb(-max(decimal_places, 0)))
        rounding = rounded != exact
        rendered = format(rounded.normalize(), "f")
    if rendered == "-0":
        rendered = "0"
    return rendered, rounding


# -----------------------------
# Public entry point
# -----------------------------

def calculate(problem, postfix=None):
    """Main API: text -> float, using the configured evaluator.

    Every error leaves as an E.MathError with the equation attached.
    """
    global debug
    settings = config_manager.load_setting_value("all")
    debug = settings.get("debug", False) == True
    if postfix is None:
        postfix = settings.get("postfix_evaluator", False) == True

    try:
        if postfix:
            # PostfixEngine imports this module at load time
            from . import PostfixEngine
            PostfixEngine.debug = debug
            return PostfixEngine.parse_and_eval(problem)

        tokens = Tokenizer.tokenize(problem)
        if debug == True:
            print(tokens)
        return evaluate_tokens(tokens)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    except RecursionError:
        raise E.SyntaxError("Expression nested too deeply", code="3026", equation=problem)
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem) from e


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    try:
        ergebnis = calculate(problem)
    except E.MathError as e:
        print(f"Error {e.code}: {e.message}")
        return
    print(render(ergebnis)[0])


if __name__ == "__main__":
    # Allow running this module directly for quick CLI tests:
    #   python -m Calculator.MathEngine
    test_main()
