# PostfixEngine.py
"""""
Alternative evaluator: shunting-yard conversion to postfix, then a stack machine.

Differences to MathEngine (kept on purpose, both are tested):
- '^' groups to the left like every other operator, so 2^3^2 = (2^3)^2 = 64.
- Operands are popped right side first: x is the right operand, y the left one.
"""""

from . import Tokenizer
from . import MathEngine
from . import error as E
from .Tokenizer import Token, TokenType

# Debug toggle for optional prints in this module
debug = False

# Stack priorities; "(" (0) is a barrier no operator can pop
PRIORITY = {
    TokenType.LEFT_PAREN: 0,
    TokenType.PLUS: 1,
    TokenType.MINUS: 1,
    TokenType.STAR: 2,
    TokenType.SLASH: 2,
    TokenType.CARET: 3,
}


def to_postfix(problem):
    """Convert an infix string into a postfix token list in a single pass."""
    text = problem.strip()
    if not text:
        raise E.SyntaxError("Empty expression", code="3000")

    operator_stack = []
    postfix = []
    cur_num = ""

    def flush_number():
        nonlocal cur_num
        if cur_num:
            postfix.append(Token(TokenType.NUMBER, Tokenizer.parse_number(cur_num)))
            cur_num = ""

    for position, current_char in enumerate(text):
        if Tokenizer.is_number_symbol(current_char):
            cur_num += current_char
            continue

        flush_number()
        if current_char.isspace():
            continue

        kind = Tokenizer.SYMBOLS.get(current_char)
        if kind is None:
            raise E.SyntaxError(f"Unknown symbol '{current_char}' at position {position}",
                                code="3013", actual=current_char)

        if kind == TokenType.LEFT_PAREN:
            operator_stack.append(Token(kind))

        elif kind == TokenType.RIGHT_PAREN:
            while operator_stack and operator_stack[-1].kind != TokenType.LEFT_PAREN:
                postfix.append(operator_stack.pop())
            if not operator_stack:
                raise E.SyntaxError(f"Missing '(' for ')' at position {position}", code="3010",
                                    expected="LeftParen", actual="RightParen")
            operator_stack.pop()

        else:
            incoming = PRIORITY[kind]
            # Equal priority pops too: every operator, '^' included, groups left
            while operator_stack and PRIORITY[operator_stack[-1].kind] >= incoming:
                postfix.append(operator_stack.pop())
            operator_stack.append(Token(kind))

    flush_number()

    while operator_stack:
        token = operator_stack.pop()
        if token.kind == TokenType.LEFT_PAREN:
            raise E.SyntaxError("Missing closing parenthesis ')'", code="3009",
                                expected="RightParen", actual="End")
        postfix.append(token)

    if debug == True:
        print("Postfix: " + " ".join(repr(token) for token in postfix))

    return postfix


def apply_operator(kind, x, y):
    """x was pushed last (right operand), y before it (left operand)."""
    if kind == TokenType.PLUS:
        return x + y
    elif kind == TokenType.STAR:
        return x * y
    elif kind == TokenType.MINUS:
        return y - x
    elif kind == TokenType.SLASH:
        return MathEngine.ieee_divide(y, x)
    elif kind == TokenType.CARET:
        return MathEngine.ieee_power(y, x)
    else:
        raise E.EvaluationError(f"Unknown operator in postfix stream: {kind.value}", code="3022")


def evaluate_postfix(postfix):
    """Drain a postfix token list against an operand stack."""
    stack = []

    for token in postfix:
        if token.kind == TokenType.NUMBER:
            stack.append(token.value)
            continue

        if len(stack) < 2:
            raise E.EvaluationError(f"Insufficient operands for '{token.kind.value}'", code="3020")
        x = stack.pop()
        y = stack.pop()
        stack.append(apply_operator(token.kind, x, y))

    if not stack:
        raise E.EvaluationError("Insufficient operands", code="3020")
    if len(stack) > 1:
        raise E.EvaluationError(f"Too many operands: {len(stack)} values left on the stack", code="3021")
    return stack[0]


def parse_and_eval(inp):
    """Text -> float through the postfix pipeline."""
    return evaluate_postfix(to_postfix(inp))
