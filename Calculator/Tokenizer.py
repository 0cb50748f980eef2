# Tokenizer.py
"""""
Lexical layer shared by both evaluators.

- tokenize(): raw input string -> list of Token (terminated by End)
- tokenize_symbols(): GUI symbol buffer -> list of Token
- to_text(): token list -> canonical expression string
"""""

import re
from decimal import Decimal
from enum import Enum

from . import error as E


class TokenType(Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    END = "end"


class Token:
    """A single lexical unit. Only NUMBER tokens carry a value."""
    __slots__ = ("kind", "value")

    def __init__(self, kind, value=None):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)

    def __setattr__(self, name, value):
        raise AttributeError("Token is immutable")

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        if self.kind == TokenType.NUMBER:
            return f"Number({self.value})"
        return self.kind.name.title().replace("_", "")


END = Token(TokenType.END)

DIGITS = "0123456789"
DECIMAL_POINT = "."

# Symbol -> token kind. '×' and '÷' are the glyphs the GUI displays.
SYMBOLS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "×": TokenType.STAR,
    "/": TokenType.SLASH,
    "÷": TokenType.SLASH,
    "^": TokenType.CARET,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

OPERATOR_TYPES = (TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH, TokenType.CARET)

_NUMBER_LITERAL = re.compile(r"[0-9]*\.?[0-9]*")


def is_number_symbol(symbol):
    """True for the symbols that accumulate into a numeric literal."""
    return symbol in DIGITS or symbol == DECIMAL_POINT


def parse_number(text):
    """Parse an accumulated digit run into a float.

    Only plain positional literals are accepted ('12', '1.5', '.5', '5.'),
    so float() never sees exponents, 'inf' or 'nan'.
    """
    if not _NUMBER_LITERAL.fullmatch(text) or not any(ch in DIGITS for ch in text):
        raise E.NumberFormatError(text)
    return float(text)


def tokenize(problem):
    """Convert a raw input string into a token list.

    Surrounding whitespace is trimmed; whitespace-only input gives an empty list.
    Whitespace inside the expression only separates numbers.
    """
    text = problem.strip()
    if not text:
        return []

    tokens = []
    str_number = ""

    for position, current_char in enumerate(text):

        # --- Numbers: digits and decimal separator ---
        if is_number_symbol(current_char):
            str_number += current_char
            continue

        # Anything else closes the number currently being read
        if str_number:
            tokens.append(Token(TokenType.NUMBER, parse_number(str_number)))
            str_number = ""

        if current_char.isspace():
            continue

        kind = SYMBOLS.get(current_char)
        if kind is None:
            raise E.SyntaxError(f"Unknown symbol '{current_char}' at position {position}",
                                code="3013", actual=current_char)
        tokens.append(Token(kind))

    if str_number:
        tokens.append(Token(TokenType.NUMBER, parse_number(str_number)))

    tokens.append(END)
    return tokens


def tokenize_symbols(symbols):
    """Tokenize the GUI's symbol buffer (one button symbol per entry)."""
    for symbol in symbols:
        if len(symbol) != 1:
            raise E.SyntaxError(f"Unknown symbol '{symbol}'", code="3013", actual=symbol)
    return tokenize("".join(symbols))


# -----------------------------
# Canonical text form
# -----------------------------

def format_number(value):
    """Plain positional notation; integral values without '.0'."""
    if value.is_integer():
        return str(int(value))
    # repr() gives the shortest round-tripping digits, Decimal removes the exponent
    return format(Decimal(repr(value)), "f")


def to_text(tokens):
    """Render tokens back into an expression string that tokenizes to the same tokens."""
    parts = []
    for token in tokens:
        if token.kind == TokenType.END:
            break
        if token.kind == TokenType.NUMBER:
            parts.append(format_number(token.value))
        elif token.kind in OPERATOR_TYPES:
            parts.append(f" {token.kind.value} ")
        else:
            parts.append(token.kind.value)
    return "".join(parts)
