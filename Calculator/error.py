


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class NumberFormatError(MathError):
    """A digit run that is not a valid floating-point literal."""
    def __init__(self, text, code="3008", equation=None):
        super().__init__(f"Invalid number: '{text}'", code=code, equation=equation)
        self.text = text

class SyntaxError(MathError):
    """Token stream does not match the grammar. Carries what was expected and what was found."""
    def __init__(self, message, code="3011", equation=None, expected=None, actual=None):
        super().__init__(message, code=code, equation=equation)
        self.expected = expected
        self.actual = actual

class EvaluationError(MathError):
    pass










Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3000" : "Empty expression.",
    "3008" : "Invalid number (e.g. more than one '.' in one number).",
    "3009" : "Missing ')'. ",
    "3010" : "Missing '('. ",
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Unexpected end of input.",
    "3013" : "Unknown symbol: ", # + Symbol
    "3014" : "Unexpected input after the expression: ", # + Token
    "3020" : "Insufficient operands.",
    "3021" : "Too many operands.",
    "3022" : "Unknown operator in postfix stream: ", # + Token
    "3026" : "Expression nested too deeply.",


    "4002" : "Calculation already Running!",
    "4501" : "Not all Settings could be saved: ", # + Error raising setting


    "9999" : "Unexpected Error: " #+error
}
