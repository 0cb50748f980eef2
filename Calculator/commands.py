# commands.py
"""""
Command layer for front ends that talk to the engine by command name
(e.g. a webview bridge). Results and errors come back as plain values, never
as exceptions.
"""""

from . import MathEngine
from . import PostfixEngine
from . import error as E


def parse_and_eval(inp):
    """Evaluate with the postfix engine; returns the float or the error message string."""
    try:
        return PostfixEngine.parse_and_eval(inp)
    except E.MathError as e:
        return e.message


def calculate(inp):
    """Evaluate with the configured engine; returns the float or the error message string."""
    try:
        return MathEngine.calculate(inp)
    except E.MathError as e:
        return e.message


COMMANDS = {
    "parse_and_eval": PostfixEngine.parse_and_eval,
    "calculate": MathEngine.calculate,
}


def invoke(command, args):
    """Dispatch a command by name.

    Returns {"result": value} on success or {"error": message, "code": code, "equation": inp}.
    """
    handler = COMMANDS.get(command)
    if handler is None:
        return {"error": f"Unknown command: {command}", "code": "9999"}

    inp = args.get("inp")
    if not isinstance(inp, str):
        return {"error": "Missing argument 'inp'", "code": "9999"}

    try:
        return {"result": handler(inp)}
    except E.MathError as e:
        e.equation = inp
        return {"error": e.message, "code": e.code, "equation": e.equation}
