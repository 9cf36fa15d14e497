from vhisp.types.value import Error, Expr, Function, Number, QExpr, Symbol, Value

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_NUMBER = "\033[96m"
COLOR_SYMBOL = "\033[94m"
COLOR_FUNCTION = "\033[95m"
COLOR_ERROR = "\033[91m"
COLOR_QEXPR = "\033[93m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "color": True,
    "color_numbers": True,
    "color_symbols": True,
    "color_functions": True,
    "color_errors": True,
    "color_qexpr_braces": True,
}

PLAIN_OPTIONS = {**DEFAULT_OPTIONS, "color": False}


def _paint(text: str, color: str, options: dict, key: str) -> str:
    if options.get("color", True) and options.get(key, True):
        return f"{color}{text}{RESET}"
    return text


# ----------------- Colorize utility -----------------
def colorize(value: Value, options: dict = DEFAULT_OPTIONS) -> str:
    """Render an atom; lists are handled by `pprint_value`."""
    if isinstance(value, Number):
        return _paint(str(value), COLOR_NUMBER, options, "color_numbers")
    if isinstance(value, Error):
        return _paint(str(value), COLOR_ERROR, options, "color_errors")
    if isinstance(value, Symbol):
        return _paint(str(value), COLOR_SYMBOL, options, "color_symbols")
    if isinstance(value, Function):
        return _paint(str(value), COLOR_FUNCTION, options, "color_functions")
    return str(value)


# ----------------- Printer -----------------
def pprint_value(value: Value, options: dict = DEFAULT_OPTIONS) -> str:
    """Render `value` the way the REPL prints it, optionally with ANSI colours.

    With colour disabled the output is identical to ``str(value)``.
    """
    if not isinstance(value, Expr):
        return colorize(value, options)

    open_, close = value.OPEN, value.CLOSE
    if isinstance(value, QExpr):
        open_ = _paint(open_, COLOR_QEXPR, options, "color_qexpr_braces")
        close = _paint(close, COLOR_QEXPR, options, "color_qexpr_braces")
    inner = " ".join(pprint_value(cell, options) for cell in value)
    return f"{open_}{inner}{close}"
