import pytest

from vhisp.debug_utils.pprint import (
    COLOR_ERROR,
    COLOR_NUMBER,
    DEFAULT_OPTIONS,
    PLAIN_OPTIONS,
    RESET,
    colorize,
    pprint_value,
)
from vhisp.types.value import Error, Function, Number, QExpr, SExpr, Symbol


VALUES = [
    Number(3),
    Error("unbound symbol!"),
    Symbol("x"),
    Function("head", lambda env, a: a),
    SExpr([Symbol("+"), Number(1), QExpr([Number(2), SExpr()])]),
]


@pytest.mark.parametrize("value", VALUES)
def test_plain_output_matches_str(value):
    assert pprint_value(value, PLAIN_OPTIONS) == str(value)


def test_colour_wraps_atoms():
    assert colorize(Number(3)) == f"{COLOR_NUMBER}3{RESET}"
    assert colorize(Error("x")) == f"{COLOR_ERROR}Error: x{RESET}"


def test_colour_can_be_disabled_per_kind():
    options = {**DEFAULT_OPTIONS, "color_numbers": False}
    assert colorize(Number(3), options) == "3"


def test_nested_lists_keep_structure():
    text = pprint_value(QExpr([Number(1), SExpr([Number(2)])]), DEFAULT_OPTIONS)
    plain = text
    for code in ("\033[93m", "\033[96m", RESET):
        plain = plain.replace(code, "")
    assert plain == "{1 (2)}"
