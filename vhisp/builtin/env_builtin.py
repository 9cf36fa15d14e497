"""Built-in functions for the Vhisp runtime environment.

Every builtin has the signature ``fn(env, args) -> Value``. `args` is an
already-evaluated SExpr that the builtin owns: it either repurposes cells
into its result or destroys them, and callers must not touch `args`
afterwards. Failures are returned as Error values, never raised.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from vhisp import config
from vhisp.evaluation.evaluator import evaluate
from vhisp.types.environment import Environment
from vhisp.types.value import Error, Function, Number, QExpr, SExpr, Value, wrap_int64

logger = logging.getLogger(__name__)

NON_NUMBER = "Cannot operate on non-number!"
DIVISION_BY_ZERO = "Division By Zero!"
UNKNOWN_OPERATOR = "Unknown Symbol!"


def _fail(a: SExpr, message: str) -> Error:
    a.destroy()
    return Error(message)


# -------------------------------
# Integer primitives
# -------------------------------
def c_div(x: int, y: int) -> int:
    """Integer division truncating toward zero."""
    if y == 0:
        raise ZeroDivisionError(DIVISION_BY_ZERO)
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


def c_mod(x: int, y: int) -> int:
    """Remainder with the sign of the dividend, so that x == c_div(x, y) * y + c_mod(x, y)."""
    return x - c_div(x, y) * y


def power(x: int, y: int) -> int:
    """x ** y by repeated squaring, wrapping at 64 bits after each multiply.

    Negative exponents give the truncated integer reciprocal.
    """
    if y < 0:
        if x == 0:
            raise ZeroDivisionError(DIVISION_BY_ZERO)
        if x == 1:
            return 1
        if x == -1:
            return 1 if y % 2 == 0 else -1
        return 0
    result = 1
    while y > 0:
        if y % 2 == 1:
            result = wrap_int64(result * x)
        x = wrap_int64(x * x)
        y //= 2
    return result


def _pow_step(x: int, y: int) -> int:
    return power(x, y)


def _pow_step_faithful(x: int, y: int) -> int:
    # accumulates rather than replaces: (^ 2 3) is 2 + 2**3
    return x + power(x, y)


BINARY_OPS: dict[str, Callable[[int, int], int]] = {
    "add": lambda x, y: x + y,
    "sub": lambda x, y: x - y,
    "mul": lambda x, y: x * y,
    "div": c_div,
    "mod": c_mod,
    "and": lambda x, y: x & y,
    "or": lambda x, y: x | y,
    "pow": _pow_step,
    "min": min,
    "max": max,
}

# Every name the arithmetic family answers to, mapped to its canonical op
OPERATOR_ALIASES: dict[str, str] = {
    "+": "add", "add": "add",
    "-": "sub", "sub": "sub",
    "*": "mul", "mul": "mul",
    "/": "div", "div": "div",
    "%": "mod", "mod": "mod",
    "&": "and", "and": "and",
    "|": "or", "or": "or",
    "^": "pow", "pow": "pow", "exp": "pow",
    "<": "min", "min": "min",
    ">": "max", "max": "max",
}

# Unary forms that negate a single argument
NEGATING_NAMES = frozenset({"-", "sub"})


# -------------------------------
# Arithmetic
# -------------------------------
def builtin_op(
    env: Environment,
    a: SExpr,
    op: str,
    ops: Optional[dict[str, Callable[[int, int], int]]] = None,
    negators: frozenset[str] = NEGATING_NAMES,
) -> Value:
    """Fold the operator named `op` left-to-right over the Number arguments in `a`.

    A single argument is negated when `op` is one of `negators`.
    """
    if ops is None:
        ops = BINARY_OPS
    for cell in a:
        if not isinstance(cell, Number):
            return _fail(a, NON_NUMBER)
    if a.count == 0:
        return _fail(a, f"Function '{op}' passed no arguments!")

    canonical = OPERATOR_ALIASES.get(op)
    step = ops.get(canonical) if canonical else None

    x = a.pop(0)
    if op in negators and a.count == 0:
        x = Number(wrap_int64(-x.num))

    while a.count > 0:
        y = a.pop(0)
        if step is None:
            return _fail(a, UNKNOWN_OPERATOR)
        try:
            x = Number(wrap_int64(step(x.num, y.num)))
        except ZeroDivisionError:
            return _fail(a, DIVISION_BY_ZERO)

    a.destroy()
    return x


def make_arithmetic(op: str, faithful: bool = False) -> Callable[[Environment, SExpr], Value]:
    """Resolve `op` once into a builtin closure."""
    if faithful:
        ops = dict(BINARY_OPS, pow=_pow_step_faithful)
        # only the literal "-" negates, so (sub 5) is 5
        negators = frozenset({"-"})
    else:
        ops, negators = BINARY_OPS, NEGATING_NAMES

    def arithmetic(env: Environment, a: SExpr) -> Value:
        return builtin_op(env, a, op, ops, negators)

    arithmetic.__name__ = f"builtin_op[{op}]"
    return arithmetic


# -------------------------------
# List operations
# -------------------------------
def builtin_list(env: Environment, a: SExpr) -> Value:
    """(list a b ...) -> {a b ...}"""
    return a.as_qexpr()


def builtin_head(env: Environment, a: SExpr) -> Value:
    """(head {a b ...}) -> {a}"""
    if a.count != 1:
        return _fail(a, "Function 'head' passed too many arguments!")
    if not isinstance(a[0], QExpr):
        return _fail(a, "Function 'head' passed incorrect type!")
    if a[0].count == 0:
        return _fail(a, "Function 'head' passed {}!")

    v = a.take(0)
    while v.count > 1:
        v.pop(1).destroy()
    return v


def builtin_tail(env: Environment, a: SExpr) -> Value:
    """(tail {a b ...}) -> {b ...}"""
    if a.count != 1:
        return _fail(a, "Function 'tail' passed too many arguments!")
    if not isinstance(a[0], QExpr):
        return _fail(a, "Function 'tail' passed incorrect type!")
    if a[0].count == 0:
        return _fail(a, "Function 'tail' passed {}!")

    v = a.take(0)
    v.pop(0).destroy()
    return v


def builtin_eval(env: Environment, a: SExpr) -> Value:
    """(eval {expr ...}) evaluates the quoted list as an S-expression."""
    if a.count != 1:
        return _fail(a, "Function 'eval' passed too many arguments!")
    if not isinstance(a[0], QExpr):
        return _fail(a, "Function 'eval' passed incorrect type!")

    x = a.take(0)
    return evaluate(x.as_sexpr(), env)


def _join(x: QExpr, y: QExpr) -> QExpr:
    while y.count:
        x.add(y.pop(0))
    y.destroy()
    return x


def builtin_join(env: Environment, a: SExpr) -> Value:
    """(join {a} {b c} ...) -> {a b c ...}"""
    for cell in a:
        if not isinstance(cell, QExpr):
            return _fail(a, "Function 'join' passed incorrect type.")
    if a.count == 0:
        return QExpr()

    x = a.pop(0)
    while a.count:
        x = _join(x, a.pop(0))
    a.destroy()
    return x


def builtin_len(env: Environment, a: SExpr) -> Value:
    """(len {a b c}) -> 3"""
    if a.count != 1:
        return _fail(a, "Function 'len' passed too many arguments!")
    if not isinstance(a[0], QExpr):
        return _fail(a, "Function 'len' passed incorrect type!")

    v = a.take(0)
    count = v.count
    v.destroy()
    return Number(count)


# -------------------------------
# Registration
# -------------------------------
def builtins(mode: Optional[str] = None) -> dict[str, Value]:
    """Return the name -> Function table for `mode` ('corrected' or 'faithful')."""
    faithful = config.get_mode(mode) == "faithful"

    table: dict[str, Value] = {
        "list": Function("list", builtin_list),
        "head": Function("head", builtin_head),
        "tail": Function("tail", builtin_tail),
        "eval": Function("eval", builtin_eval),
        "join": Function("join", builtin_join),
        # faithful mode keeps the historical binding of len to join
        "len": Function("len", builtin_join if faithful else builtin_len),
    }
    for name in OPERATOR_ALIASES:
        table[name] = Function(name, make_arithmetic(name, faithful))
    return table


def register(env: Environment, mode: Optional[str] = None) -> None:
    table = builtins(mode)
    logger.debug("registering %d builtins", len(table))
    env.update(table)
