"""Core evaluator for the Vhisp interpreter.

Reduces a Value tree against an Environment. Atoms other than symbols and
quoted lists are self-evaluating, symbols are looked up, and S-expressions
are reduced by evaluating their cells and applying the leading function to
the rest.
"""

from __future__ import annotations

import logging

from vhisp import LispValue
from vhisp.types.environment import Environment
from vhisp.types.value import Error, Function, SExpr, Symbol

logger = logging.getLogger(__name__)

NOT_A_FUNCTION = "S-expression Does not start with symbol!"


def evaluate(v: LispValue, env: Environment) -> LispValue:
    """Evaluate `v`, taking ownership of it, and return an owned result."""
    if isinstance(v, Symbol):
        return env.lookup(v)
    if isinstance(v, SExpr):
        return evaluate_sexpr(v, env)
    # Number, Error, Function and QExpr evaluate to themselves
    return v


def evaluate_sexpr(v: SExpr, env: Environment) -> LispValue:
    # Every cell is evaluated before any error check
    for i, cell in enumerate(v.cells):
        v.cells[i] = evaluate(cell, env)

    for i, cell in enumerate(v.cells):
        if isinstance(cell, Error):
            return v.take(i)

    if v.count == 0:
        return v

    # Parenthesised single expressions are transparent
    if v.count == 1:
        return v.take(0)

    f = v.pop(0)
    if not isinstance(f, Function):
        f.destroy()
        v.destroy()
        return Error(NOT_A_FUNCTION)

    logger.debug("applying %s to %s", f.name, v)
    return f(env, v)
