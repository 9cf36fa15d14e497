"""Syntax tree -> Value tree conversion."""

from __future__ import annotations

import re

from vhisp.reader.parser import SyntaxNode
from vhisp.types.value import Error, Expr, Number, QExpr, SExpr, Symbol, Value, in_int64

INVALID_NUMBER = "invalid number"
DELIMITERS = frozenset("(){}")

# Integer prefix of a number literal; the fractional part, if any, is ignored
_LEADING_INT = re.compile(r"-?[0-9]+")


def read_number(node: SyntaxNode) -> Value:
    m = _LEADING_INT.match(node.contents)
    if m is None:
        return Error(INVALID_NUMBER)
    n = int(m.group(), 10)
    return Number(n) if in_int64(n) else Error(INVALID_NUMBER)


def _skip(child: SyntaxNode) -> bool:
    return child.contents in DELIMITERS or child.tag == "regex"


def read(node: SyntaxNode) -> Value:
    """Convert a syntax node (and its subtree) into a Value."""
    if "number" in node.tag:
        return read_number(node)
    if "symbol" in node.tag:
        return Symbol(node.contents)

    x: Expr
    if "qexpr" in node.tag:
        x = QExpr()
    else:
        # the root (">") and "sexpr" both read as an S-expression
        x = SExpr()

    for child in node.children:
        if _skip(child):
            continue
        x.add(read(child))
    return x
