# Core aliases for Vhisp's data model.
#
# Every runtime datum is one of the Value variants in vhisp.types.value
# (Number, Error, Symbol, Function, SExpr, QExpr). Code and data share the
# same representation: the reader's syntax tree is converted into a Value
# tree and the evaluator reduces it in place.

from typing import Any

__version__ = "0.5"

# Evaluated or evaluable Value; Any keeps signatures readable at call sites
LispValue = Any
