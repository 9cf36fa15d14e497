"""Tagged runtime values for Vhisp.

Every datum the interpreter manipulates is an instance of one of the Value
variants below. Lists (SExpr, QExpr) own their cells exclusively: a cell is
never referenced from two parents, and anything handed across an ownership
boundary (for instance in or out of an Environment) is deep-copied.
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import Callable, Iterable, Iterator, Optional

from vhisp.errors import VhispTypeError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(n: int) -> int:
    """Reduce an unbounded Python int to the signed 64-bit range (two's complement)."""
    n &= (1 << 64) - 1
    return n - (1 << 64) if n > INT64_MAX else n


def in_int64(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX


class Value:
    """Base class of all Vhisp values."""

    __slots__ = ()

    def copy(self) -> Value:
        """Return a deep, independent clone."""
        raise NotImplementedError

    def destroy(self) -> None:
        """Release owned children. Atoms own nothing."""

    @property
    def is_error(self) -> bool:
        return False


class Number(Value):
    __slots__ = ("num",)

    def __init__(self, num: int):
        if isinstance(num, bool) or not isinstance(num, int):
            raise VhispTypeError(f"Number expects an int, got {type(num).__name__}")
        if not in_int64(num):
            raise VhispTypeError(f"Number {num} is outside the 64-bit range")
        self.num = num

    def copy(self) -> Number:
        return Number(self.num)

    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.num == other.num

    def __hash__(self) -> int:
        return hash(("num", self.num))

    def __repr__(self):
        return f"Number({self.num})"

    def __str__(self):
        return str(self.num)


class Error(Value):
    __slots__ = ("err",)

    def __init__(self, message: str):
        if not isinstance(message, str):
            raise VhispTypeError(f"Error expects a str, got {type(message).__name__}")
        self.err = message

    @property
    def is_error(self) -> bool:
        return True

    def copy(self) -> Error:
        return Error(self.err)

    def __eq__(self, other) -> bool:
        return isinstance(other, Error) and self.err == other.err

    def __hash__(self) -> int:
        return hash(("err", self.err))

    def __repr__(self):
        return f"Error({self.err!r})"

    def __str__(self):
        return f"Error: {self.err}"


class Symbol(Value):
    __slots__ = ("sym",)

    def __init__(self, name: str):
        if not isinstance(name, str):
            raise VhispTypeError(f"Symbol expects a str, got {type(name).__name__}")
        # Intern to ensure fast equality/hash
        self.sym = sys.intern(name)

    def copy(self) -> Symbol:
        return Symbol(self.sym)

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.sym == other.sym

    def __hash__(self) -> int:
        return hash(self.sym)

    def __repr__(self):
        return f"Symbol({self.sym!r})"

    def __str__(self):
        return self.sym


class Function(Value):
    """Reference to one of the fixed builtins. Not constructible from source text."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable):
        if not callable(fn):
            raise VhispTypeError(f"Function expects a callable, got {type(fn).__name__}")
        self.name = name
        self.fn = fn

    def __call__(self, env, args: SExpr) -> Value:
        return self.fn(env, args)

    def copy(self) -> Function:
        return Function(self.name, self.fn)

    def __eq__(self, other) -> bool:
        return isinstance(other, Function) and self.fn is other.fn

    def __hash__(self) -> int:
        return hash(self.fn)

    def __repr__(self):
        return f"Function({self.name!r})"

    def __str__(self):
        return "<function>"


class Expr(Value):
    """Shared machinery for SExpr and QExpr: an owned, ordered list of cells."""

    __slots__ = ("cells",)

    OPEN = "("
    CLOSE = ")"

    def __init__(self, cells: Optional[Iterable[Value]] = None):
        self.cells: list[Value] = []
        for cell in cells or ():
            self.add(cell)

    def add(self, child: Value) -> Expr:
        """Append `child`, taking ownership of it. Returns self for chaining."""
        if not isinstance(child, Value):
            raise VhispTypeError(f"Cannot add {type(child).__name__} to {type(self).__name__}")
        self.cells.append(child)
        return self

    def pop(self, i: int) -> Value:
        """Remove and return cell `i`; the caller now owns it."""
        return self.cells.pop(i)

    def take(self, i: int) -> Value:
        """Pop cell `i` and destroy the rest of the list."""
        x = self.pop(i)
        self.destroy()
        return x

    def destroy(self) -> None:
        # Children first, then the list itself
        for cell in self.cells:
            cell.destroy()
        self.cells.clear()

    def copy(self) -> Expr:
        return type(self)(cell.copy() for cell in self.cells)

    def _move_into(self, cls: type) -> Expr:
        moved = cls()
        moved.cells, self.cells = self.cells, []
        return moved

    def as_qexpr(self) -> QExpr:
        """Relabel as a QExpr, moving the cells (self is left empty)."""
        return self._move_into(QExpr)

    def as_sexpr(self) -> SExpr:
        """Relabel as an SExpr, moving the cells (self is left empty)."""
        return self._move_into(SExpr)

    @property
    def count(self) -> int:
        return len(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, i: int) -> Value:
        return self.cells[i]

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and self.cells == other.cells

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.cells!r})"

    def __str__(self):
        with StringIO() as buffer:
            buffer.write(self.OPEN)
            buffer.write(" ".join(str(cell) for cell in self.cells))
            buffer.write(self.CLOSE)
            return buffer.getvalue()


class SExpr(Expr):
    """An expression pending evaluation."""

    __slots__ = ()


class QExpr(Expr):
    """A quoted literal list; never evaluated until forced with `eval`."""

    __slots__ = ()

    OPEN = "{"
    CLOSE = "}"
