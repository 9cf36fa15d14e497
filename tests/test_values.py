import pytest

from vhisp.errors import VhispTypeError
from vhisp.types.value import (
    INT64_MAX,
    INT64_MIN,
    Error,
    Function,
    Number,
    QExpr,
    SExpr,
    Symbol,
    wrap_int64,
)


def _noop(env, args):
    return args


@pytest.mark.parametrize(
    "value, printed",
    [
        (Number(42), "42"),
        (Number(-7), "-7"),
        (Error("Division By Zero!"), "Error: Division By Zero!"),
        (Symbol("head"), "head"),
        (Function("head", _noop), "<function>"),
        (SExpr(), "()"),
        (QExpr(), "{}"),
        (SExpr([Symbol("+"), Number(1), Number(2)]), "(+ 1 2)"),
        (QExpr([Number(1), QExpr([Number(2), Number(3)]), SExpr()]), "{1 {2 3} ()}"),
    ],
)
def test_printing(value, printed):
    assert str(value) == printed


def test_number_rejects_non_int_payloads():
    with pytest.raises(VhispTypeError):
        Number("1")
    with pytest.raises(VhispTypeError):
        Number(True)
    with pytest.raises(VhispTypeError):
        Number(INT64_MAX + 1)
    assert Number(INT64_MIN).num == INT64_MIN


def test_wrap_int64():
    assert wrap_int64(INT64_MAX + 1) == INT64_MIN
    assert wrap_int64(INT64_MIN - 1) == INT64_MAX
    assert wrap_int64(-5) == -5
    assert wrap_int64(2**64 + 3) == 3


def test_add_takes_values_only():
    q = QExpr()
    assert q.add(Number(1)) is q
    with pytest.raises(VhispTypeError):
        q.add(1)


def test_copy_is_deep_and_independent():
    original = QExpr([Number(1), SExpr([Symbol("x"), QExpr([Number(2)])])])
    clone = original.copy()
    assert clone == original
    assert clone is not original

    clone[1][1].add(Number(3))
    clone.pop(0)
    assert str(original) == "{1 (x {2})}"
    assert str(clone) == "{(x {2 3})}"


def test_pop_shifts_remaining_cells():
    s = SExpr([Number(1), Number(2), Number(3)])
    assert s.pop(1) == Number(2)
    assert str(s) == "(1 3)"
    assert s.count == 2


def test_take_destroys_the_rest():
    inner = QExpr([Number(9)])
    s = SExpr([Number(1), inner, Number(3)])
    taken = s.take(0)
    assert taken == Number(1)
    assert s.count == 0
    assert inner.count == 0


def test_destroy_releases_children_recursively():
    inner = QExpr([Number(1), Number(2)])
    outer = SExpr([inner])
    outer.destroy()
    assert outer.count == 0
    assert inner.count == 0


def test_relabelling_moves_cells():
    s = SExpr([Number(1), Number(2)])
    q = s.as_qexpr()
    assert isinstance(q, QExpr)
    assert str(q) == "{1 2}"
    assert s.count == 0
    assert str(q.as_sexpr()) == "(1 2)"


def test_equality_is_by_variant_and_payload():
    assert SExpr([Number(1)]) != QExpr([Number(1)])
    assert Symbol("a") == Symbol("a")
    assert Symbol("a") != Error("a")
    assert Function("x", _noop) == Function("y", _noop)
    assert Function("x", _noop) != Function("x", lambda env, a: a)


def test_is_error():
    assert Error("boom").is_error
    assert not Number(1).is_error
    assert not QExpr([Error("boom")]).is_error
