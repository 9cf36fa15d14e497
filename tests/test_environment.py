import pytest

from vhisp.errors import VhispInvalidSymbol
from vhisp.types.environment import Environment
from vhisp.types.value import Error, Number, QExpr, Symbol


@pytest.fixture
def env():
    return Environment()


def test_unbound_symbol(env):
    assert env.lookup(Symbol("foo")) == Error("unbound symbol!")
    assert env.lookup("foo") == Error("unbound symbol!")


def test_bind_then_lookup(env):
    env.bind(Symbol("x"), Number(42))
    assert env.lookup(Symbol("x")) == Number(42)
    assert "x" in env
    assert Symbol("x") in env


def test_rebinding_overwrites_instead_of_duplicating(env):
    env.bind(Symbol("x"), Number(1))
    env.bind(Symbol("x"), Number(2))
    assert len(env) == 1
    assert list(env) == ["x"]
    assert env.lookup(Symbol("x")) == Number(2)


def test_rebinding_destroys_the_old_value(env):
    env.bind("xs", QExpr([Number(1)]))
    old = env.vars["xs"]
    env.bind("xs", Number(0))
    assert old.count == 0


def test_lookup_returns_independent_copies(env):
    env.bind("xs", QExpr([Number(1), Number(2)]))
    first = env.lookup("xs")
    first.pop(0)
    first.add(Number(99))
    second = env.lookup("xs")
    second.destroy()
    assert str(env.lookup("xs")) == "{1 2}"


def test_bind_keeps_a_private_copy(env):
    xs = QExpr([Number(1)])
    env.bind("xs", xs)
    xs.add(Number(2))
    assert str(env.lookup("xs")) == "{1}"
    assert str(xs) == "{1 2}"


def test_update_binds_every_entry(env):
    env.update({"a": Number(1), Symbol("b"): Number(2)})
    assert env.lookup("a") == Number(1)
    assert env.lookup("b") == Number(2)


def test_invalid_key(env):
    with pytest.raises(VhispInvalidSymbol):
        env.bind(1, Number(1))
    with pytest.raises(VhispInvalidSymbol):
        env.lookup(Number(1))


def test_destroy_empties_and_releases(env):
    env.bind("xs", QExpr([Number(1)]))
    stored = env.vars["xs"]
    env.destroy()
    assert len(env) == 0
    assert stored.count == 0
    assert env.lookup("xs") == Error("unbound symbol!")


def test_str(env):
    env.bind("x", Number(1))
    env.bind("xs", QExpr([Number(2)]))
    assert str(env) == "{x: 1, xs: {2}}"
