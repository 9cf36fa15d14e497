import pytest

from vhisp.builtin.env_builtin import register
from vhisp.evaluation.evaluator import evaluate
from vhisp.interpreter import Interpreter
from vhisp.reader.convert import read
from vhisp.reader.parser import parse
from vhisp.types.environment import Environment

# Interpreter() otherwise reads VHISP_MODE; keep every test on an explicit mode.


@pytest.fixture(autouse=True)
def _clear_mode_env(monkeypatch):
    monkeypatch.delenv("VHISP_MODE", raising=False)


@pytest.fixture
def env():
    """Fresh environment with builtins loaded (corrected mode)."""
    e = Environment()
    register(e, "corrected")
    return e


@pytest.fixture
def faithful_env():
    """Fresh environment with the historical len/^ behaviour."""
    e = Environment()
    register(e, "faithful")
    return e


@pytest.fixture
def interp():
    return Interpreter("corrected")


@pytest.fixture
def run():
    """Evaluate one line of source in a given environment and render the result."""
    def _run(source, environment):
        return str(evaluate(read(parse(source)), environment))
    return _run
