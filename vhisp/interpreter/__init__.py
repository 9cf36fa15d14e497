from __future__ import annotations

import logging
from typing import Literal, Optional

from vhisp import LispValue, config
from vhisp.builtin.env_builtin import register
from vhisp.evaluation.evaluator import evaluate
from vhisp.reader.convert import read
from vhisp.reader.parser import parse
from vhisp.types.environment import Environment
from vhisp.types.result import Result, to_result
from vhisp.types.value import Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading, converting and evaluating Vhisp code.
    Maintains one Environment, populated with the builtins, across calls.
    """

    # Class-level default to avoid env-variable coupling in tests; None defers to config
    DefaultMode: Optional[Literal['corrected', 'faithful']] = None

    def __init__(
        self,
        mode: Optional[Literal['corrected', 'faithful']] = None,
        *,
        filename: str = "<stdin>",
    ):
        self.mode = config.get_mode(mode or self.DefaultMode)
        self.filename = filename
        self.env: Environment = Environment()
        register(self.env, self.mode)
        logger.debug("interpreter ready in %s mode", self.mode)

    def read(self, code: str, line: int = 1) -> Value:
        """Parse `code` and convert it to an (unevaluated) SExpr of its top-level expressions.

        Raises VhispSyntaxError if the code does not parse.
        """
        return read(parse(code, self.filename, line))

    def eval(self, code: str, line: int = 1) -> LispValue:
        """Read and evaluate one line of code, returning the final value.

        A line holding several expressions is one S-expression, exactly as
        if it were wrapped in parentheses.
        """
        return evaluate(self.read(code, line), self.env)

    def eval_result(self, code: str) -> Result:
        """Like eval, but split the outcome into Ok(value) / Err(error)."""
        return to_result(self.eval(code))

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to a copy of `value` in this interpreter's environment."""
        self.env.bind(name, value)

    def close(self) -> None:
        self.env.destroy()
