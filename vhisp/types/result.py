"""Success-or-error wrapper for the evaluation boundary.

Inside the language an Error is an ordinary value that may be stored in lists
and passed around. Host code that only wants to know whether a line
succeeded can ask the Interpreter for a Result instead of inspecting tags.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from vhisp.types.value import Error, Value


@dataclass(frozen=True)
class Ok:
    value: Value

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Value:
        return self.value


@dataclass(frozen=True)
class Err:
    error: Error

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.error.err

    def unwrap(self) -> Value:
        raise ValueError(f"called unwrap on {self.error}")


Result = Union[Ok, Err]


def to_result(value: Value) -> Result:
    """Split a final value into Ok/Err by its tag."""
    if isinstance(value, Error):
        return Err(value)
    return Ok(value)
