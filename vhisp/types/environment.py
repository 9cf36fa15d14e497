"""Runtime environment for Vhisp.

The Environment maps symbol names to values. It owns a private deep copy of
everything bound into it and only ever hands out deep copies, so a caller can
mutate or destroy whatever it gets back from `lookup` without touching the
stored original.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Iterator, Mapping, Union

from vhisp.errors import VhispInvalidSymbol
from vhisp.types.value import Error, Symbol, Value

logger = logging.getLogger(__name__)

UNBOUND_SYMBOL = "unbound symbol!"

Key = Union[Symbol, str]


def _key(name: Key) -> str:
    if isinstance(name, Symbol):
        return name.sym
    if isinstance(name, str):
        return name
    raise VhispInvalidSymbol(f"Cannot bind {name!r} as a symbol")


class Environment:
    """Flat mapping from symbol names to values."""

    __slots__ = ("vars",)

    def __init__(self):
        self.vars: dict[str, Value] = {}

    def lookup(self, name: Key) -> Value:
        """Return a copy of the value bound to `name`, or Error("unbound symbol!")."""
        stored = self.vars.get(_key(name))
        if stored is None:
            return Error(UNBOUND_SYMBOL)
        return stored.copy()

    def bind(self, name: Key, value: Value) -> None:
        """Bind `name` to a copy of `value`, replacing (and destroying) any previous binding.

        The caller keeps ownership of `value`.
        """
        key = _key(name)
        old = self.vars.get(key)
        if old is not None:
            logger.debug("rebinding %s", key)
            old.destroy()
        self.vars[key] = value.copy()

    def update(self, mapping: Mapping[Key, Value]) -> None:
        """Bulk-bind a mapping of names to values."""
        for k, v in mapping.items():
            self.bind(k, v)

    def destroy(self) -> None:
        """Destroy every stored value and empty the mapping."""
        for v in self.vars.values():
            v.destroy()
        self.vars.clear()

    def __contains__(self, name: Key) -> bool:
        return _key(name) in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {len(self.vars)} bindings>"
