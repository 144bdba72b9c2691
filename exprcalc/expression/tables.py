"""Constant and function lookup tables.

Tables are immutable mappings injected into the evaluator. Extending one
returns a new table, so a table shared between threads never changes under
a running evaluation.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Generic, Iterator, Mapping, Optional, TypeVar

import numpy as np

from exprcalc.exceptions import InvalidInputError, RegistryError

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

UnaryFunction = Callable[[float], float]

V = TypeVar("V")

# Speed of light in vacuum, m/s
SPEED_OF_LIGHT = 299792458.0


class _LookupTable(Mapping[str, V], Generic[V]):
    """Read-only name -> value mapping."""

    kind = "entry"

    def __init__(self, entries: Optional[Mapping[str, V]] = None):
        self._entries: Dict[str, V] = {}
        for name, value in (entries or {}).items():
            self._entries[self._check_name(name)] = self._check_value(name, value)

    def __getitem__(self, name: str) -> V:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._entries)})"

    def _check_name(self, name: str) -> str:
        if not isinstance(name, str) or not IDENTIFIER_PATTERN.fullmatch(name):
            raise InvalidInputError(
                f"Invalid {self.kind} name '{name}': names must start with a letter "
                "and contain only letters, digits or '_'",
                details={"name": name},
            )
        return name

    def _check_value(self, name: str, value: V) -> V:
        return value

    def with_entry(self, name: str, value: V, replace: bool = False):
        """Return a copy of this table with ``name`` bound to ``value``.

        Raises:
            InvalidInputError: If the name is not a valid identifier
            RegistryError: If the name exists and ``replace`` is False
        """
        name = self._check_name(name)
        if name in self._entries and not replace:
            raise RegistryError(
                f"{self.kind.capitalize()} '{name}' already registered",
                details={"name": name},
            )
        entries = dict(self._entries)
        entries[name] = self._check_value(name, value)
        return type(self)(entries)


class ConstantTable(_LookupTable[float]):
    """Named numeric constants such as ``pi``."""

    kind = "constant"

    def _check_value(self, name: str, value: float) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(
                f"Constant '{name}' must be numeric, got {value!r}",
                details={"name": name},
            ) from e


class FunctionTable(_LookupTable[UnaryFunction]):
    """Named unary float -> float functions such as ``sqrt``."""

    kind = "function"

    def _check_value(self, name: str, value: UnaryFunction) -> UnaryFunction:
        if not callable(value):
            raise InvalidInputError(
                f"Function '{name}' must be callable, got {type(value).__name__}",
                details={"name": name},
            )
        return value

    def call(self, name: str, argument: float) -> float:
        return float(self._entries[name](argument))


def _ufunc(func: np.ufunc) -> UnaryFunction:
    """Wrap a numpy ufunc so domain errors yield NaN/inf as plain floats."""

    def apply(x: float) -> float:
        with np.errstate(all="ignore"):
            return float(func(np.float64(x)))

    apply.__name__ = func.__name__
    return apply


DEFAULT_CONSTANTS = ConstantTable({
    "pi": float(np.pi),
    "e": float(np.e),
    "c": SPEED_OF_LIGHT,
})

DEFAULT_FUNCTIONS = FunctionTable({
    "abs": _ufunc(np.abs),
    "sqrt": _ufunc(np.sqrt),
    "cbrt": _ufunc(np.cbrt),
    "exp": _ufunc(np.exp),
    "ln": _ufunc(np.log),
    "log10": _ufunc(np.log10),
    "log2": _ufunc(np.log2),
    "sin": _ufunc(np.sin),
    "cos": _ufunc(np.cos),
    "tan": _ufunc(np.tan),
    "asin": _ufunc(np.arcsin),
    "acos": _ufunc(np.arccos),
    "atan": _ufunc(np.arctan),
    "sinh": _ufunc(np.sinh),
    "cosh": _ufunc(np.cosh),
    "tanh": _ufunc(np.tanh),
    "asinh": _ufunc(np.arcsinh),
    "acosh": _ufunc(np.arccosh),
    "atanh": _ufunc(np.arctanh),
})
