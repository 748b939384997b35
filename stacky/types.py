"""Runtime values and environment bindings for Stacky.

Values living on the data stack are called entities. Numbers and strings
are represented by plain Python ``int`` and ``str`` objects; pointers into
the data stack and captured word bodies get their own small classes.
Environment entries are either a word (a callable body) or a variable (a
stored entity).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Union

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class Pointer:
    """An address into the data stack."""
    address: int

    def __repr__(self) -> str:
        return f"Pointer({self.address:#x})"


@dataclass
class FunctionVal:
    """A captured word body.

    Function values can be printed and compared, but not called directly:
    calling always goes through a word binding in the environment.
    """
    name: str
    body: List[Any] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"<function {self.name}>"


Entity = Union[int, str, Pointer, FunctionVal]


@dataclass
class WordBinding:
    """Environment entry for a user-defined word."""
    name: str
    body: List[Any]


@dataclass
class VariableBinding:
    """Environment entry for a stored value."""
    value: Any


Binding = Union[WordBinding, VariableBinding]


def is_number(value: Any) -> bool:
    # bool is a subclass of int but never a Stacky number
    return isinstance(value, int) and not isinstance(value, bool)


def type_name(value: Any) -> str:
    """Return the Stacky type name of a runtime value."""
    if is_number(value):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, Pointer):
        return 'Pointer'
    if isinstance(value, FunctionVal):
        return 'Function'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert an entity to the text written by EMIT."""
    if is_number(value):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Pointer):
        return f"#{value.address:x}"
    if isinstance(value, FunctionVal):
        return f"FUNC: {value.name}"
    return str(value)


def entities_equal(a: Any, b: Any) -> bool:
    """Equality used by ``=`` and ``==``.

    Numbers and pointers compare numerically with each other, strings
    compare by text. Every other combination is simply not equal.
    """
    def numeric(v: Any):
        if is_number(v):
            return v
        if isinstance(v, Pointer):
            return v.address
        return None

    left, right = numeric(a), numeric(b)
    if left is not None and right is not None:
        return left == right
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return False
