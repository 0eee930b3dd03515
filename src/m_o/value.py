"""``m_o.value``: The value tree
==============================

Values are what :mod:`m_o.parser` produces and what :mod:`m_o.printer`
consumes. There is one frozen dataclass per kind of literal::

  >>> from m_o.parser import loads
  >>> loads("P(x=1)")
  Constructor(name='P', kwargs=(('x', Int(value=1)),))
  >>> loads("['a', 2.5]")
  List(items=(Str(value="'a'"), Float(value=2.5)))

The trees mirror the source text rather than python's semantic: sets are
neither sorted nor deduplicated, dictionaries can have duplicate keys and
strings are kept exactly as they were written (quotes and escapes included).

Converting a value to a string pretty prints it with the default options::

  >>> print(loads("{'a': (1, 2)}"))
  {'a': (1, 2)}

"""

from __future__ import annotations

import dataclasses
import math
import sys
from typing import Any

__all__ = (
    "Value",
    "Bool",
    "Str",
    "Int",
    "Float",
    "Tuple",
    "List",
    "Set",
    "Dict",
    "Constructor",
    "Symbol",
)

# Floats are compared with a tolerance: the printer might spell the same number
# differently than the source did.
FLOAT_REL_TOLERANCE = 1e-12


class Value:
    """Base class of all the nodes of a value tree.

    This class should never be instantiated directly.
    """

    __slots__ = ()

    def __str__(self) -> str:
        from m_o import printer

        return printer.render(self)


@dataclasses.dataclass(slots=True, frozen=True)
class Bool(Value):
    value: bool


@dataclasses.dataclass(slots=True, frozen=True)
class Str(Value):
    """A string literal.

    *value* is the source text of the literal, quotes included. Escape
    sequences are not decoded.
    """

    value: str


@dataclasses.dataclass(slots=True, frozen=True)
class Int(Value):
    value: int


@dataclasses.dataclass(slots=True, frozen=True, eq=False)
class Float(Value):
    value: float

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return math.isclose(
            self.value,
            other.value,
            rel_tol=FLOAT_REL_TOLERANCE,
            abs_tol=sys.float_info.epsilon,
        )

    # Tolerant equality cannot be made consistent with hashing.
    __hash__ = None  # type: ignore[assignment]


@dataclasses.dataclass(slots=True, frozen=True)
class Tuple(Value):
    items: tuple[Value, ...] = ()


@dataclasses.dataclass(slots=True, frozen=True)
class List(Value):
    items: tuple[Value, ...] = ()


@dataclasses.dataclass(slots=True, frozen=True)
class Set(Value):
    items: tuple[Value, ...] = ()


@dataclasses.dataclass(slots=True, frozen=True)
class Dict(Value):
    """A dictionary literal

    The entries are kept in source order. Keys are not hashed so duplicates
    are preserved:

        >>> from m_o.parser import loads
        >>> len(loads("{1: 'a', 1: 'b'}").items)
        2

    Parameters:
        items(tuple[tuple[Value, Value], ...]):
    """

    items: tuple[tuple[Value, Value], ...] = ()


@dataclasses.dataclass(slots=True, frozen=True)
class Constructor(Value):
    """A call with keyword arguments: ``Name(k1=v1, k2=v2)``

    Args:
      name(str): The name of the callee.
      kwargs(tuple[tuple[str, Value], ...]): The keyword arguments, in source
        order.
    """

    name: str
    kwargs: tuple[tuple[str, Value], ...] = ()


@dataclasses.dataclass(slots=True, frozen=True)
class Symbol(Value):
    "A bare identifier"
    name: str
