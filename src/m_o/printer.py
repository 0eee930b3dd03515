"""``m_o.printer``: Pretty printing values
========================================

Turns a :class:`~m_o.value.Value` into a :class:`~m_o.pretty.Doc` and renders
it.

Containers are printed on one line when they fit:

  >>> from m_o.parser import loads
  >>> v = loads("[123, 'abc', True, Dog(name='Pip', age=7)]")
  >>> print(render(v))
  [123, 'abc', True, Dog(name='Pip', age=7)]

Otherwise they are broken with one element per line:

  >>> print(render(v, PrintOptions(width=20)))
  [
      123,
      'abc',
      True,
      Dog(
          name='Pip',
          age=7
      )
  ]

"""

from __future__ import annotations

import dataclasses
import math
from typing import Iterable

from m_o import pretty
from m_o.parser import loads
from m_o.value import (
    Bool,
    Constructor,
    Dict,
    Float,
    Int,
    List,
    Set,
    Str,
    Symbol,
    Tuple,
    Value,
)

__all__ = ("PrintOptions", "DEFAULT_OPTIONS", "to_doc", "render", "reformat")


COL_SEP = pretty.text(",") + pretty.LINE


@dataclasses.dataclass(frozen=True, slots=True)
class PrintOptions:
    """How to lay out the values

    Args:
      indent(int): The number of spaces used for one level of indentation.
      width(int): The number of columns we try to fit the output in.
      trailing_comma(bool): Add a comma after the last element of containers
        that are broken over several lines.
    """

    indent: int = 4
    width: int = 80
    trailing_comma: bool = False

    def __post_init__(self) -> None:
        if self.indent <= 0:
            raise ValueError(f"indent must be positive, got {self.indent}")
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")


DEFAULT_OPTIONS = PrintOptions()


def _format_list(
    docs: Iterable[pretty.Doc], opar: str, cpar: str, options: PrintOptions
) -> pretty.Doc:
    body = pretty.join(COL_SEP, docs)
    if body is pretty.EMPTY:
        return pretty.text(opar + cpar)
    if options.trailing_comma:
        closing = pretty.break_with("", ",")
    else:
        closing = pretty.SOFTLINE
    return pretty.group(
        pretty.text(opar)
        + pretty.nest(options.indent, pretty.SOFTLINE + body)
        + closing
        + pretty.text(cpar)
    )


def _float(f: float) -> str:
    if math.isnan(f):
        return "nan"
    # Overflows back to an infinity when parsed
    if math.isinf(f):
        return "1e999" if f > 0 else "-1e999"
    return repr(f)


def to_doc(
    value: Value, options: PrintOptions = DEFAULT_OPTIONS
) -> pretty.Doc:
    """Build the document used to print *value*"""

    def doc(v: Value) -> pretty.Doc:
        match v:
            case Bool(b):
                return pretty.text("True" if b else "False")
            case Int(i):
                return pretty.text(str(i))
            case Float(f):
                return pretty.text(_float(f))
            case Str(s) | Symbol(s):
                return pretty.text(s)
            case List(items):
                return _format_list(map(doc, items), "[", "]", options)
            case Tuple(items):
                return _format_list(map(doc, items), "(", ")", options)
            case Set(items):
                return _format_list(map(doc, items), "{", "}", options)
            case Dict(items):
                return _format_list(
                    (doc(k) + pretty.text(": ") + doc(v) for k, v in items),
                    "{",
                    "}",
                    options,
                )
            case Constructor(name, kwargs):
                return pretty.text(name) + _format_list(
                    (
                        pretty.text(k) + pretty.text("=") + doc(v)
                        for k, v in kwargs
                    ),
                    "(",
                    ")",
                    options,
                )
        raise TypeError(f"Object of type {type(v).__name__} is not a value")

    return doc(value)


def render(value: Value, options: PrintOptions | None = None) -> str:
    """Pretty print *value*

    Args:
      value(Value):
      options(PrintOptions | None): defaults to :data:`DEFAULT_OPTIONS`

    Returns:
      str: The rendered value (without a trailing newline).
    """
    if options is None:
        options = DEFAULT_OPTIONS
    return to_doc(value, options).to_string(options.width)


def reformat(text: str, options: PrintOptions | None = None) -> str:
    """Parse *text* and pretty print it.

      >>> print(reformat("{'a':1,   'b': [True]}"))
      {'a': 1, 'b': [True]}

    Raises:
      ParseError:
    """
    return render(loads(text), options)
