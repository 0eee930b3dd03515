"""Pretty printer for python literal expressions"""
from __future__ import annotations

from importlib import metadata

from .parser import ErrorKind, ParseError, loads, parse
from .printer import PrintOptions, reformat, render
from .value import (
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

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version("m-o")

__all__ = (
    "ErrorKind",
    "ParseError",
    "PrintOptions",
    "parse",
    "loads",
    "render",
    "reformat",
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
