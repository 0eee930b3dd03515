"""``m_o.pretty``: A pretty printing library
=========================================

The library is based on Christian Lindig's "strictly pretty" [`pdf
<https://lindig.github.io/papers/strictly-pretty-2000.pdf>`_] article.

A document is built out of a handful of primitives:

+ :func:`text`: an atomic string,
+ :data:`LINE` and :data:`SOFTLINE`: places where the document can be broken,
+ :func:`nest`: increases the indentation of the lines broken inside of it,
+ :func:`group`: the breaks directly inside of a group are either all turned
  into newlines or all left on the current line.

  >>> doc = group(text("[") + nest(4, SOFTLINE + join(text(",") + LINE,
  ...     [text("1"), text("2")])) + SOFTLINE + text("]"))
  >>> print(doc.to_string(80))
  [1, 2]
  >>> print(doc.to_string(4))
  [
      1,
      2
  ]

"""

# The QuickC-- implementation (https://github.com/nrnrnr/qc--) adds the hgrp,
# vgrp and fgrp group kinds to the article. Our values only ever need the
# "auto" groups so this is all we kept.

from __future__ import annotations

import dataclasses
import enum
import io
from typing import Iterable, TextIO

__all__ = (
    "Doc",
    "EMPTY",
    "LINE",
    "SOFTLINE",
    "text",
    "break_with",
    "nest",
    "group",
    "join",
    "to_string",
)


class Mode(enum.Enum):
    "How the breaks are being laid out"
    FLAT = enum.auto()
    BREAK = enum.auto()


# doc =
# | DocNil
# | DocCons of doc * doc
# | DocText of string
# | DocNest of int * doc
# | DocBreak of string * string
# | DocGroup of doc


class Doc:
    """Type used to represent documents

    This constructor should never be called directly

    Documents can be concatenated via the ``+`` operator.
    """

    __slots__ = ()

    def __add__(self, other: Doc) -> Doc:
        return DocCons(self, other)

    def to_string(self, width: int = 80) -> str:
        """Render this document to a string

        args:
          width(int): The maximum number of columns we try to fit the document
            in.
        """
        return to_string(self, width)


@dataclasses.dataclass(slots=True)
class DocNil(Doc):
    pass


@dataclasses.dataclass(slots=True)
class DocCons(Doc):
    left: Doc
    right: Doc


@dataclasses.dataclass(slots=True)
class DocText(Doc):
    text: str


@dataclasses.dataclass(slots=True)
class DocNest(Doc):
    indent: int
    doc: Doc


@dataclasses.dataclass(slots=True)
class DocBreak(Doc):
    """A potential line break.

    *text* is printed when the break stays on the current line. When the
    break is turned into a newline we print *tail* before the newline.
    """

    text: str
    tail: str = ""


@dataclasses.dataclass(slots=True)
class DocGroup(Doc):
    doc: Doc


#: The empty document
EMPTY: Doc = DocNil()

#: A break that is rendered as a space when it's not turned into a newline.
LINE: Doc = DocBreak(" ")

#: A break that disappears when it's not turned into a newline.
SOFTLINE: Doc = DocBreak("")


def text(s: str) -> Doc:
    """
    Turns a string into a document

    Args:
      s(str)

    Returns:
      Doc:
    """
    return DocText(s)


def break_with(s: str, tail: str = "") -> Doc:
    """A break that is rendered as *s* when flat and as *tail* followed by a
    newline otherwise.

    Args:
      s(str):
      tail(str):

    Returns:
      Doc:
    """
    return DocBreak(s, tail)


def nest(indentation: int, doc: Doc) -> Doc:
    """Increase the indentation level for a document.

    Args:
      indentation(int):
      doc(Doc):

    Returns:
      Doc:
    """
    return DocNest(indentation, doc)


def group(doc: Doc) -> Doc:
    """
    BREAKs inside the group are either all turned into spaces or all turned
    into newlines.

    Args:
      doc(Doc):

    Returns
      Doc:
    """
    return DocGroup(doc)


def join(sep: Doc, docs: Iterable[Doc]) -> Doc:
    """Concatenate *docs* with *sep* in between each of them."""
    acc = EMPTY
    first = True
    for doc in docs:
        if not first:
            acc += sep
        else:
            first = False
        acc += doc
    return acc


# NOTE: The algorithm in the article works on OCaml lists and spends its time
# deconstructing and reconstructing head::tail. Python lists would turn these
# O(1) operations into O(n) operations so we use a linked list instead.
@dataclasses.dataclass(slots=True)
class Frame:
    indent: int
    mode: Mode
    doc: Doc
    succ: Frame | None = None


# let rec fits w = function
#     | _ when w < 0                   -> false
#     | []                             -> true
#     | (i,m,DocNil)              :: z -> fits w z
#     | (i,m,DocCons(x,y))        :: z -> fits w ((i,m,x)::(i,m,y)::z)
#     | (i,m,DocNest(j,x))        :: z -> fits w ((i+j,m,x)::z)
#     | (i,m,DocText(s))          :: z -> fits (w - strlen s) z
#     | (i,Flat, DocBreak(s))     :: z -> fits (w - strlen s) z
#     | (i,Break,DocBreak(_))     :: z -> true
#     | (i,m,DocGroup(x))         :: z -> fits w ((i,Flat,x)::z)


def fits(w: int, frames: Frame | None) -> bool:
    """Does everything up to the next newline fit in *w* columns?"""
    while w >= 0:
        match frames:
            case None:
                return True
            case Frame(_, _, DocNil(), z):
                frames = z
            case Frame(i, m, DocCons(x, y), z):
                frames = Frame(i, m, x, Frame(i, m, y, z))
            case Frame(i, m, DocNest(j, x), z):
                frames = Frame(i + j, m, x, z)
            case Frame(_, _, DocText(s), z):
                w -= len(s)
                frames = z
            case Frame(_, Mode.FLAT, DocBreak(s), z):
                w -= len(s)
                frames = z
            case Frame(_, Mode.BREAK, DocBreak(_, tail), _):
                # The tail is the last thing on the line we are measuring.
                return w >= len(tail)
            case Frame(i, _, DocGroup(x), z):
                frames = Frame(i, Mode.FLAT, x, z)
            case _:  # pragma: no cover
                assert False, frames
    return False


# The article's `format` is written in CPS form to avoid stack overflows.
# CPython does not have tail call optimisation so we use a loop and write
# directly to *out*.
#
# let rec format w k l = match l with
#     | []                             -> SNil
#     | (i,m,DocNil)              :: z -> format w k z
#     | (i,m,DocCons(x,y))        :: z -> format w k ((i,m,x)::(i,m,y)::z)
#     | (i,m,DocNest(j,x))        :: z -> format w k ((i+j,m,x)::z)
#     | (i,m,DocText(s))          :: z -> SText(s, format w (k + strlen s) z)
#     | (i,Flat, DocBreak(s))     :: z -> SText(s, format w (k + strlen s) z)
#     | (i,Break,DocBreak(s))     :: z -> SLine(i, format w i z)
#     | (i,m,DocGroup(x))         :: z -> if fits (w-k) ((i,Flat,x)::z)
#                                         then format w k ((i,Flat ,x)::z)
#                                         else format w k ((i,Break,x)::z)
def format(w: int, k: int, frames: Frame | None, out: TextIO) -> None:
    """Write the documents in *frames* to *out*.

    *w* is the target width and *k* the column we are starting from.
    """
    while frames is not None:
        match frames:
            case Frame(_, _, DocNil(), z):
                frames = z
            case Frame(i, m, DocCons(x, y), z):
                frames = Frame(i, m, x, Frame(i, m, y, z))
            case Frame(i, m, DocNest(j, x), z):
                frames = Frame(i + j, m, x, z)
            case Frame(_, _, DocText(s), z) | Frame(
                _, Mode.FLAT, DocBreak(s), z
            ):
                out.write(s)
                k += len(s)
                frames = z
            case Frame(i, Mode.BREAK, DocBreak(_, tail), z):
                out.write(tail)
                out.write("\n")
                out.write(" " * i)
                k = i
                frames = z
            case Frame(i, _, DocGroup(x), z):
                if fits(w - k, Frame(i, Mode.FLAT, x, z)):
                    frames = Frame(i, Mode.FLAT, x, z)
                else:
                    frames = Frame(i, Mode.BREAK, x, z)
            case _:  # pragma: no cover
                assert False, frames


def to_string(doc: Doc, width: int = 80) -> str:
    """Render *doc* so that it fits in *width* columns if possible."""
    out = io.StringIO()
    format(width, 0, Frame(0, Mode.FLAT, DocGroup(doc)), out)
    return out.getvalue()
