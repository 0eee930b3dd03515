"""``m_o.parser``: Reading python literals
=======================================

A recursive descent parser for python-like literal expressions.

The grammar is an ordered choice (see :data:`GRAMMAR`): at any position the
alternatives are considered one after the other and the first one whose
leading token matches the input is used. Once an alternative has recognised
its leading token it commits: if it fails later on the error is reported, we
never go back to try the next alternative. This makes the precedence between
ambiguous forms part of the grammar:

  >>> loads("{}")
  Dict(items=())
  >>> loads("123"), loads("123."), loads("-1e3")
  (Int(value=123), Float(value=123.0), Float(value=-1000.0))

Errors are reported via :class:`ParseError`:

  >>> loads("[1, 2")
  Traceback (most recent call last):
    ...
  m_o.parser.ParseError: missing closing ']' (line 1, column 1)

"""

from __future__ import annotations

import dataclasses
import enum
import re
from typing import Callable, Final, TypeVar

from m_o import utils
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

T = TypeVar("T")

__all__ = (
    "ErrorKind",
    "ParseError",
    "GRAMMAR",
    "parse",
    "loads",
    "parse_number",
    "parse_bool",
    "parse_str",
    "parse_list",
    "parse_tuple",
    "parse_dict",
    "parse_set",
    "parse_constructor",
    "parse_symbol",
)


class ErrorKind(enum.Enum):
    "Why the parser failed"

    #: Nothing in the grammar matches the input at this position.
    UNEXPECTED_CHARACTER = enum.auto()

    #: A string or a bracketed construct is missing its closing delimiter.
    UNTERMINATED_LITERAL = enum.auto()

    #: A backslash in a string isn't followed by a valid escape character.
    INVALID_ESCAPE_SEQUENCE = enum.auto()

    #: We expected an identifier (e.g.: the name of a keyword argument).
    EMPTY_IDENTIFIER = enum.auto()


class ParseError(ValueError):
    """Raised when the input is not a valid literal

    Attributes:
      kind(ErrorKind):
      text(str): The text that was being parsed.
      position(int): The offset in *text* where the error was detected.
    """

    kind: ErrorKind
    text: str
    position: int
    message: str

    def __init__(
        self, kind: ErrorKind, text: str, position: int, message: str
    ) -> None:
        super().__init__(kind, text, position, message)
        self.kind = kind
        self.text = text
        self.position = position
        self.message = message

    @property
    def remaining(self) -> str:
        "The input that wasn't consumed"
        return self.text[self.position :]

    @property
    def lineno(self) -> int:
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        return self.position - self.text.rfind("\n", 0, self.position)

    def __str__(self) -> str:
        return f"{self.message} (line {self.lineno}, column {self.column})"


#: Characters that are allowed after a backslash in a string literal. The
#: digits and ``x`` start octal and hexadecimal escapes.
ESCAPES: Final = frozenset("'\"\\abfnNrtuUv01234567x")

WHITESPACES: Final = frozenset(" \t\n\r")

CLOSING: Final = {"[": "]", "(": ")", "{": "}"}

NUMBER_RE: Final = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def _is_identifier_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_identifier_char(c: str) -> bool:
    return c.isalnum() or c == "_"


Result = tuple[T, int]


@dataclasses.dataclass(slots=True)
class Parser:
    """Parse values out of *text*.

    All the methods take the position where they should start parsing and
    return the parsed value along with the position right after it.
    """

    text: str
    # Positions of the delimiters we are currently inside of. Used to report
    # the right construct when we run out of input.
    opened: list[int] = dataclasses.field(default_factory=list)

    def peek(self, pos: int) -> str | None:
        if pos < len(self.text):
            return self.text[pos]
        return None

    def fail(
        self,
        pos: int,
        message: str,
        kind: ErrorKind = ErrorKind.UNEXPECTED_CHARACTER,
    ) -> ParseError:
        """Build the error for an unexpected character at *pos*.

        Running out of input while inside of brackets means the brackets were
        not closed.
        """
        if pos >= len(self.text):
            if self.opened:
                start = self.opened[-1]
                return ParseError(
                    ErrorKind.UNTERMINATED_LITERAL,
                    self.text,
                    start,
                    f"missing closing {CLOSING[self.text[start]]!r}",
                )
            return ParseError(
                kind, self.text, pos, f"unexpected end of input, {message}"
            )
        return ParseError(
            kind,
            self.text,
            pos,
            f"{message}, found {utils.cram(self.text[pos:], 20)!r}",
        )

    def expect(self, pos: int, c: str) -> int:
        if self.peek(pos) != c:
            raise self.fail(pos, f"expected {c!r}")
        return pos + 1

    def skip_whitespaces(self, pos: int) -> int:
        while self.peek(pos) in WHITESPACES:
            pos += 1
        return pos

    def value(self, pos: int) -> Result[Value]:
        for _, alternative in GRAMMAR:
            res = alternative(self, pos)
            if res is not None:
                return res
        raise self.fail(pos, "expected a value")

    # Alternatives: these return None when their leading token doesn't match
    # the input.

    def number(self, pos: int) -> Result[Value] | None:
        m = NUMBER_RE.match(self.text, pos)
        if m is None:
            return None
        lit = m.group()
        if "." in lit or m.group(1) is not None:
            return Float(float(lit)), m.end()
        return Int(int(lit)), m.end()

    def boolean(self, pos: int) -> Result[Value] | None:
        for keyword, value in (("True", True), ("False", False)):
            if self.text.startswith(keyword, pos):
                end = pos + len(keyword)
                c = self.peek(end)
                if c is None or not _is_identifier_char(c):
                    return Bool(value), end
        return None

    def string(self, pos: int) -> Result[Value] | None:
        quote = self.peek(pos)
        if quote not in ("'", '"'):
            return None
        text = self.text
        cursor = pos + 1
        while cursor < len(text):
            c = text[cursor]
            if c == quote:
                return Str(text[pos : cursor + 1]), cursor + 1
            if c == "\n":
                break
            if c == "\\":
                escaped = self.peek(cursor + 1)
                if escaped is None:
                    break
                if escaped not in ESCAPES:
                    raise ParseError(
                        ErrorKind.INVALID_ESCAPE_SEQUENCE,
                        text,
                        cursor,
                        f"invalid escape sequence '\\{escaped}'",
                    )
                cursor += 2
            else:
                cursor += 1
        raise ParseError(
            ErrorKind.UNTERMINATED_LITERAL,
            text,
            pos,
            f"missing closing {quote}",
        )

    def brackets(self, pos: int) -> Result[Value] | None:
        if self.peek(pos) != "[":
            return None
        items, end = self.delimited(pos, self.value)
        return List(tuple(items)), end

    def parens(self, pos: int) -> Result[Value] | None:
        if self.peek(pos) != "(":
            return None
        items, end = self.delimited(pos, self.value)
        return Tuple(tuple(items)), end

    def braces(self, pos: int) -> Result[Value] | None:
        """Dictionaries and sets.

        Dictionaries have priority: ``{}`` is an empty dictionary. Otherwise
        the first element decides: if it is followed by a ``:`` we are parsing
        a dictionary.
        """
        if self.peek(pos) != "{":
            return None
        if self.peek(pos + 1) == "}":
            return Dict(), pos + 2
        self.opened.append(pos)
        try:
            first, after = self.value(pos + 1)
            if self.peek(after) == ":":
                entry, after = self.dict_value(first, after)
                entries, end = self.sequence(pos, after, [entry], self.entry)
                return Dict(tuple(entries)), end
            elts, end = self.sequence(pos, after, [first], self.value)
            return Set(tuple(elts)), end
        finally:
            self.opened.pop()

    def named(self, pos: int) -> Result[Value] | None:
        "Constructors and symbols"
        c = self.peek(pos)
        if c is None or not _is_identifier_start(c):
            return None
        name, after = self.identifier(pos)
        if self.peek(after) != "(":
            return Symbol(name), after
        kwargs, end = self.delimited(after, self.kwarg)
        return Constructor(name, tuple(kwargs)), end

    # Building blocks

    def identifier(self, pos: int) -> Result[str]:
        c = self.peek(pos)
        if c is None or not _is_identifier_start(c):
            raise self.fail(
                pos, "expected an identifier", ErrorKind.EMPTY_IDENTIFIER
            )
        end = pos + 1
        while (c := self.peek(end)) is not None and _is_identifier_char(c):
            end += 1
        return self.text[pos:end], end

    def entry(self, pos: int) -> Result[tuple[Value, Value]]:
        key, pos = self.value(pos)
        return self.dict_value(key, pos)

    def dict_value(
        self, key: Value, pos: int
    ) -> Result[tuple[Value, Value]]:
        pos = self.skip_whitespaces(self.expect(pos, ":"))
        value, pos = self.value(pos)
        return (key, value), pos

    def kwarg(self, pos: int) -> Result[tuple[str, Value]]:
        key, pos = self.identifier(pos)
        pos = self.expect(pos, "=")
        value, pos = self.value(pos)
        return (key, value), pos

    def delimited(
        self, start: int, item: Callable[[int], Result[T]]
    ) -> Result[list[T]]:
        """Parse the comma separated *item*s of the construct opened at
        *start*."""
        close = CLOSING[self.text[start]]
        if self.peek(start + 1) == close:
            return [], start + 2
        self.opened.append(start)
        try:
            first, pos = item(start + 1)
            return self.sequence(start, pos, [first], item)
        finally:
            self.opened.pop()

    def sequence(
        self,
        start: int,
        pos: int,
        acc: list[T],
        item: Callable[[int], Result[T]],
    ) -> Result[list[T]]:
        "Parse the rest of a sequence once its first element has been read."
        close = CLOSING[self.text[start]]
        while True:
            c = self.peek(pos)
            if c == close:
                return acc, pos + 1
            if c != ",":
                raise self.fail(pos, f"expected ',' or {close!r}")
            pos = self.skip_whitespaces(pos + 1)
            # Trailing comma
            if self.peek(pos) == close:
                return acc, pos + 1
            elt, pos = item(pos)
            acc.append(elt)


Alternative = Callable[[Parser, int], "Result[Value] | None"]

#: The alternatives of the grammar, in the order in which they are tried.
GRAMMAR: Final[tuple[tuple[str, Alternative], ...]] = (
    # Before everything else: a float starts like an int.
    ("number", Parser.number),
    ("bool", Parser.boolean),
    ("str", Parser.string),
    ("list", Parser.brackets),
    ("tuple", Parser.parens),
    # Dictionaries before sets.
    ("dict|set", Parser.braces),
    # Bools were matched above so `True` is never a symbol.
    ("constructor|symbol", Parser.named),
)


def _run(
    production: Callable[[Parser, int], Result[T]], text: str
) -> tuple[T, str]:
    value, end = production(Parser(text), 0)
    return value, text[end:]


def _only(
    name: str, production: Callable[[Parser, int], Result[Value] | None]
) -> Callable[[Parser, int], Result[Value]]:
    def run(parser: Parser, pos: int) -> Result[Value]:
        res = production(parser, pos)
        if res is None:
            raise parser.fail(pos, f"expected {name}")
        return res

    return run


def parse(text: str) -> tuple[Value, str]:
    """Parse a value from the start of *text*

    Returns:
      tuple[Value, str]: The value and the text that follows it.

    Raises:
      ParseError:
    """
    return _run(Parser.value, text)


def loads(text: str) -> Value:
    """Parse *text* as exactly one value.

    Leading and trailing whitespaces are ignored.

    Raises:
      ParseError: if *text* is not a valid value or if there's some text left
        after the value.
    """
    text = text.strip()
    parser = Parser(text)
    value, end = parser.value(0)
    if end != len(text):
        raise parser.fail(end, "expected end of input")
    return value


def parse_number(text: str) -> tuple[Value, str]:
    return _run(_only("a number", Parser.number), text)


def parse_bool(text: str) -> tuple[Value, str]:
    return _run(_only("a boolean", Parser.boolean), text)


def parse_str(text: str) -> tuple[Value, str]:
    return _run(_only("a string", Parser.string), text)


def parse_list(text: str) -> tuple[Value, str]:
    return _run(_only("a list", Parser.brackets), text)


def parse_tuple(text: str) -> tuple[Value, str]:
    return _run(_only("a tuple", Parser.parens), text)


def _dict(parser: Parser, pos: int) -> Result[Value]:
    parser.expect(pos, "{")
    entries, end = parser.delimited(pos, parser.entry)
    return Dict(tuple(entries)), end


def _set(parser: Parser, pos: int) -> Result[Value]:
    parser.expect(pos, "{")
    elts, end = parser.delimited(pos, parser.value)
    return Set(tuple(elts)), end


def parse_dict(text: str) -> tuple[Value, str]:
    return _run(_dict, text)


def parse_set(text: str) -> tuple[Value, str]:
    """Parse a set literal.

    Unlike :func:`parse`, this reads ``{}`` as an empty set.
    """
    return _run(_set, text)


def parse_constructor(text: str) -> tuple[Value, str]:
    def constructor(parser: Parser, pos: int) -> Result[Value]:
        name, after = parser.identifier(pos)
        parser.expect(after, "(")
        kwargs, end = parser.delimited(after, parser.kwarg)
        return Constructor(name, tuple(kwargs)), end

    return _run(constructor, text)


def parse_symbol(text: str) -> tuple[Value, str]:
    def symbol(parser: Parser, pos: int) -> Result[Value]:
        name, end = parser.identifier(pos)
        return Symbol(name), end

    return _run(symbol, text)
