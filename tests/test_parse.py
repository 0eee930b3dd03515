from __future__ import annotations

import pytest

from m_o import parser as parse
from m_o.parser import ErrorKind, ParseError, loads
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
)


def test_int():
    assert parse.parse_number("1234") == (Int(1234), "")
    assert parse.parse_number("-1234") == (Int(-1234), "")
    assert loads("-123") == Int(-123)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.456", 123.456),
        ("-1.234", -1.234),
        ("123.0", 123.0),
        ("123.", 123.0),
        (".5", 0.5),
        ("1e5", 1e5),
        ("2.5E-3", 2.5e-3),
        ("-1e+3", -1000.0),
    ],
)
def test_float(text, expected):
    value, rest = parse.parse_number(text)
    assert rest == ""
    assert isinstance(value, Float)
    assert value == Float(expected)


def test_number_stops_at_the_literal():
    assert parse.parse_number("12, 3") == (Int(12), ", 3")
    assert parse.parse_number("1e") == (Int(1), "e")
    assert parse.parse_number("3d_movie") == (Int(3), "d_movie")
    with pytest.raises(ParseError) as exc_info:
        parse.parse_number("-x")
    assert exc_info.value.kind == ErrorKind.UNEXPECTED_CHARACTER


def test_symbol():
    assert parse.parse_symbol("_") == (Symbol("_"), "")
    assert parse.parse_symbol("_123") == (Symbol("_123"), "")
    assert parse.parse_symbol("x86_64") == (Symbol("x86_64"), "")
    assert parse.parse_symbol("été") == (Symbol("été"), "")
    with pytest.raises(ParseError) as exc_info:
        parse.parse_symbol("3d_movie")
    assert exc_info.value.kind == ErrorKind.EMPTY_IDENTIFIER
    assert exc_info.value.position == 0


def test_str():
    assert parse.parse_str('"double quoted"') == (Str('"double quoted"'), "")
    assert parse.parse_str("'single quoted'") == (Str("'single quoted'"), "")
    assert parse.parse_str("''") == (Str("''"), "")
    assert parse.parse_str("'a' 'b'") == (Str("'a'"), " 'b'")
    assert parse.parse_str("'say \"hi\"'") == (Str("'say \"hi\"'"), "")


def test_str_escapes_are_not_decoded():
    src = r"'I hadn\'t seen it.'"
    assert loads(src) == Str(src)
    src = r'"\x41\n\t\\é\N{DASH}\0"'
    assert loads(src) == Str(src)


@pytest.mark.parametrize(
    "text, kind, position",
    [
        ("'abc", ErrorKind.UNTERMINATED_LITERAL, 0),
        ('"abc\'', ErrorKind.UNTERMINATED_LITERAL, 0),
        ("'abc\\", ErrorKind.UNTERMINATED_LITERAL, 0),
        ("'abc\\'", ErrorKind.UNTERMINATED_LITERAL, 0),
        ("'a\\qb'", ErrorKind.INVALID_ESCAPE_SEQUENCE, 2),
        ("'ab\ncd'", ErrorKind.UNTERMINATED_LITERAL, 0),
    ],
)
def test_bad_str(text, kind, position):
    with pytest.raises(ParseError) as exc_info:
        parse.parse_str(text)
    assert exc_info.value.kind == kind
    assert exc_info.value.position == position


def test_bool():
    assert parse.parse_bool("True") == (Bool(True), "")
    assert parse.parse_bool("False") == (Bool(False), "")
    assert loads("Truth") == Symbol("Truth")
    assert loads("False_") == Symbol("False_")
    assert Bool(True) != Int(1)


def test_list():
    assert parse.parse_list("[1, 2, 3]") == (
        List((Int(1), Int(2), Int(3))),
        "",
    )
    assert parse.parse_list("[]") == (List(), "")
    assert loads("[1,2,\n\t3]") == List((Int(1), Int(2), Int(3)))


def test_tuple():
    assert parse.parse_tuple("(1, 2, 3)") == (
        Tuple((Int(1), Int(2), Int(3))),
        "",
    )
    assert loads("()") == Tuple()
    assert loads("(1,)") == Tuple((Int(1),))
    assert loads("(1)") == Tuple((Int(1),))


def test_set():
    assert parse.parse_set("{1, 2, 3}") == (Set((Int(1), Int(2), Int(3))), "")
    assert loads("{1, 2, 3}") == Set((Int(1), Int(2), Int(3)))
    assert loads("{1, 1}") == Set((Int(1), Int(1)))


def test_empty_set():
    assert parse.parse_set("{}") == (Set(), "")


def test_dict():
    assert parse.parse_dict("{1: 2, 'a': 3}") == (
        Dict(((Int(1), Int(2)), (Str("'a'"), Int(3)))),
        "",
    )
    assert loads("{1:2}") == Dict(((Int(1), Int(2)),))
    assert loads("{(1, 2): [3]}") == Dict(
        ((Tuple((Int(1), Int(2))), List((Int(3),))),)
    )


def test_empty_dict_value():
    assert loads("{}") == Dict()
    assert loads("{}") != Set()


def test_dict_or_set():
    assert loads("{{}: {}}") == Dict(((Dict(), Dict()),))
    assert loads("{{}}") == Set((Dict(),))
    with pytest.raises(ParseError) as exc_info:
        loads("{1: 2, 3}")
    assert exc_info.value.kind == ErrorKind.UNEXPECTED_CHARACTER
    assert exc_info.value.remaining == "}"
    with pytest.raises(ParseError) as exc_info:
        loads("{1, 2: 3}")
    assert exc_info.value.remaining == ": 3}"


def test_deeply_nested_sets():
    # Every element is parsed exactly once: this would take forever if we
    # retried the whole content as a set after failing to read a dict.
    depth = 200
    value = loads("{" * depth + "1" + "}" * depth)
    for _ in range(depth):
        assert isinstance(value, Set)
        [value] = value.items
    assert value == Int(1)


def test_constructor():
    assert parse.parse_constructor("MyType(arg1=12, arg2=34)") == (
        Constructor("MyType", (("arg1", Int(12)), ("arg2", Int(34)))),
        "",
    )
    assert loads("Empty()") == Constructor("Empty")
    with pytest.raises(ParseError) as exc_info:
        loads("Dog(1=2)")
    assert exc_info.value.kind == ErrorKind.EMPTY_IDENTIFIER
    assert exc_info.value.position == 4
    with pytest.raises(ParseError) as exc_info:
        loads("Dog(name)")
    assert exc_info.value.kind == ErrorKind.UNEXPECTED_CHARACTER
    assert exc_info.value.remaining == ")"


def test_symbol_is_not_a_constructor():
    assert loads("[None, inf]") == List((Symbol("None"), Symbol("inf")))
    assert parse.parse("Dog (x=1)") == (Symbol("Dog"), " (x=1)")


def test_big_value():
    assert loads("A(qwerty={1, 2, [True, [False, 'abc']]})") == Constructor(
        "A",
        (
            (
                "qwerty",
                Set(
                    (
                        Int(1),
                        Int(2),
                        List(
                            (
                                Bool(True),
                                List((Bool(False), Str("'abc'"))),
                            )
                        ),
                    )
                ),
            ),
        ),
    )


def test_parse_returns_the_rest():
    assert parse.parse("[1] tail") == (List((Int(1),)), " tail")
    assert parse.parse("True)") == (Bool(True), ")")


@pytest.mark.parametrize(
    "text, kind, remaining",
    [
        ("", ErrorKind.UNEXPECTED_CHARACTER, ""),
        ("   ", ErrorKind.UNEXPECTED_CHARACTER, ""),
        ("@", ErrorKind.UNEXPECTED_CHARACTER, "@"),
        ("[1] [2]", ErrorKind.UNEXPECTED_CHARACTER, " [2]"),
        ("[1 2]", ErrorKind.UNEXPECTED_CHARACTER, " 2]"),
        ("[ 1]", ErrorKind.UNEXPECTED_CHARACTER, " 1]"),
        ("[1, 2", ErrorKind.UNTERMINATED_LITERAL, "[1, 2"),
        ("[1, (2, ", ErrorKind.UNTERMINATED_LITERAL, "(2,"),
        ("{1: ", ErrorKind.UNTERMINATED_LITERAL, "{1:"),
        ("Dog(name=", ErrorKind.UNTERMINATED_LITERAL, "(name="),
        ("[1, 'a\\z']", ErrorKind.INVALID_ESCAPE_SEQUENCE, "\\z']"),
    ],
)
def test_errors(text, kind, remaining):
    with pytest.raises(ParseError) as exc_info:
        loads(text)
    assert exc_info.value.kind == kind
    assert exc_info.value.remaining == remaining


def test_error_location():
    with pytest.raises(ParseError) as exc_info:
        loads("[1,\n  2,\n  3 4]")
    err = exc_info.value
    assert (err.lineno, err.column) == (3, 4)
    assert str(err) == "expected ',' or ']', found ' 4]' (line 3, column 4)"
    assert isinstance(err, ValueError)


def test_loads_strips_whitespaces():
    assert loads("  \n[1]\n") == List((Int(1),))


def test_grammar_order():
    assert [name for name, _ in parse.GRAMMAR] == [
        "number",
        "bool",
        "str",
        "list",
        "tuple",
        "dict|set",
        "constructor|symbol",
    ]
