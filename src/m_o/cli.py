"""Command line interface: ``m-o``

Reads a python literal expression and pretty prints it::

  $ echo "[1, {'a': Point(x=1, y=2)}]" | m-o --columns 20
  [
      1,
      {
          'a': Point(
              x=1,
              y=2
          )
      }
  ]

"""

from __future__ import annotations

import sys
from typing import TextIO

import click

from m_o import parser, printer, utils


@click.command()
@click.argument("file", type=click.File("r"), default="-")
@click.option(
    "-i",
    "--indent",
    type=click.IntRange(min=1),
    default=4,
    show_default=True,
    help="The number of spaces used for a single indentation in the output.",
)
@click.option(
    "-c",
    "--columns",
    type=click.IntRange(min=1),
    default=None,
    help=(
        "The width of the terminal or file the result is printed to. "
        "Defaults to the width of the current terminal."
    ),
)
@click.option(
    "--trailing-comma/--no-trailing-comma",
    default=False,
    show_default=True,
    help="Add a comma after the last element of broken containers.",
)
def main(
    file: TextIO, indent: int, columns: int | None, trailing_comma: bool
) -> None:
    """Pretty print a python data expression read from FILE (or stdin)."""
    if columns is None:
        columns = utils.terminal_width()
    options = printer.PrintOptions(
        indent=indent, width=columns, trailing_comma=trailing_comma
    )
    source = file.read()
    try:
        value = parser.loads(source)
        result = printer.render(value, options)
    except parser.ParseError as e:
        click.secho(
            "Error: Could not parse input as Python data expression!",
            fg="red",
            err=True,
        )
        click.echo(f"\t{e.kind.name}: {e}", err=True)
        sys.exit(1)
    except RecursionError:
        click.secho(
            "Error: The input is nested too deeply to be printed.",
            fg="red",
            err=True,
        )
        sys.exit(1)
    click.echo(result)
