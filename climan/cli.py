#!/usr/bin/env python3
"""
climan - man pages for command-line programs

Renders groff man(7) pages from click applications or hand-built
climan Parser models.

Usage:
    climan generate myapp.cli:main > myapp.1
    climan generate myapp.cli:main -o man/myapp.1
    climan man

For more information: climan --help
"""

import click

from . import __version__
from .commands.generate import generate
from .commands.man import man
from .core.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="climan")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v, -vv, -vvv)")
@click.option("-q", "--quiet", is_flag=True, help="Suppress output except errors")
@click.option("--json-errors", is_flag=True, help="Output errors as JSON for CI integration")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool, json_errors: bool) -> None:
    """Generate man pages for command-line programs.

    Reads a command tree (a click application or a climan Parser) and
    writes it out as a groff man page with NAME, SYNOPSIS, DESCRIPTION,
    OPTIONS and COMMANDS sections.

    \b
    Verbosity:
      -v       INFO level (pages written)
      -vv      DEBUG level (sections as they are rendered)
      -vvv     TRACE level (every option)
      -q       Quiet mode (errors only)

    \b
    Examples:
      climan generate myapp.cli:main > myapp.1
      SOURCE_DATE_EPOCH=1700000000 climan generate myapp.cli:main -o myapp.1
      climan man | man -l -
    """
    ctx.ensure_object(dict)
    ctx.obj["verbosity"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json_errors"] = json_errors
    setup_logging(verbose, quiet)


# Register commands
cli.add_command(generate)
cli.add_command(man)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
