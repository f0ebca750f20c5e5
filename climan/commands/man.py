"""
climan man - Render climan's own manual page.

Usage:
    climan man
    climan man -o man/climan.1
"""

import sys
from typing import Optional

import click

from ..adapters.click import from_click
from ..utils.output import handle_error
from .utils import build_settings, emit_page


@click.command("man")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the page to FILE instead of stdout")
@click.pass_context
def man(ctx: click.Context, output: Optional[str]) -> None:
    """Render the climan manual page."""
    root = ctx.find_root()
    json_errors = (root.obj or {}).get("json_errors", False)

    try:
        parser = from_click(root.command, name="climan")
        emit_page(parser, build_settings(), output)
    except Exception as e:
        sys.exit(handle_error(e, json_errors, {"output": output}))
