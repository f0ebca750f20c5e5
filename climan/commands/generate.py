"""
climan generate - Render a man page for a click app or Parser model.

Usage:
    climan generate myapp.cli:main
    climan generate myapp.cli:main -o man/myapp.1
    climan generate myapp.docs:PARSER --env-style windows
    SOURCE_DATE_EPOCH=1700000000 climan generate myapp.cli:main
"""

import importlib
import os
import sys
from typing import Any, Optional

import click

from ..adapters.click import from_click
from ..core.exceptions import TargetResolutionError
from ..core.logging import get_logger
from ..core.models import Parser
from ..utils.output import handle_error
from .utils import build_settings, emit_page

logger = get_logger(__name__)


def load_target(target: str, name: Optional[str] = None) -> Parser:
    """Resolve 'module:attribute' to a Parser.

    The attribute may be dotted (module:obj.attr) and must be a click
    command/group or a Parser. The current directory is importable.

    Raises:
        TargetResolutionError: If the module or attribute cannot be loaded
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetResolutionError(target, "expected module:attribute")

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetResolutionError(target, str(e)) from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            raise TargetResolutionError(target, f"no attribute {attr!r}") from None

    if isinstance(obj, Parser):
        return obj
    if isinstance(obj, click.Command):
        return from_click(obj, name=name)

    raise TargetResolutionError(
        target, f"{type(obj).__name__} is neither a click command nor a Parser"
    )


@click.command("generate")
@click.argument("target")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the page to FILE instead of stdout")
@click.option("--name", default=None, help="Program name (click targets only)")
@click.option("--section", default=None, help="Manual section for the title line")
@click.option("--env-style", type=click.Choice(["auto", "posix", "windows"]), default=None,
              help="How environment fallbacks are written")
@click.pass_context
def generate(
    ctx: click.Context,
    target: str,
    output: Optional[str],
    name: Optional[str],
    section: Optional[str],
    env_style: Optional[str],
) -> None:
    """Render a man page for TARGET.

    TARGET is `module:attribute' naming a click command or group, or a
    climan Parser. Honors SOURCE_DATE_EPOCH for reproducible dates.

    \b
    Examples:
      climan generate myapp.cli:main > myapp.1
      climan generate myapp.cli:main -o man/myapp.1
    """
    json_errors = (ctx.obj or {}).get("json_errors", False)

    try:
        parser = load_target(target, name=name)
        emit_page(parser, build_settings(section, env_style), output)
    except Exception as e:
        logger.debug("Generate failed", exc_info=True)
        sys.exit(handle_error(e, json_errors, {"target": target, "output": output}))
