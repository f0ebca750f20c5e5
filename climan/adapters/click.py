"""
Build a climan Parser from a click application.

    from climan.adapters.click import from_click
    parser = from_click(cli, name="mytool")

Mapping:
- click.Option -> Option (short/long names, metavar, default, envvar,
  required, hidden); positional arguments only show up in usage
- the automatic --help option -> a builtin "Help Options" sub-group
- click.Group subcommands -> child Commands, recursively
- usage pieces -> ClickUsage attached as Command.data
"""

import inspect
from dataclasses import dataclass
from typing import Optional

import click

from ..core.logging import get_logger
from ..core.models import Command, Group, Option, Parser

logger = get_logger(__name__)

HELP_GROUP_TITLE = "Help Options"

# click >= 8.3 marks "no default" with a sentinel instead of None
_UNSET = getattr(click.core, "UNSET", None)


@dataclass
class ClickUsage:
    """Usage line for a click command, computed from its parameters."""
    command: click.Command
    ctx: click.Context

    def usage(self) -> str:
        return " ".join(self.command.collect_usage_pieces(self.ctx))


def split_help(command: click.Command) -> tuple[str, str]:
    """Split a command's help into (short, long) descriptions.

    The short description is short_help when set, otherwise the first
    paragraph. The long description is every following paragraph.
    The help is dedented first, as click does before formatting it.
    Click's no-rewrap markers and anything after a form feed are dropped.
    """
    text = inspect.cleandoc(command.help or "").split("\f", 1)[0]
    lines = [line for line in text.splitlines() if line.strip() != "\b"]

    paragraphs: list[list[str]] = [[]]
    for line in lines:
        if line.strip():
            paragraphs[-1].append(line.rstrip())
        elif paragraphs[-1]:
            paragraphs.append([])
    paragraphs = [p for p in paragraphs if p]

    first = " ".join(line.strip() for line in paragraphs[0]) if paragraphs else ""
    rest = "\n\n".join("\n".join(p) for p in paragraphs[1:])

    short = command.short_help or first
    return short, rest


def _option_names(param: click.Option) -> tuple[str, str]:
    short_name = ""
    long_name = ""
    for opt in param.opts:
        if opt.startswith("--"):
            if not long_name:
                long_name = opt[2:]
        elif opt.startswith("-") and len(opt) == 2:
            if not short_name:
                short_name = opt[1]
    return short_name, long_name


def _value_name(param: click.Option) -> str:
    if param.is_flag or param.count:
        return ""
    if param.metavar:
        return param.metavar
    if isinstance(param.type, click.Choice):
        return "[" + "|".join(str(c) for c in param.type.choices) + "]"
    return param.type.name.upper()


def _defaults(param: click.Option) -> list[str]:
    if isinstance(param.show_default, str):
        return [param.show_default]
    if param.is_flag or param.count:
        return []

    default = param.default
    if default is None or default is _UNSET or callable(default):
        return []
    if isinstance(default, (list, tuple)):
        return [str(v) for v in default]
    return [str(default)]


def _env_key(param: click.Option) -> str:
    envvar = param.envvar
    if not envvar:
        return ""
    if isinstance(envvar, (list, tuple)):
        return envvar[0]
    return envvar


def convert_option(param: click.Option) -> Option:
    """Convert one click option."""
    short_name, long_name = _option_names(param)
    optional_argument = bool(getattr(param, "_flag_needs_value", False))

    return Option(
        short_name=short_name,
        long_name=long_name,
        value_name=_value_name(param),
        default=_defaults(param),
        optional_argument=optional_argument,
        optional_value=[str(param.flag_value)] if optional_argument else [],
        required=param.required,
        description=param.help or "",
        env_key=_env_key(param),
        hidden=param.hidden,
    )


def _populate(target: Command, command: click.Command, ctx: click.Context) -> None:
    short, long = split_help(command)
    target.short_description = short
    target.long_description = long
    target.hidden = command.hidden
    target.data = ClickUsage(command, ctx)

    for param in command.params:
        if isinstance(param, click.Option):
            target.add_option(convert_option(param))

    help_option = command.get_help_option(ctx)
    if help_option is not None:
        help_group = target.add_group(HELP_GROUP_TITLE, is_builtin_help=True)
        help_group.add_option(convert_option(help_option))

    if isinstance(command, click.Group):
        for sub_name in command.list_commands(ctx):
            sub = command.get_command(ctx, sub_name)
            if sub is None:
                continue
            logger.debug(f"click command: {ctx.command_path} {sub_name}")
            sub_ctx = click.Context(sub, info_name=sub_name, parent=ctx)
            child = target.add_command(sub_name)
            _populate(child, sub, sub_ctx)


def from_click(command: click.Command, name: Optional[str] = None) -> Parser:
    """Build a Parser describing a click command or group.

    Args:
        command: The click command or group
        name: Program name; defaults to command.name

    Returns:
        Parser whose root command mirrors the click tree
    """
    prog = name or command.name or "cli"
    ctx = click.Context(command, info_name=prog)

    parser = Parser(name=prog)
    _populate(parser.command, command, ctx)

    parser.short_description = parser.command.short_description
    parser.long_description = parser.command.long_description
    parser.usage = parser.command.data.usage()

    logger.info(f"Loaded click command tree for {prog}")
    return parser
