"""
Groff man page renderer.

Walks a Parser tree and writes a man(7) page:

    .TH / NAME / SYNOPSIS / DESCRIPTION / OPTIONS [/ COMMANDS]

Everything is written straight to the sink as the tree is traversed;
the sink is only ever appended to.
"""

import io
from typing import Optional, TextIO

from .config import EnvStyle, RenderSettings, format_page_date
from .logging import get_logger
from .markup import format_for_man, join_quoted, man_quote
from .models import Command, Group, Option, Parser, resolve_custom_usage

logger = get_logger(__name__)


def write_man_page_option(wr: TextIO, opt: Option, env_style: Optional[EnvStyle] = None) -> None:
    """Write one .TP entry for a visible option.

    env_style defaults to the host platform.
    """
    if not opt.show_in_help():
        return
    env_style = env_style or EnvStyle.host()

    logger.trace(f"option -{opt.short_name} --{opt.long_name}")

    wr.write(".TP\n")
    wr.write("\\fB")

    if opt.short_name:
        wr.write(f"\\fB\\-{opt.short_name}\\fR")

    if opt.long_name:
        if opt.short_name:
            wr.write(", ")
        wr.write(f"\\fB\\-\\-{man_quote(opt.long_name_with_namespace())}\\fR")

    if opt.optional_argument:
        wr.write(
            f" [\\fI{man_quote(opt.value_name)}={man_quote(join_quoted(opt.optional_value))}\\fR]"
        )
    elif opt.value_name:
        wr.write(f" \\fI{man_quote(opt.value_name)}\\fR")

    env_key = opt.env_key_with_namespace()
    if opt.default:
        wr.write(f" <default: \\fI{man_quote(join_quoted(opt.default))}\\fR>")
    elif env_key:
        if env_style is EnvStyle.WINDOWS:
            wr.write(f" <default: \\fI%{man_quote(env_key)}%\\fR>")
        else:
            wr.write(f" <default: \\fI${man_quote(env_key)}\\fR>")

    if opt.required:
        wr.write(" (\\fIrequired\\fR)")

    wr.write("\\fP\n")

    if opt.description:
        format_for_man(wr, opt.description)
        wr.write("\n")


def write_man_page_options(
    wr: TextIO,
    grp: Group,
    settings: Optional[RenderSettings] = None,
) -> None:
    """Write the options of grp and all of its sub-groups.

    A visited group gets an .SS header when it has a short description
    and grp itself has sub-groups.
    """
    settings = settings or RenderSettings()

    def visit(group: Group) -> None:
        if not group.show_in_help():
            return

        if group.short_description and grp.groups:
            logger.debug(f"group: {group.short_description}")
            wr.write(f".SS {group.short_description}\n")

            if group.long_description:
                format_for_man(wr, group.long_description)
                wr.write("\n")

        for opt in group.options:
            write_man_page_option(wr, opt, settings.env_style)

    grp.each_group(visit)


def command_breadcrumb(command: Command) -> str:
    """Space-joined command names from the root command down to command."""
    names = [command.name]
    parent = command.parent_command()
    while parent is not None:
        names.append(parent.name)
        parent = parent.parent_command()
    return " ".join(reversed(names))


def write_man_page_subcommands(
    wr: TextIO,
    name: str,
    root: Command,
    settings: Optional[RenderSettings] = None,
) -> None:
    """Write a section for every visible subcommand of root, recursively."""
    for command in root.sorted_visible_commands():
        if command.hidden:
            continue

        qualified = f"{name} {command.name}" if name else command.name
        write_man_page_command(wr, qualified, command, settings)


def write_man_page_command(
    wr: TextIO,
    name: str,
    command: Command,
    settings: Optional[RenderSettings] = None,
) -> None:
    """Write the .SS section for one command, then its subcommands."""
    settings = settings or RenderSettings()
    logger.debug(f"command: {name}")

    wr.write(f".SS {name}\n")
    wr.write(f"{command.short_description}\n")

    if command.long_description:
        wr.write("\n")

        lead_in = f"The {command.name} command"
        if command.long_description.startswith(lead_in):
            wr.write(f"The \\fB{man_quote(command.name)}\\fP command")
            format_for_man(wr, command.long_description[len(lead_in):])
        else:
            format_for_man(wr, command.long_description)
        wr.write("\n")

    usage = resolve_custom_usage(command)
    if usage is None and command.has_help_options():
        usage = f"[{command.name}-OPTIONS]"

    if usage:
        wr.write(
            f"\n\\fBUsage\\fP: {man_quote(command_breadcrumb(command))} {man_quote(usage)}\n.TP\n"
        )

    if command.aliases:
        wr.write(f"\n\\fBAliases\\fP: {man_quote(', '.join(command.aliases))}\n\n")

    write_man_page_options(wr, command.group, settings)
    write_man_page_subcommands(wr, name, command, settings)


def write_man_page(
    wr: TextIO,
    parser: Parser,
    settings: Optional[RenderSettings] = None,
) -> None:
    """Write a complete man page for parser to wr.

    Raises:
        InvalidSourceDateEpoch: If the date override is malformed. Nothing
            has been written to wr when this is raised.
    """
    settings = settings or RenderSettings()
    date = format_page_date(settings.page_date())

    logger.info(f"Rendering man page for {parser.name} ({date})")

    wr.write(f'.TH {man_quote(parser.name)} {settings.section} "{date}"\n')
    wr.write(".SH NAME\n")
    wr.write(f"{man_quote(parser.name)} \\- {man_quote(parser.short_description)}\n")
    wr.write(".SH SYNOPSIS\n")

    usage = parser.usage or settings.default_usage
    wr.write(f"\\fB{man_quote(parser.name)}\\fP {man_quote(usage)}\n")

    wr.write(".SH DESCRIPTION\n")
    format_for_man(wr, parser.long_description)
    wr.write("\n")

    wr.write(".SH OPTIONS\n")
    write_man_page_options(wr, parser.command.group, settings)

    if parser.visible_commands():
        wr.write(".SH COMMANDS\n")
        write_man_page_subcommands(wr, "", parser.command, settings)


def render_man_page(parser: Parser, settings: Optional[RenderSettings] = None) -> str:
    """Render the man page for parser and return it as a string."""
    buf = io.StringIO()
    write_man_page(buf, parser, settings)
    return buf.getvalue()
