"""Core components for climan."""

from .config import Config, EnvStyle, RenderSettings, load_config
from .exceptions import ExitCode, InvalidSourceDateEpoch, TargetResolutionError
from .logging import get_logger, setup_logging
from .manpage import (
    render_man_page,
    write_man_page,
    write_man_page_command,
    write_man_page_option,
    write_man_page_options,
    write_man_page_subcommands,
)
from .markup import format_for_man, man_quote, quote_value
from .models import Command, Group, Option, Parser, UsageProvider, resolve_custom_usage

__all__ = [
    "Command",
    "Config",
    "EnvStyle",
    "ExitCode",
    "Group",
    "InvalidSourceDateEpoch",
    "Option",
    "Parser",
    "RenderSettings",
    "TargetResolutionError",
    "UsageProvider",
    "format_for_man",
    "get_logger",
    "load_config",
    "man_quote",
    "quote_value",
    "render_man_page",
    "resolve_custom_usage",
    "setup_logging",
    "write_man_page",
    "write_man_page_command",
    "write_man_page_option",
    "write_man_page_options",
    "write_man_page_subcommands",
]
