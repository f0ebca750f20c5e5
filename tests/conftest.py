"""
Shared fixtures for climan tests.

sample_parser builds a small but complete tree:

    tool [-v] [--config FILE]          (+ builtin Help Options group)
    ├── remote
    │   └── add      (custom usage "NAME URL")
    ├── status       (alias st, --json)
    └── secret       (hidden)
"""

from dataclasses import dataclass

import pytest

from climan.core.config import EnvStyle, RenderSettings, clear_config_cache
from climan.core.models import Option, Parser

# 2023-11-14 22:13:20 UTC
FIXED_EPOCH = "1700000000"
FIXED_DATE = "14 November 2023"


@dataclass
class FixedUsage:
    """Command data that supplies its own usage string."""
    text: str

    def usage(self) -> str:
        return self.text


@pytest.fixture(autouse=True)
def _fresh_config():
    """Never let a cached .climan.yaml leak between tests."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def settings():
    """Deterministic POSIX render settings."""
    return RenderSettings(env_style=EnvStyle.POSIX, source_date_epoch=FIXED_EPOCH)


@pytest.fixture
def sample_parser():
    """Parser with options, a help group, nested and hidden commands."""
    parser = Parser(
        name="tool",
        short_description="Example tool",
        long_description="Use `tool' to do things.",
    )
    root = parser.command
    root.add_option(Option(short_name="v", long_name="verbose", description="Show verbose output"))
    root.add_option(Option(
        long_name="config",
        value_name="FILE",
        default=["a.yaml"],
        env_key="TOOL_CONFIG",
        description="Path to config",
    ))

    help_group = root.add_group("Help Options", is_builtin_help=True)
    help_group.add_option(Option(short_name="h", long_name="help", description="Show this help message"))

    status = root.add_command(
        "status",
        "Show status",
        "The status command prints the `current' state.",
        aliases=["st"],
    )
    status.add_option(Option(long_name="json", description="JSON output"))

    remote = root.add_command("remote", "Manage remotes")
    remote.add_command("add", "Add a remote", data=FixedUsage("NAME URL"))

    secret = root.add_command("secret", "Hidden command", hidden=True)
    secret.add_option(Option(long_name="token", description="Secret token"))

    return parser
