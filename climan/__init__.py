"""
climan - man pages for command-line programs

Renders a command/option tree as a groff man(7) page, either from a
hand-built Parser model or straight from a click application.
"""

__version__ = "0.1.0"

from .adapters.click import from_click
from .core.config import RenderSettings
from .core.manpage import render_man_page, write_man_page
from .core.models import Command, Group, Option, Parser

__all__ = [
    "Command",
    "Group",
    "Option",
    "Parser",
    "RenderSettings",
    "__version__",
    "from_click",
    "render_man_page",
    "write_man_page",
]
