"""
Shared utilities for command implementations.
"""

from pathlib import Path
from typing import Optional

import click

from ..core.config import EnvStyle, RenderSettings, load_config
from ..core.logging import get_logger
from ..core.manpage import render_man_page
from ..core.models import Parser
from ..utils.output import print_success, write_text_file

logger = get_logger(__name__)


def build_settings(
    section: Optional[str] = None,
    env_style: Optional[str] = None,
) -> RenderSettings:
    """Render settings from environment and config file, with CLI overrides."""
    return RenderSettings.from_environ(
        config=load_config(),
        section=section,
        env_style=EnvStyle.parse(env_style) if env_style else None,
    )


def emit_page(parser: Parser, settings: RenderSettings, output: Optional[str]) -> None:
    """Render the page fully, then write it to output or stdout.

    Rendering happens before anything is written, so a failed render
    never leaves a truncated file behind.
    """
    page = render_man_page(parser, settings)

    if output:
        write_text_file(Path(output), page)
        logger.info(f"Wrote {output}")
        print_success(f"Wrote {output}")
    else:
        click.echo(page, nl=False)
