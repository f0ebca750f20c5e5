"""
Configuration for climan.

Two layers:
- Config: .climan.yaml from project root or home directory. Values
  provide defaults that can be overridden by CLI options.
- RenderSettings: everything a single render needs from the outside
  world (clock, SOURCE_DATE_EPOCH, environment variable style), so the
  renderer itself never touches process state.
"""

import os
import re
import sys
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional

import yaml

from .exceptions import InvalidSourceDateEpoch

SOURCE_DATE_EPOCH = "SOURCE_DATE_EPOCH"
_EPOCH_RE = re.compile(r"[+-]?[0-9]+")

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class EnvStyle(Enum):
    """How environment variable fallbacks are spelled in the page."""
    POSIX = "posix"      # $NAME
    WINDOWS = "windows"  # %NAME%

    @classmethod
    def host(cls) -> "EnvStyle":
        return cls.WINDOWS if sys.platform.startswith("win") else cls.POSIX

    @classmethod
    def parse(cls, value: str) -> "EnvStyle":
        """Parse 'posix', 'windows' or 'auto' (host platform)."""
        value = value.strip().lower()
        if value == "auto":
            return cls.host()
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown env style: {value!r} (expected auto, posix or windows)"
            ) from None


@dataclass
class ConfigPage:
    """Page settings from config file."""
    section: str = "1"
    default_usage: str = "[OPTIONS]"
    env_style: str = "auto"


@dataclass
class Config:
    """Loaded configuration."""
    page: ConfigPage = field(default_factory=ConfigPage)
    source_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict, source_path: Optional[Path] = None) -> "Config":
        """Create Config from parsed YAML dict."""
        config = cls(source_path=source_path)

        if "page" in data and isinstance(data["page"], dict):
            page = data["page"]
            config.page.section = str(page.get("section", config.page.section))
            config.page.default_usage = page.get("default_usage", config.page.default_usage)
            config.page.env_style = page.get("env_style", config.page.env_style)

        return config


# Global cached config
_cached_config: Optional[Config] = None


def load_config(path: Optional[Path] = None, use_cache: bool = True) -> Config:
    """Load .climan.yaml from project root or home.

    Search order:
    1. Explicit path if provided
    2. .climan.yaml in current directory
    3. .climan.yaml in parent directories (up to git root or /)
    4. ~/.climan.yaml in home directory

    Args:
        path: Explicit path to config file
        use_cache: Whether to use cached config (default True)

    Returns:
        Loaded Config, or default Config if no file found
    """
    global _cached_config

    if use_cache and _cached_config is not None:
        return _cached_config

    config_path = None

    if path and path.exists():
        config_path = path
    else:
        search_dir = Path.cwd()
        while search_dir != search_dir.parent:
            candidate = search_dir / ".climan.yaml"
            if candidate.exists():
                config_path = candidate
                break
            # Stop at git root
            if (search_dir / ".git").exists():
                break
            search_dir = search_dir.parent

        if config_path is None:
            home_config = Path.home() / ".climan.yaml"
            if home_config.exists():
                config_path = home_config

    if config_path is None:
        config = Config()
    else:
        try:
            data = yaml.safe_load(config_path.read_text())
            config = Config.from_dict(data or {}, source_path=config_path)
        except (yaml.YAMLError, OSError) as e:
            # Log warning but return defaults
            import logging
            logging.getLogger("climan.core.config").warning(
                f"Failed to load config from {config_path}: {e}"
            )
            config = Config()

    if use_cache:
        _cached_config = config

    return config


def clear_config_cache() -> None:
    """Clear the cached config (useful for testing)."""
    global _cached_config
    _cached_config = None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RenderSettings:
    """Inputs to a render that do not come from the command tree.

    Attributes:
        section: Manual section shown in the .TH line
        default_usage: Synopsis used when the parser has no usage string
        env_style: Spelling of environment variable fallbacks
        source_date_epoch: Raw SOURCE_DATE_EPOCH value, if set
        clock: Returns the current time when no override is set
    """
    section: str = "1"
    default_usage: str = "[OPTIONS]"
    env_style: EnvStyle = field(default_factory=EnvStyle.host)
    source_date_epoch: Optional[str] = None
    clock: Callable[[], datetime] = _utc_now

    @classmethod
    def from_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        config: Optional[Config] = None,
        **overrides,
    ) -> "RenderSettings":
        """Build settings from the process environment and config file.

        Keyword overrides (typically CLI options) win over config values.
        An empty SOURCE_DATE_EPOCH counts as unset.

        Raises:
            TypeError: If an override does not name a settings field
        """
        unknown = sorted(set(overrides) - {f.name for f in fields(cls)})
        if unknown:
            raise TypeError(f"Unknown render setting(s): {', '.join(unknown)}")

        environ = os.environ if environ is None else environ
        config = config or Config()

        settings = cls(
            section=config.page.section,
            default_usage=config.page.default_usage,
            env_style=EnvStyle.parse(config.page.env_style),
            source_date_epoch=environ.get(SOURCE_DATE_EPOCH) or None,
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(settings, key, value)
        return settings

    def page_date(self) -> datetime:
        """Timestamp for the page header.

        Raises:
            InvalidSourceDateEpoch: If the override is not an integer
        """
        if self.source_date_epoch is None:
            return self.clock()
        if not _EPOCH_RE.fullmatch(self.source_date_epoch):
            raise InvalidSourceDateEpoch(self.source_date_epoch)
        try:
            return datetime.fromtimestamp(int(self.source_date_epoch), timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidSourceDateEpoch(self.source_date_epoch) from None


def format_page_date(when: datetime) -> str:
    """Format a date as '2 January 2006'."""
    return f"{when.day} {_MONTHS[when.month - 1]} {when.year}"
