"""Adapters that build climan models from CLI frameworks."""

from .click import ClickUsage, from_click

__all__ = ["ClickUsage", "from_click"]
