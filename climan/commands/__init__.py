"""Command implementations for climan CLI."""

from .generate import generate
from .man import man

__all__ = ["generate", "man"]
