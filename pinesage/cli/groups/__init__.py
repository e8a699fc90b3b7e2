"""Command groups for PineSage CLI."""

from pinesage.cli.groups import mcp

__all__ = ["mcp"]
