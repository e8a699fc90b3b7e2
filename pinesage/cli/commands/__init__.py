"""Command modules for PineSage CLI."""

from pinesage.cli.commands.indicators import analyze, functions, list_indicators, search
from pinesage.cli.commands.init import init
from pinesage.cli.commands.version import version

__all__ = [
    "init",
    "list_indicators",
    "analyze",
    "search",
    "functions",
    "version",
]
