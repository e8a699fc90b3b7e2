"""Version command for PineSage CLI."""

from pinesage.cli.utils.console import get_console


def version() -> None:
    """Show PineSage version."""
    from pinesage import __version__

    get_console().print(f"[bold]PineSage[/bold] version {__version__}")
