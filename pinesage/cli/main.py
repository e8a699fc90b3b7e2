"""PineSage CLI - Main entry point."""

import typer

from pinesage.cli.commands import (
    analyze,
    functions,
    init,
    list_indicators,
    search,
    version,
)
from pinesage.cli.groups import mcp
from pinesage.cli.utils.signals import setup_signal_handlers

# Initialize signal handlers for graceful shutdown
setup_signal_handlers()

app = typer.Typer(
    name="pinesage",
    help="Static analysis tools for TradingView indicator scripts",
    add_completion=False,
    no_args_is_help=True,
)

# ============================================================================
# Commands
# ============================================================================

app.command()(init)
app.command(name="list")(list_indicators)
app.command()(analyze)
app.command()(search)
app.command()(functions)
app.command()(version)

# ============================================================================
# Command Groups
# ============================================================================

app.add_typer(mcp.app, name="mcp")


def _version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from pinesage import __version__
        from pinesage.cli.utils.console import get_console
        get_console().print(f"[bold]PineSage[/bold] version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def _main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Static analysis tools for TradingView indicator scripts."""
    from pinesage.utils.logging import setup_logging

    setup_logging(level="DEBUG" if verbose else "WARNING")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
