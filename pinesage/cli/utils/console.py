"""Shared rich consoles for PineSage CLI output."""

from rich.console import Console

_console = Console()
_stderr_console = Console(stderr=True)
_mcp_stdio_mode = False


def set_mcp_stdio_mode(enabled: bool) -> None:
    """Send all console output to stderr.

    Needed while the MCP server owns stdout for its JSON-RPC stream.
    """
    global _mcp_stdio_mode
    _mcp_stdio_mode = enabled


def get_console() -> Console:
    """Console for regular output (stderr in MCP stdio mode)."""
    return _stderr_console if _mcp_stdio_mode else _console


def get_stderr_console() -> Console:
    return _stderr_console


def print_error(message: str) -> None:
    _stderr_console.print(f"[red]✗ {message}[/red]")


def print_warning(message: str) -> None:
    get_console().print(f"[yellow]⚠ {message}[/yellow]")


def print_success(message: str) -> None:
    get_console().print(f"[green]✓ {message}[/green]")
