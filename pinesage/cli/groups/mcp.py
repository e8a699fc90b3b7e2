"""MCP command group for PineSage CLI.

Provides commands for running and configuring the MCP server
for AI IDE integration.
"""

import asyncio
import json
from pathlib import Path

import typer
from rich.panel import Panel
from rich.syntax import Syntax

from pinesage.cli.utils.console import (
    get_console,
    print_error,
    print_success,
    set_mcp_stdio_mode,
)
from pinesage.cli.utils.decorators import handle_errors

app = typer.Typer(help="MCP server for AI IDE integration")


@app.command("serve")
@handle_errors
def serve(
    path: str = typer.Argument(".", help="Indicators directory"),
    transport: str = typer.Option(
        None,
        "--transport",
        "-t",
        help="Transport type: stdio (single client) or sse (HTTP, multi-client)",
    ),
    host: str = typer.Option(
        None,
        "--host",
        help="Host for SSE transport (default: localhost)",
    ),
    port: int = typer.Option(
        None,
        "--port",
        "-p",
        help="Port for SSE transport (default: 8080)",
    ),
) -> None:
    """Start the MCP server.

    Command-line options override values saved in .pinesage/config.yaml.

    Examples:

      pinesage mcp serve ./indicators

      pinesage mcp serve -t sse -p 8080
    """
    from pinesage.mcp import check_mcp_available
    from pinesage.utils.config import Config
    from pinesage.utils.logging import setup_logging

    check_mcp_available()

    from pinesage.mcp.server import PineSageMCPServer

    console = get_console()
    config = Config.load_or_default(Path(path))
    transport = transport or config.server.transport
    host = host or config.server.host
    port = port or config.server.port

    # Validate transport
    if transport not in ["stdio", "sse"]:
        print_error(f"Invalid transport: {transport}. Must be 'stdio' or 'sse'.")
        raise typer.Exit(1)

    # Keep stdout clean for the JSON-RPC stream
    if transport == "stdio":
        set_mcp_stdio_mode(True)

    setup_logging(
        level=config.logging.level,
        json_format=config.logging.json_format,
        log_file=config.logging.log_file,
    )

    if transport == "sse":
        console.print(
            Panel(
                f"[bold]Project:[/bold] {config.project_name}\n"
                f"[bold]Path:[/bold] {config.indicators_path}\n"
                f"[bold]Transport:[/bold] {transport}\n"
                f"[bold]Endpoint:[/bold] http://{host}:{port}/sse",
                title="PineSage MCP Server",
                border_style="cyan",
            )
        )

    try:
        server = PineSageMCPServer(config)

        if transport == "stdio":
            asyncio.run(server.run_stdio())
        else:
            asyncio.run(server.run_sse(host=host, port=port))

    except KeyboardInterrupt:
        if transport == "sse":
            console.print("\n[yellow]Server stopped by user[/yellow]")
    except Exception as e:
        print_error(f"Server error: {e}")
        raise typer.Exit(1)


@app.command("setup")
@handle_errors
def setup(
    path: str = typer.Argument(".", help="Indicators directory"),
    transport: str = typer.Option(
        "stdio",
        "--transport",
        "-t",
        help="Transport type: stdio or sse",
    ),
    port: int = typer.Option(
        8080,
        "--port",
        "-p",
        help="Port for SSE transport",
    ),
) -> None:
    """Show MCP server configuration for your AI IDE.

    Examples:

      pinesage mcp setup ./indicators

      pinesage mcp setup -t sse -p 8080
    """
    from pinesage.mcp.tools import TOOL_SPECS

    console = get_console()
    indicators_path = Path(path).resolve()

    console.print(
        Panel(
            f"[bold]Server:[/bold] pinesage\n"
            f"[bold]Indicators:[/bold] {indicators_path}\n"
            f"[bold]Transport:[/bold] {transport}",
            title="PineSage MCP Server Setup",
            border_style="green",
        )
    )
    console.print()

    if transport == "stdio":
        mcp_config = {
            "mcpServers": {
                "pinesage": {
                    "command": "pinesage",
                    "args": ["mcp", "serve", str(indicators_path)],
                }
            }
        }
        console.print("[bold]Add this to your AI IDE's MCP configuration:[/bold]\n")
        console.print(Syntax(json.dumps(mcp_config, indent=2), "json", theme="monokai"))
    else:
        endpoint = f"http://localhost:{port}/sse"
        console.print("[bold]1. Start the server:[/bold]")
        console.print(f"   [cyan]pinesage mcp serve {indicators_path} -t sse -p {port}[/cyan]\n")
        console.print("[bold]2. Configure your AI IDE with this endpoint:[/bold]")
        console.print(f"   [cyan]{endpoint}[/cyan]\n")
        sse_config = {"mcpServers": {"pinesage": {"url": endpoint}}}
        console.print(Syntax(json.dumps(sse_config, indent=2), "json", theme="monokai"))

    console.print()
    console.print(f"[bold]Available tools ({len(TOOL_SPECS)}):[/bold]")
    for spec in TOOL_SPECS:
        console.print(f"  [cyan]{spec.name}[/cyan]  [dim]{spec.description}[/dim]")
    console.print()
    console.print("[dim]Verify with: pinesage mcp test[/dim]")


@app.command("test")
@handle_errors
def test(
    path: str = typer.Argument(".", help="Indicators directory"),
) -> None:
    """Smoke-test every tool against an indicators directory.

    Examples:

      pinesage mcp test

      pinesage mcp test ./indicators
    """
    from pinesage.core.indicators import IndicatorStore
    from pinesage.mcp.tools import IndicatorTools
    from pinesage.utils.config import Config

    console = get_console()
    config = Config.load_or_default(Path(path))
    tools = IndicatorTools(config)

    console.print("[cyan]Testing MCP tools...[/cyan]\n")

    indicators = IndicatorStore(config.indicators_path, config.exclude).list()
    sample = indicators[0] if indicators else None

    calls = [("list_indicators", {})]
    if sample:
        calls += [
            ("analyze_indicator", {"indicatorName": sample}),
            ("extract_functions", {"indicatorName": sample}),
        ]
    calls.append(("search_indicators", {"searchTerm": "plot", "caseInsensitive": True}))

    failed = 0
    for name, arguments in calls:
        result = tools.dispatch(name, arguments)
        first_line = result.text.splitlines()[0] if result.text else ""
        if result.is_error:
            failed += 1
            print_error(f"{name}: {first_line}")
        else:
            print_success(f"{name}: {first_line}")

    if not sample:
        console.print("\n[yellow]No indicator files found; file tools were skipped.[/yellow]")

    if failed:
        print_error(f"{failed} of {len(calls)} tools failed")
        raise typer.Exit(1)
    console.print(f"\n[green]All {len(calls)} tool calls succeeded[/green]")
