"""Indicator commands for PineSage CLI.

Local counterparts of the MCP tools: list, analyze, search and functions.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from pinesage.cli.utils.console import get_console
from pinesage.cli.utils.decorators import handle_errors
from pinesage.cli.utils.formatters import format_complexity, format_line_range


def _open_store(path: str):
    from pinesage.core.indicators import IndicatorStore
    from pinesage.utils.config import Config

    config = Config.load_or_default(Path(path))
    return config, IndicatorStore(config.indicators_path, config.exclude)


@handle_errors
def list_indicators(
    pattern: Optional[str] = typer.Option(
        None, "--pattern", "-p", help="Filter by name (case-insensitive)"
    ),
    path: str = typer.Option(".", "--path", help="Indicators directory"),
) -> None:
    """List indicator files.

    Examples:
      pinesage list
      pinesage list -p rsi --path ./indicators
    """
    console = get_console()
    _, store = _open_store(path)
    names = store.list(pattern)

    if not names:
        console.print("[yellow]No indicator files found.[/yellow]")
        return

    table = Table(title=f"{len(names)} indicator files", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    for i, name in enumerate(names, 1):
        table.add_row(str(i), name)
    console.print(table)


@handle_errors
def analyze(
    name: str = typer.Argument(..., help="Indicator file to analyze"),
    path: str = typer.Option(".", "--path", "-p", help="Indicators directory"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Analyze an indicator file: components, counts and complexity."""
    from pinesage.analysis import analyze as analyze_content
    from pinesage.analysis.output import render_analysis

    _, store = _open_store(path)
    report = analyze_content(store.read(name))

    if json_output:
        typer.echo(json.dumps({"file": name, **report.to_dict()}, indent=2))
        return

    console = get_console()
    console.print(Markdown(render_analysis(name, report)))
    console.print(f"\nComplexity: {format_complexity(report.complexity)}")


@handle_errors
def search(
    term: str = typer.Argument(..., help="Literal text to look for"),
    path: str = typer.Option(".", "--path", "-p", help="Indicators directory"),
    case_sensitive: bool = typer.Option(
        False, "--case-sensitive", "-c", help="Match case exactly"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search all indicator files for a term.

    Examples:
      pinesage search rsi
      pinesage search "ta.ema" --case-sensitive
    """
    from pinesage.analysis import search as search_files

    config, store = _open_store(path)
    matches = search_files(
        store.list(),
        term,
        case_insensitive=not case_sensitive,
        reader=store.read,
        max_matches=config.analysis.max_search_matches,
    )

    if json_output:
        typer.echo(json.dumps([m.to_dict() for m in matches], indent=2))
        return

    console = get_console()
    if not matches:
        console.print(f'[yellow]No matches found for "{escape(term)}"[/yellow]')
        return

    console.print(f'\nFound "[bold]{escape(term)}[/bold]" in {len(matches)} files:\n')
    for match in matches:
        console.print(f"[cyan bold]{escape(match.file)}[/cyan bold]")
        for line in match.lines:
            console.print(f"  [dim]Line {line.number}:[/dim] {escape(line.text)}")
        console.print()


@handle_errors
def functions(
    name: str = typer.Argument(..., help="Indicator file"),
    path: str = typer.Option(".", "--path", "-p", help="Indicators directory"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Extract functions and their bodies from an indicator file."""
    from pinesage.analysis import extract_functions

    config, store = _open_store(path)
    spans = extract_functions(store.read(name), lookahead=config.analysis.function_lookahead)

    if json_output:
        typer.echo(json.dumps([s.to_dict() for s in spans], indent=2))
        return

    console = get_console()
    console.print(f"\n[bold]{len(spans)} functions in {name}[/bold]\n")
    for span in spans:
        console.print(
            f"[cyan bold]{span.name}[/cyan bold] "
            f"[dim]{format_line_range(span.start_line, span.end_line)}[/dim]"
        )
        console.print(
            Syntax(span.code, "javascript", line_numbers=True, start_line=span.start_line)
        )
