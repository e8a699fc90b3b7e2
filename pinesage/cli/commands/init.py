"""Init command for PineSage CLI."""

from pathlib import Path
from typing import Optional

import typer

from pinesage.cli.utils.console import get_console, print_success, print_warning
from pinesage.cli.utils.decorators import handle_errors


@handle_errors
def init(
    path: str = typer.Argument(".", help="Indicators directory"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Project name"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create .pinesage/config.yaml in an indicators directory."""
    from pinesage.utils.config import Config, initialize_project

    console = get_console()
    indicators_path = Path(path).resolve()

    existing = Config.load_or_default(indicators_path)
    if existing.config_file.exists() and not force:
        print_warning(f"Already initialized: {existing.config_file}")
        console.print("[dim]Use --force to overwrite.[/dim]")
        raise typer.Exit(0)

    config = initialize_project(indicators_path, project_name=name)
    print_success(f"Initialized {config.project_name}")
    console.print(f"  [dim]Config:[/dim] {config.config_file}")
