"""Decorators shared by CLI commands."""

import functools
from typing import Any, Callable, TypeVar

import typer

from pinesage.cli.utils.console import print_error
from pinesage.errors import PineSageError
from pinesage.utils.logging import get_logger

logger = get_logger("cli")

F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(func: F) -> F:
    """Print PineSage errors as one red line and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort):
            raise
        except KeyboardInterrupt:
            print_error("Interrupted")
            raise typer.Exit(130)
        except (PineSageError, ValueError, FileNotFoundError) as e:
            print_error(str(e))
            raise typer.Exit(1)
        except Exception as e:
            logger.debug("Unhandled CLI error", exc_info=True)
            print_error(f"Unexpected error: {e}")
            raise typer.Exit(1)

    return wrapper  # type: ignore[return-value]
