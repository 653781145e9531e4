"""
CLI Output Utilities

One shared rich console for human output, plus JSON output for --json.
"""

import json
from typing import Any, Iterable

import typer
from rich.console import Console
from rich.table import Table

from .schemas import User


# Console instance for rich output
_console = Console()


def get_console() -> Console:
    """Get the shared console instance."""
    return _console


def echo_json(data: Any) -> None:
    """Print data as indented JSON on stdout."""
    typer.echo(json.dumps(data, indent=2))


def users_table(users: Iterable[User]) -> Table:
    table = Table()
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Roles")
    for user in users:
        table.add_row(str(user.id), user.name, ", ".join(user.roles))
    return table
