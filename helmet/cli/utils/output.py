"""Output formatting utilities"""

from typing import List

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from ...api.exceptions import HelmetError
from ...constants import EMOJI_ARROW, EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING
from ...core.toolchain import ToolStatus

console = Console()


def print_error(error: HelmetError) -> None:
    """Display every message line of a helmet error"""
    lines = error.messages
    console.print(f"[red]{EMOJI_ERROR} {escape(lines[0])}[/red]", soft_wrap=True)
    for line in lines[1:]:
        console.print(f"  {escape(line)}", soft_wrap=True)


def print_warning(message: str) -> None:
    """Display a warning line"""
    console.print(f"[yellow]{EMOJI_WARNING} {escape(message)}[/yellow]", soft_wrap=True)


def print_command(args: List[str], dry_run: bool = False) -> None:
    """Display a command about to run (or skipped by a dry run)"""
    prefix = "[dim](dry)[/dim] " if dry_run else ""
    console.print(
        f"{prefix}[yellow]{EMOJI_ARROW}[/yellow] [green]{escape(' '.join(args))}[/green]",
        soft_wrap=True
    )


def format_yaml(text: str) -> None:
    """Display YAML text, highlighted when writing to a terminal

    Plain text is written otherwise so the output can be redirected to a
    file and consumed by Skaffold directly.
    """
    if not console.is_terminal:
        click.echo(text, nl=False)
        return

    console.print(Syntax(text, "yaml", theme="monokai", line_numbers=False))


def format_toolchain_table(statuses: List[ToolStatus]) -> Table:
    """Create the toolchain status table

    Args:
        statuses: Results from ToolchainChecker

    Returns:
        Rich Table object
    """
    table = Table(title="Toolchain", box=box.ROUNDED)
    table.add_column("Tool", style="cyan")
    table.add_column("Required")
    table.add_column("Detected")
    table.add_column("Status", justify="center")

    for status in statuses:
        if not status.installed or status.satisfied is False:
            state = f"[red]{EMOJI_ERROR} FAIL[/red]"
        elif status.satisfied is None:
            state = f"[yellow]{EMOJI_WARNING} UNKNOWN[/yellow]"
        else:
            state = f"[green]{EMOJI_SUCCESS} PASS[/green]"

        table.add_row(status.command, status.requirement, status.version or "-", state)

    return table
