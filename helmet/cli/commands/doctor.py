"""Toolchain diagnostic command"""

import click

from ..context import Context
from ..utils.output import console, format_toolchain_table, print_warning


@click.command()
@click.pass_context
def doctor(ctx):
    """Check kubectl, helm and skaffold

    Each tool must be installed and within the supported version range.
    """
    obj = ctx.ensure_object(Context)
    statuses = obj.toolchain_checker.check_all()

    console.print(format_toolchain_table(statuses))

    failed = [status for status in statuses if not status.installed or status.satisfied is False]
    for status in statuses:
        if status not in failed and status.satisfied is None:
            print_warning(status.message)

    if failed:
        for status in failed:
            console.print(f"[red]{status.message}[/red]")
        console.print(f"\n[red]{len(failed)} check(s) failed[/red]")
        ctx.exit(1)

    console.print("\n[green]All checks passed![/green]")
