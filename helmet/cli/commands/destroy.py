"""Destroy command implementation"""

import click

from ..decorators import PASSTHROUGH_SETTINGS, resolution_options, with_resolution, with_toolchain
from ..utils.output import console, print_command
from ...constants import EMOJI_ERROR, EMOJI_SUCCESS


@click.command(context_settings=PASSTHROUGH_SETTINGS)
@resolution_options
@click.option('--with-namespace', is_flag=True, help='Also delete the namespace of each release')
@click.option('--dry-run', is_flag=True, help='Print the commands without running')
@click.pass_context
@with_toolchain
@with_resolution
def destroy(ctx, resolution, with_namespace, dry_run):
    """Delete every Helm release of a profile

    Each release is purged with helm delete. Failures are reported and
    the remaining releases are still processed.

    Examples:

        # Remove the releases of the default profile
        helmet destroy

        # Remove releases and their namespaces
        helmet destroy --profile review --with-namespace
    """
    service = ctx.obj.skaffold_service

    console.print(
        f"Destroying [blue]{resolution.profile.name}[/blue] helmet"
        + (" [red](dry)[/red]" if dry_run else "")
    )

    result = service.destroy(resolution, with_namespace=with_namespace, dry_run=dry_run)

    for command in result.commands:
        if not command.executed:
            print_command(command.args, dry_run=True)
        elif command.success:
            console.print(f"[green]{EMOJI_SUCCESS}[/green] {command.command_line}", soft_wrap=True)
        else:
            console.print(f"[red]{EMOJI_ERROR} {command.command_line} failed[/red]", soft_wrap=True)

    if not result.success:
        console.print(f"\n[red]{len(result.failed)} command(s) failed[/red]")
        ctx.exit(1)
