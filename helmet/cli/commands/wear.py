"""Wear command implementation"""

import click

from ..decorators import PASSTHROUGH_SETTINGS, resolution_options, with_resolution, with_toolchain
from ..utils.output import console, format_yaml, print_command


@click.command(context_settings=PASSTHROUGH_SETTINGS)
@resolution_options
@click.option('--dry-run', is_flag=True, help='Print the command and configuration without running')
@click.pass_context
@with_toolchain
@with_resolution
def wear(ctx, resolution, dry_run):
    """Run a continuous development session with skaffold dev

    The generated configuration is piped to Skaffold on stdin. Images are
    rebuilt and charts redeployed whenever sources change.

    Examples:

        # Wear the default profile
        helmet wear

        # Wear another profile without cleaning up on exit
        helmet wear --profile staging --option.cleanup=false

        # Override the image of every project matching a pattern
        helmet wear --project.api-*.image.context ./services/api
    """
    service = ctx.obj.skaffold_service
    args = service.dev_args(resolution)

    console.print(
        f"Wearing [blue]{resolution.profile.name}[/blue] helmet"
        + (" [red](dry)[/red]" if dry_run else "")
    )
    print_command(args, dry_run)

    if dry_run:
        format_yaml(resolution.to_yaml())
        return

    result = service.dev(resolution)
    if not result.success:
        console.print(f"[red]skaffold exited with status {result.returncode}[/red]")
        ctx.exit(result.returncode)

