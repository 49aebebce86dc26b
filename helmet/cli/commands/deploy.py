"""Deploy command implementation"""

import click

from ..decorators import PASSTHROUGH_SETTINGS, resolution_options, with_resolution, with_toolchain
from ..utils.output import console, format_yaml, print_command


@click.command(context_settings=PASSTHROUGH_SETTINGS)
@resolution_options
@click.option('--dry-run', is_flag=True, help='Print the command and configuration without running')
@click.pass_context
@with_toolchain
@with_resolution
def deploy(ctx, resolution, dry_run):
    """Build and deploy once with skaffold deploy

    Examples:

        # Deploy the ci profile, pushing images to a registry
        helmet deploy --profile ci --option.repository=registry.example.com/team

        # Inspect what would be deployed
        helmet deploy --dry-run
    """
    service = ctx.obj.skaffold_service
    args = service.deploy_args(resolution)

    console.print(
        f"Deploying [blue]{resolution.profile.name}[/blue] helmet"
        + (" [red](dry)[/red]" if dry_run else "")
    )
    print_command(args, dry_run)

    if dry_run:
        format_yaml(resolution.to_yaml())
        return

    result = service.deploy(resolution)
    if not result.success:
        console.print(f"[red]skaffold exited with status {result.returncode}[/red]")
        ctx.exit(result.returncode)
