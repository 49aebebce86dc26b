"""Skaffold command implementation"""

import click

from ..decorators import PASSTHROUGH_SETTINGS, resolution_options, with_resolution
from ..utils.output import format_yaml


@click.command(context_settings=PASSTHROUGH_SETTINGS)
@resolution_options
@click.pass_context
@with_resolution
def skaffold(ctx, resolution):
    """Print the generated Skaffold configuration

    The output is plain YAML when redirected, so it can be saved and
    used with skaffold directly.

    Examples:

        helmet skaffold --profile ci > skaffold.yaml
    """
    format_yaml(resolution.to_yaml())
