# helmet/cli/main.py
"""Main CLI entry point for helmet"""

import sys
import logging

import click
from rich.logging import RichHandler

from .context import Context
from .utils.output import console
from ..constants import APP_NAME, LOG_FORMAT

# Import all commands
from .commands import (
    wear,
    deploy,
    destroy,
    skaffold,
    doctor,
    version
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Helmet - Skaffold configuration from deployment profiles

    Projects, images and Helm chart deployments are described once in
    helmet.yaml under named profiles. Helmet resolves a profile, applies
    command line overrides and hands the result to Skaffold.

    Any command resolving a profile accepts dotted overrides:

        --option.<name>=value
        --metadata.<path>=value
        --project.<pattern>.<field>=value
        --<param>=value
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.ensure_object(Context)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(wear.wear)
cli.add_command(deploy.deploy)
cli.add_command(destroy.destroy)
cli.add_command(skaffold.skaffold)
cli.add_command(doctor.doctor)
cli.add_command(version.version)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
