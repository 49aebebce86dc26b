"""Version command"""

import click

from ..utils.output import console
from ...__version__ import get_version
from ...constants import APP_NAME


@click.command()
def version():
    """Show the helmet version"""
    console.print(f"{APP_NAME} {get_version()}")
