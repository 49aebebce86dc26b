"""Resolution decorators for CLI commands"""

from functools import wraps
from pathlib import Path
from typing import Callable

import click

from ..context import Context
from ..utils.output import console, print_error
from ...api.exceptions import HelmetError
from ...constants import DEFAULT_FILE, ENV_PREFIX
from ...utils.argv_utils import build_overrides

# Dotted override arguments are not declared options; click leaves them in ctx.args
PASSTHROUGH_SETTINGS = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}


def resolution_options(func: Callable) -> Callable:
    """Add the ``--file`` and ``--profile`` options to a command"""
    func = click.option(
        '-p', '--profile',
        envvar=f"{ENV_PREFIX}_PROFILE",
        help='Profile to resolve (defaults to the profile flagged default)'
    )(func)
    func = click.option(
        '-f', '--file', 'file_path',
        type=click.Path(dir_okay=False, path_type=Path),
        default=DEFAULT_FILE,
        show_default=True,
        envvar=f"{ENV_PREFIX}_FILE",
        help='Descriptor file'
    )(func)
    return func


def with_resolution(func: Callable) -> Callable:
    """Decorator that resolves the descriptor before the command runs

    This decorator:
    1. Parses the extra dotted arguments into CLI overrides
    2. Loads and resolves the descriptor
    3. Passes the result to the command as ``resolution``

    Any helmet error is displayed and the command exits with status 1.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        obj = ctx.ensure_object(Context)

        file_path = kwargs.pop('file_path', None)
        profile = kwargs.pop('profile', None)

        try:
            overrides = build_overrides(list(ctx.args), profile)
        except ValueError as e:
            raise click.UsageError(str(e), ctx)

        try:
            resolution = obj.resolution_service.resolve(file_path, overrides)
        except HelmetError as e:
            print_error(e)
            ctx.exit(1)

        if obj.verbose or obj.debug:
            console.print(f"[dim]Profile: {resolution.profile.name}[/dim]")

        kwargs['resolution'] = resolution
        return func(*args, **kwargs)

    return wrapper


def with_toolchain(func: Callable) -> Callable:
    """Decorator that checks kubectl, helm and skaffold before running

    Dry runs skip the check since nothing is executed.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        obj = ctx.ensure_object(Context)

        if not kwargs.get('dry_run'):
            try:
                obj.toolchain_checker.ensure()
            except HelmetError as e:
                print_error(e)
                ctx.exit(1)

        return func(*args, **kwargs)

    return wrapper
