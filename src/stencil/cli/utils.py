"""
stencil CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform
import shutil

import typer

from stencil._version import get_version
from stencil.core.environment import get_environment_info


def configure_logging(verbose: bool) -> None:
    """Send stencil's log records to stderr; debug level with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        stencil_version = get_version()

        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        env_info = get_environment_info()
        git_path = shutil.which(str(env_info["git"]))
        timeout = env_info["fetch_timeout"]

        typer.echo(f"stencil version {stencil_version}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo("")
        typer.echo("Tools:")
        typer.echo(f"  git:           {git_path or '✗ Not found (' + str(env_info['git']) + ')'}")
        typer.echo(f"  Fetch timeout: {f'{timeout:g}s' if timeout else 'none'}")

        raise typer.Exit()
