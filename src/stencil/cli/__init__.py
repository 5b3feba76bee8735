"""
stencil CLI Package.

- project.py: init command
- utils.py: Shared utilities
"""

import typer

from stencil.cli.project import init_command
from stencil.cli.utils import version_callback

app = typer.Typer(
    help="""stencil – bootstrap projects from templates

  • stencil init -t <template> [PATH]
    → Copy a template into PATH (asks before overwriting files)

  • stencil init [PATH]
    → Create or update stencil.toml and .gitignore only
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """stencil CLI main callback for global options."""
    pass


app.command(name="init")(init_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main", "init_command", "version_callback"]
