"""
Project commands for the stencil CLI.

- init: Initialize a project from a template, or scaffold configuration
  in an existing directory
"""

from __future__ import annotations

from pathlib import Path

import typer

from stencil.cli_ui import (
    RichConsole,
    print_error,
    print_info,
    print_success,
    print_summary,
    print_warning,
)
from stencil.core.environment import get_fetch_timeout
from stencil.core.errors import OverwriteDeclined, StencilError
from stencil.core.init_impl import ProjectInitializer

from .utils import configure_logging


def init_command(
    path: str | None = typer.Argument(
        None, help="Project directory (defaults to the current directory)"
    ),
    template: str | None = typer.Option(
        None,
        "--template",
        "-t",
        help="Template to use: local directory, git URL or owner/repo (omit to only scaffold config)",
    ),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Template branch or tag"),
    name: str | None = typer.Option(
        None, "--name", "-n", help="Project name (defaults to directory name)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing files without asking"
    ),
    no_git: bool = typer.Option(False, "--no-git", help="Skip git repository initialization"),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Seconds to wait for the template fetch (env: STENCIL_FETCH_TIMEOUT)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
) -> None:
    """
    Initialize a stencil project.

    With --template, fetches the template and copies it into the project
    directory, asking before overwriting existing files. Without it, only
    creates or updates stencil.toml and .gitignore.

    Examples:
        stencil init                                  # Scaffold config in current dir
        stencil init ./my-app -t acme/service-template
        stencil init -t ../templates/cli --branch v2
        stencil init -t https://example.com/t.git --force
    """
    configure_logging(verbose)

    target = Path(path).resolve() if path is not None else Path.cwd()
    initializer = ProjectInitializer(
        console=RichConsole(),
        progress_callback=typer.echo,
    )

    try:
        if template:
            result = initializer.initialize(
                target,
                template,
                branch,
                project_name=name,
                force=force,
                no_git=no_git,
                timeout=timeout if timeout is not None else get_fetch_timeout(),
            )
        else:
            if not target.exists():
                print_error(f"Directory does not exist: {target}")
                print_info("Pass --template to create a project from a template.")
                raise typer.Exit(code=1)
            result = initializer.initialize_empty(target, project_name=name)
    except OverwriteDeclined as e:
        print_warning(str(e))
        print_info("Nothing was changed. Re-run with --force to overwrite.")
        raise typer.Exit(code=1) from e
    except StencilError as e:
        print_error(f"Initialization failed: {e}")
        raise typer.Exit(code=1) from e

    typer.echo("")
    print_summary(result)
    typer.echo("")
    if result.duplicates:
        print_warning(f"Overwrote {len(result.duplicates)} existing file(s)")
    if template:
        print_success(f"Project created at: {target}")
    else:
        print_success(f"Project initialized in: {target}")
