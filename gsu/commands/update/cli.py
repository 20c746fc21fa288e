"""CLI for updating every repository under a directory."""

from __future__ import annotations

import os

import click
import typer
from pydantic import ValidationError
from typer.core import TyperCommand

from ...config.settings import Settings, get_settings
from ...core import output
from ...core.git_client import GitClient
from .service import update_all

# Unknown options are collected as extra args so they can be reported with exit code 1.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}

app = typer.Typer(
    add_completion=False,
    help="Fetch and pull every git repository in the subdirectories (hidden ones included) of a directory.",
)


def _usage_error(ctx: click.Context, message: str) -> typer.Exit:
    output.error(message)
    typer.echo(ctx.get_help())
    return typer.Exit(code=1)


class UpdateCommand(TyperCommand):
    """Reports bad arguments with exit code 1, in command-line order, before --help runs."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            # plain parse first: no callbacks, so an unknown argument wins over an eager --help
            _opts, extra, _order = self.make_parser(ctx).parse_args(args=list(args))
        except click.UsageError as e:
            raise _usage_error(ctx, e.format_message()) from None
        if extra:
            raise _usage_error(ctx, f"Unknown argument: {extra[0]}")
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            raise _usage_error(ctx, e.format_message()) from None


def _fail(message: str) -> typer.Exit:
    output.error(message)
    return typer.Exit(code=1)


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise _fail(f"Invalid configuration: {e}") from e


@app.command(cls=UpdateCommand, context_settings=CONTEXT_SETTINGS)
def update(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also report directories that are not repositories"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Only list the repositories that would be updated"),
    directory: str | None = typer.Option(None, "--directory", "-C", help="Directory to scan (default: current)"),
    jobs: int | None = typer.Option(None, "--jobs", "-j", help="Repositories updated in parallel (default: 1)"),
    depth: int | None = typer.Option(None, "--depth", "-d", help="Directory levels searched below the root (default: 1)"),
):
    """
    Update all git repositories found under a directory.
    Examples:
      gsu
      gsu --dry-run --verbose
      gsu -C ~/src --jobs 4
    """
    s = _load_settings()
    _jobs = jobs if jobs is not None else s.jobs
    _depth = depth if depth is not None else s.depth
    if _jobs < 1:
        raise _fail(f"--jobs must be at least 1, got {_jobs}")
    if _depth < 1:
        raise _fail(f"--depth must be at least 1, got {_depth}")

    try:
        root = os.path.abspath(directory or os.getcwd())
    except FileNotFoundError:
        raise _fail("Current directory does not exist") from None
    if not os.path.isdir(root):
        raise _fail(f"Directory does not exist: {root}")

    git = GitClient(git_bin=s.git_bin, remote=s.remote, timeout=s.git_timeout)
    try:
        update_all(root=root, git=git, dry_run=dry_run, verbose=verbose, jobs=_jobs, depth=_depth)
    except OSError as e:
        raise _fail(f"Cannot read directory {root}: {e}") from e
