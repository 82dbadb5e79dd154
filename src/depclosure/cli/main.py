"""depclosure CLI — Transitive dependency management for project manifests.

Entry point for the ``depclosure`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve — Resolve and report every package's transitive dependencies.
    bump    — Increment package versions and re-pin dependent packages.

Usage::

    depclosure resolve                          # ./sfdx-project.json
    depclosure resolve -m path/to/sfdx-project.json --format json
    depclosure resolve --package core --write
    depclosure bump --package core --minor
    depclosure bump --all --dry-run
    depclosure bump --target-ref origin/main --deps
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from depclosure import __version__
from depclosure.cli.bump_cmd import bump_command
from depclosure.cli.resolve_cmd import resolve_command

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str) -> None:
    """Send log records, including Python warnings, to stderr through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.captureWarnings(True)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity (messages go to stderr).",
)
def cli(log_level: str) -> None:
    """depclosure: Transitive dependency resolution for multi-package projects.

    Expand every package's dependencies to the full, ordered, deduplicated
    set it needs, reject circular dependencies, and keep dependency pins in
    step when versions are bumped.
    """
    configure_logging(log_level)


# Register all subcommands
cli.add_command(resolve_command)
cli.add_command(bump_command)
