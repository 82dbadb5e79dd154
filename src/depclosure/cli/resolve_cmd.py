"""``depclosure resolve`` — Resolve transitive dependencies of a project.

Reads the project manifest, expands every package's dependencies
transitively, and prints the ordered result with provenance. With
``--write`` the expanded lists are saved back into the manifest.

Exit Codes:
    0 — Resolution succeeded.
    1 — Resolution failed (circular dependency, invalid manifest, unknown package).
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from depclosure.core.dependency import Resolution
from depclosure.core.manifest import DEFAULT_MANIFEST, ProjectManifest
from depclosure.exceptions import DepClosureError


def _fail(message: str, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}")
    sys.exit(1)


def _select(data: dict, package_name: str | None) -> dict:
    if package_name is None:
        return data
    return {
        "resolvedDependencies": {
            package_name: data["resolvedDependencies"].get(package_name, []),
        },
        "details": {
            k: v for k, v in data["details"].items() if k == package_name
        },
    }


@click.command("resolve")
@click.option(
    "--manifest", "-m", "manifest_path",
    type=click.Path(exists=True, dir_okay=False),
    default=DEFAULT_MANIFEST,
    show_default=True,
    help="Path to the project manifest.",
)
@click.option(
    "--package", "-p", "package_name",
    default=None,
    help="Only show the dependencies of this package.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--write", is_flag=True, default=False,
    help="Save the resolved dependency lists back into the manifest.",
)
def resolve_command(
    manifest_path: str, package_name: str | None, output_format: str, write: bool
) -> None:
    """Resolve the full, ordered dependency list of every package.

    Exit code 0 on success, 1 if resolution fails.
    """
    path = Path(manifest_path)
    try:
        manifest = ProjectManifest.read(path)
        disabled = manifest.settings.disabled
        if disabled:
            resolution = Resolution(resolved_dependencies=manifest.direct_dependencies())
        else:
            resolution = manifest.resolve()
    except DepClosureError as exc:
        _fail(str(exc), output_format)
        return

    if package_name is not None and manifest.package(package_name) is None:
        _fail(f"Package {package_name} not found in manifest", output_format)
        return

    if output_format == "json":
        data = resolution.to_dict()
        data.pop("order")
        click.echo(json.dumps(_select(data, package_name), indent=2))
    else:
        from depclosure.cli.output import print_direct_only_notice, print_resolution
        if disabled:
            print_direct_only_notice()
        print_resolution(resolution, only=package_name)

    if write:
        if disabled:
            if output_format != "json":
                click.echo("Transitive resolution is disabled; manifest left unchanged.")
        else:
            manifest.write(path, manifest.with_resolved_dependencies(resolution))
            if output_format != "json":
                click.echo(f"\nManifest updated: {path}")

    sys.exit(0)
