"""``depclosure bump`` — Increment package versions and re-pin dependents.

Selects packages (one by name, all, or those changed since a git
reference), bumps their versions, and updates the dependency pins of every
package that depends on them. The manifest is saved unless ``--dry-run``
is given.

Exit Codes:
    0 — Versions updated (or planned, with ``--dry-run``).
    1 — Nothing selected, unknown package, invalid version, or git failure.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from depclosure.core.bump import BumpPlanner
from depclosure.core.manifest import DEFAULT_MANIFEST, ProjectManifest
from depclosure.exceptions import BumpError, DepClosureError


def _bump_kind(major: bool, minor: bool, version_number: str | None) -> str:
    if minor:
        return "minor"
    if major:
        return "major"
    if version_number:
        return "custom"
    return "patch"


@click.command("bump")
@click.option(
    "--manifest", "-m", "manifest_path",
    type=click.Path(exists=True, dir_okay=False),
    default=DEFAULT_MANIFEST,
    show_default=True,
    help="Path to the project manifest.",
)
@click.option("--package", "-p", "package_name", default=None, help="Package to increment.")
@click.option("--all", "-a", "all_packages", is_flag=True, help="Increment all package versions.")
@click.option("--target-ref", "-r", default=None, help="Git reference to diff against.")
@click.option("--major", "-M", is_flag=True, help="Increment the major number.")
@click.option("--minor", is_flag=True, help="Increment the minor number.")
@click.option("--patch", is_flag=True, help="Increment the patch number (default).")
@click.option("--version-number", "-v", default=None, help="Set a custom X.Y.Z version.")
@click.option("--deps", is_flag=True, help="Also patch-bump packages whose dependencies changed.")
@click.option("--dry-run", is_flag=True, help="Do not save changes to the manifest.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def bump_command(
    manifest_path: str,
    package_name: str | None,
    all_packages: bool,
    target_ref: str | None,
    major: bool,
    minor: bool,
    patch: bool,
    version_number: str | None,
    deps: bool,
    dry_run: bool,
    output_format: str,
) -> None:
    """Increment package versions and update the packages that depend on them.

    Select packages with exactly one of --package, --all or --target-ref.
    """
    path = Path(manifest_path)
    try:
        manifest = ProjectManifest.read(path)
        planner = BumpPlanner(manifest.packages)
        if target_ref:
            selected = planner.select_changed(target_ref, cwd=path.resolve().parent)
        elif package_name:
            selected = planner.select_package(package_name)
        elif all_packages:
            selected = planner.select_all()
        else:
            raise BumpError("Please specify --package, --all, or --target-ref.")
        report = planner.plan(
            selected,
            kind=_bump_kind(major, minor, version_number),
            custom=version_number,
            increment_dependents=deps,
        )
    except DepClosureError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            click.echo(f"Error: {exc}")
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        from depclosure.cli.output import print_bump_report
        print_bump_report(report)

    if not dry_run and report.packages:
        manifest.write(path, manifest.with_package_updates(report.manifest_updates()))
        if output_format != "json":
            click.echo(f"\n{path.name} updated successfully!")

    sys.exit(0)
