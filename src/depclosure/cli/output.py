"""Rich output formatting helpers for the depclosure CLI.

Provides consistent terminal output for resolved dependency lists, their
provenance, and version bump reports.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from depclosure.core.bump import BumpReport, VersionedPackage
from depclosure.core.dependency import Resolution

console = Console()


def provenance_text(is_direct: bool, contributors: list[str]) -> Text:
    """Describe how a dependency entered a package's closure."""
    if is_direct:
        return Text("direct dependency", style="green")
    if contributors:
        return Text(f"via {', '.join(contributors)}", style="cyan")
    return Text("-", style="dim")


def print_resolution(resolution: Resolution, only: str | None = None) -> None:
    """Print one table per package listing its resolved dependencies.

    Args:
        resolution: Result of transitive resolution.
        only: If given, print just this package.
    """
    if only:
        names = [only]
    else:
        names = [
            n for n in (resolution.order or resolution.resolved_dependencies)
            if resolution.resolved_dependencies.get(n)
        ]
    if not any(resolution.resolved_dependencies.get(n) for n in names):
        console.print("[dim]No dependencies to resolve.[/dim]")
        return

    for name in names:
        deps = resolution.resolved_dependencies.get(name, [])
        if not deps:
            console.print(f"[bold]{name}[/bold]: [dim]no dependencies[/dim]")
            continue
        details = resolution.details.get(name, {})
        table = Table(title=f"Package: {name}", show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Dependency", style="bold")
        table.add_column("Version")
        table.add_column("Source")
        for index, dep in enumerate(deps, start=1):
            detail = details.get(dep.package)
            version = detail.version if detail else (dep.version or "unknown")
            source = (
                provenance_text(detail.is_direct, detail.contributors)
                if detail else Text("-", style="dim")
            )
            table.add_row(str(index), dep.package, version, source)
        console.print(table)


def print_direct_only_notice() -> None:
    console.print(
        Panel(
            "[yellow]Transitive dependency resolution is disabled in the manifest; "
            "showing declared dependencies only.[/yellow]",
            title="Dependency Resolution",
        )
    )


def format_version_change(pkg: VersionedPackage, highlight: str = "bold yellow") -> Text:
    """Render ``old -> new`` with the changed segments highlighted."""
    old, new = pkg.version_change()
    if new is None:
        return Text(old)

    old_parts = old.split(".")
    new_parts = new.split(".")
    text = Text()
    for index, part in enumerate(old_parts):
        if index:
            text.append(".")
        changed = index >= len(new_parts) or part != new_parts[index]
        text.append(part, style=highlight if changed else "")
    text.append(" -> ")
    for index, part in enumerate(new_parts):
        if index:
            text.append(".")
        changed = index >= len(old_parts) or part != old_parts[index]
        text.append(part, style=highlight if changed else "")
    return text


def print_bump_report(report: BumpReport) -> None:
    """Print bumped packages, then dependents whose pins changed."""
    if not report.packages:
        console.print("[dim]No packages selected for a version update.[/dim]")
        return

    table = Table(title="Package versions updated", show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Version")
    for pkg in report.packages:
        table.add_row(pkg.name, format_version_change(pkg))
    console.print(table)

    if not report.dependents:
        return

    deps_table = Table(title="Dependencies updated", show_header=True, header_style="bold")
    deps_table.add_column("Package", style="bold")
    deps_table.add_column("Version")
    for pkg in report.dependents:
        deps_table.add_row(pkg.name, format_version_change(pkg))
        for dep in pkg.dependencies:
            if dep.is_updated:
                deps_table.add_row(
                    Text(f" ⮑  {dep.name}", style="dim"),
                    format_version_change(dep, highlight="cyan"),
                )
    console.print(deps_table)

