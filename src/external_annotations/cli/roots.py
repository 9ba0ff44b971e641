import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from external_annotations.cli.dependencies import console, get_services
from external_annotations.core.naming import guess_package_name
from external_annotations.errors import ProjectConfigError
from external_annotations.models import SymbolRef

roots_app = typer.Typer(help="Inspect and attach annotation roots.")

FileArg = Annotated[Path, typer.Argument(help="Source or class file.")]


@roots_app.command("list")
def list_roots(file: FileArg) -> None:
    """List the dependency entries of a file and their annotation roots."""
    services = get_services()
    table = Table(show_lines=False)
    for header in ("#", "kind", "name", "annotation_roots"):
        table.add_column(header)
    entries = services.project.ordered_dependency_entries(file)
    for index, entry in enumerate(entries):
        roots = services.project.annotation_roots(entry)
        table.add_row(str(index), entry.owner.kind.value, entry.owner.name, "\n".join(str(r) for r in roots) or "-")
    console.print(table)
    console.print(f"({len(entries)} rows)")


@roots_app.command("attach")
def attach(
    file: FileArg,
    root: Annotated[Path, typer.Argument(help="Directory to attach as annotation root.")],
    entry: Annotated[int, typer.Option(help="Index of the dependency entry, as shown by 'roots list'.")] = 0,
) -> None:
    """Attach an annotation root to one dependency entry of a file."""
    services = get_services()
    entries = services.project.ordered_dependency_entries(file)
    if not 0 <= entry < len(entries):
        console.print(f"[red]{file} has {len(entries)} dependency entries; no entry #{entry}.[/red]")
        raise typer.Exit(1)
    target = entries[entry]
    try:
        services.project.attach_annotation_root(target, root.resolve())
    except ProjectConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]Attached[/green] {root} to {target.presentable_name}")


def locate(
    file: FileArg,
    name: Annotated[str | None, typer.Argument(help="External name; its package is searched.")] = None,
    package: Annotated[str | None, typer.Option("--package", help="Package to search.")] = None,
) -> None:
    """Show where the annotations document of a package is looked up, in order."""
    services = get_services()
    if package is None:
        package = guess_package_name(name) if name else ""
    symbol = SymbolRef(external_name=name or package, package_name=package, containing_file=file)

    async def _exists(paths: list[Path]) -> list[bool]:
        return [await services.resolver.io.exists(p) for p in paths]

    candidates = services.resolver.candidate_locations(symbol)
    flags = asyncio.run(_exists([c.path for c in candidates]))
    table = Table(show_lines=False)
    for header in ("#", "origin", "path", "exists"):
        table.add_column(header)
    for index, (candidate, exists) in enumerate(zip(candidates, flags, strict=True)):
        table.add_row(str(index), candidate.origin.value, str(candidate.path), "yes" if exists else "no")
    console.print(table)
    console.print(f"({len(candidates)} rows)")


def usage(file: FileArg) -> None:
    """Tell whether external annotations are consulted for symbols of a file."""
    services = get_services()
    symbol = SymbolRef(external_name="", package_name="", containing_file=file)
    state = services.usage.state(symbol)
    allowed = services.usage.use_external_annotations(symbol)
    verdict = "[green]yes[/green]" if allowed else "[yellow]no[/yellow]"
    console.print(f"Use external annotations: {verdict} ({state.value})")
