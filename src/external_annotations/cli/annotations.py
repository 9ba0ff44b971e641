import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from external_annotations.cli.dependencies import console, get_services
from external_annotations.core.naming import JavaSymbolNamer, symbol_ref
from external_annotations.core.ports.naming import SymbolNamer
from external_annotations.core.repository import AnnotateStatus
from external_annotations.errors import ExternalAnnotationsError
from external_annotations.models import SymbolDeclaration, SymbolKind

FileArg = Annotated[Path, typer.Argument(help="Source or class file that declares the symbol.")]
NameArg = Annotated[str, typer.Argument(help="External name of the symbol, e.g. 'pkg.Foo int bar(int)'.")]
AnnotationArg = Annotated[str, typer.Argument(help="Fully qualified annotation type.")]
PackageOpt = Annotated[
    str | None, typer.Option("--package", help="Package of the symbol. Guessed from the name when omitted.")
]

NAMER: SymbolNamer = JavaSymbolNamer()


def find(file: FileArg, name: NameArg, annotation: AnnotationArg, package: PackageOpt = None) -> None:
    """Print one external annotation of a symbol."""
    services = get_services()
    symbol = symbol_ref(name, file, package)
    result = asyncio.run(services.repository.find_annotation(symbol, annotation))
    if result is None:
        console.print(f"[yellow]@{annotation} not found for {name}[/yellow]")
        raise typer.Exit(1)
    console.print(result.text, markup=False, highlight=False, soft_wrap=True)


def show(file: FileArg, name: NameArg, package: PackageOpt = None) -> None:
    """List all external annotations of a symbol."""
    services = get_services()
    symbol = symbol_ref(name, file, package)
    results = asyncio.run(services.repository.list_annotations(symbol))
    table = Table(show_lines=False)
    table.add_column("annotation")
    table.add_column("text")
    for result in results:
        table.add_row(result.name, result.text)
    console.print(table)
    console.print(f"({len(results)} rows)")


def annotate(
    file: FileArg,
    name: NameArg,
    annotation: AnnotationArg,
    package: PackageOpt = None,
    root: Annotated[
        Path | None,
        typer.Option(help="Annotation root to use when no document exists yet, instead of asking."),
    ] = None,
) -> None:
    """Add an external annotation to a symbol."""
    services = get_services()
    symbol = symbol_ref(name, file, package)
    try:
        result = asyncio.run(services.repository.annotate(symbol, annotation, root.resolve() if root else None))
    except ExternalAnnotationsError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    if result.status is AnnotateStatus.ANNOTATED:
        console.print(f"[green]Annotated[/green] {name} with @{annotation} in {result.path}")
    elif result.status is AnnotateStatus.CANCELLED:
        console.print("[yellow]No annotation root chosen; nothing written.[/yellow]")
        raise typer.Exit(1)
    else:
        console.print(f"[red]{file} does not belong to any module, library or SDK.[/red]")
        raise typer.Exit(1)


def name(
    class_name: Annotated[str, typer.Argument(help="Fully qualified class name.")],
    kind: Annotated[SymbolKind, typer.Option(help="Kind of symbol.")] = SymbolKind.CLASS,
    member: Annotated[str | None, typer.Option(help="Field or method name.")] = None,
    return_type: Annotated[str | None, typer.Option(help="Method return type; omit for constructors.")] = None,
    param: Annotated[list[str] | None, typer.Option(help="Parameter type, repeated in order.")] = None,
    index: Annotated[int | None, typer.Option(help="Parameter index for parameter symbols.")] = None,
) -> None:
    """Print the external name of a declaration."""
    declaration = SymbolDeclaration(
        class_name=class_name,
        kind=kind,
        member_name=member,
        return_type=return_type,
        parameter_types=param or [],
        parameter_index=index,
    )
    try:
        external_name = NAMER.external_name(declaration)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    console.print(external_name, markup=False, highlight=False, soft_wrap=True)
