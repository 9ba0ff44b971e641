"""FastMCP server exposing the external annotations repository."""

from __future__ import annotations

from pathlib import Path

from fastmcp import FastMCP

from external_annotations.core.naming import symbol_ref
from external_annotations.core.repository import AnnotateStatus, ExternalAnnotationsRepository
from external_annotations.errors import ExternalAnnotationsError


def create_mcp_server(repository: ExternalAnnotationsRepository) -> FastMCP:
    """Create a FastMCP server wired to the given repository. Tools never prompt."""

    mcp = FastMCP("external-annotations", instructions="Read and write external annotations of program symbols.")

    @mcp.tool()
    async def find_annotation(file: str, name: str, annotation: str, package: str | None = None) -> str | None:
        """Return the annotation literal of a symbol, or null when it has none."""
        result = await repository.find_annotation(symbol_ref(name, file, package), annotation)
        return result.text if result else None

    @mcp.tool()
    async def list_annotations(file: str, name: str, package: str | None = None) -> list[dict[str, str]]:
        """List all external annotations of a symbol in document order."""
        results = await repository.list_annotations(symbol_ref(name, file, package))
        return [{"name": r.name, "text": r.text} for r in results]

    @mcp.tool()
    async def annotate(
        file: str, name: str, annotation: str, package: str | None = None, root: str | None = None
    ) -> str:
        """Annotate a symbol. 'root' is required when no annotations document exists yet."""
        symbol = symbol_ref(name, file, package)
        try:
            result = await repository.annotate(symbol, annotation, Path(root).resolve() if root else None)
        except ExternalAnnotationsError as e:
            return f"Error: {e}"
        if result.status is AnnotateStatus.ANNOTATED:
            return f"Annotated {name} with @{annotation} in {result.path}"
        if result.status is AnnotateStatus.CANCELLED:
            return "Error: no annotations document exists yet; pass 'root' to create one."
        return f"Error: {file} does not belong to any module, library or SDK."

    @mcp.tool()
    async def locate(file: str, package: str) -> list[dict[str, str]]:
        """List candidate annotations document locations for a package, in lookup order."""
        symbol = symbol_ref(package, file, package)
        candidates = repository.resolver.candidate_locations(symbol)
        return [
            {
                "origin": c.origin.value,
                "path": str(c.path),
                "exists": str(await repository.resolver.io.exists(c.path)).lower(),
            }
            for c in candidates
        ]

    return mcp
