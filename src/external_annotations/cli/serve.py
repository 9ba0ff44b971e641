from typing import Annotated

import typer
from rich.console import Console

from external_annotations.cli.dependencies import current_settings
from external_annotations.errors import ProjectConfigError
from external_annotations.services import build_services

# stdout belongs to the stdio transport.
err_console = Console(stderr=True)


def serve_mcp(
    transport: Annotated[str, typer.Option(help="MCP transport (stdio, sse, http).")] = "stdio",
) -> None:
    """Start the MCP server."""
    from external_annotations.mcp.server import create_mcp_server

    try:
        services = build_services(current_settings())
    except ProjectConfigError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    server = create_mcp_server(services.repository)
    err_console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
