from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from external_annotations.config import Settings, get_settings
from external_annotations.errors import ProjectConfigError
from external_annotations.services import Services, build_services

console = Console()

_project_file: Path | None = None


def configure(project_file: Path | None, verbose: bool) -> None:
    global _project_file  # noqa: PLW0603
    _project_file = project_file
    settings = current_settings()
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def current_settings() -> Settings:
    settings = get_settings()
    if _project_file is not None:
        settings = settings.model_copy(update={"project_file": _project_file})
    return settings


def get_services() -> Services:
    from external_annotations.cli.prompts import ConsolePrompter

    try:
        return build_services(current_settings(), ConsolePrompter(console))
    except ProjectConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
