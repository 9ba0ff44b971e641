"""Project layout file: modules, libraries and SDKs with their roots.

Paths are stored relative to the layout file when they live below it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from external_annotations.errors import ProjectConfigError
from external_annotations.models import OwnerKind

logger = logging.getLogger(__name__)


class LibraryConfig(BaseModel):
    name: str
    class_roots: list[str] = Field(default_factory=list)
    annotation_roots: list[str] = Field(default_factory=list)


class SdkConfig(LibraryConfig):
    pass


class ModuleConfig(BaseModel):
    name: str
    source_roots: list[str] = Field(default_factory=list)
    annotation_roots: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)

    @field_validator("dependencies")
    @classmethod
    def _check_dependencies(cls, value: list[str]) -> list[str]:
        kinds = {OwnerKind.LIBRARY.value, OwnerKind.SDK.value}
        for dependency in value:
            kind, _, name = dependency.partition(":")
            if kind not in kinds or not name:
                raise ValueError(f"Dependency must look like 'library:<name>' or 'sdk:<name>', got {dependency!r}")
        return value


class ProjectLayout(BaseModel):
    modules: list[ModuleConfig] = Field(default_factory=list)
    libraries: list[LibraryConfig] = Field(default_factory=list)
    sdks: list[SdkConfig] = Field(default_factory=list)

    def library(self, name: str) -> LibraryConfig | None:
        return next((lib for lib in self.libraries if lib.name == name), None)

    def sdk(self, name: str) -> SdkConfig | None:
        return next((sdk for sdk in self.sdks if sdk.name == name), None)


def load_layout(path: Path) -> ProjectLayout:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ProjectConfigError(f"Project layout file not found: {path}") from e
    except OSError as e:
        raise ProjectConfigError(f"Cannot read project layout {path}: {e}") from e
    try:
        return ProjectLayout.model_validate_json(raw)
    except ValidationError as e:
        raise ProjectConfigError(f"Invalid project layout {path}: {e}") from e


def save_layout(layout: ProjectLayout, path: Path) -> None:
    data = layout.model_dump(mode="json")
    try:
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ProjectConfigError(f"Cannot save project layout {path}: {e}") from e
    logger.debug("Saved project layout %s", path)


def resolve_path(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def relativize(base_dir: Path, path: Path) -> str:
    resolved = path.resolve()
    try:
        return resolved.relative_to(base_dir.resolve()).as_posix()
    except ValueError:
        return str(resolved)
