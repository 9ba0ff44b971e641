from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from external_annotations.models import OwnerKind


class AnnotationRootOwner(Protocol):
    kind: OwnerKind
    name: str

    def annotation_roots(self) -> list[Path]: ...

    def attach_annotation_root(self, root: Path) -> None: ...


@dataclass(frozen=True)
class OrderEntry:
    """One dependency of a file: the module's own sources, a library or an SDK."""

    owner: AnnotationRootOwner

    @property
    def presentable_name(self) -> str:
        return f"{self.owner.kind.value} '{self.owner.name}'"


class ProjectRootModel(Protocol):
    def ordered_dependency_entries(self, file: Path) -> list[OrderEntry]: ...

    def annotation_roots(self, entry: OrderEntry) -> list[Path]: ...

    def attach_annotation_root(self, entry: OrderEntry, root: Path) -> None: ...

    def is_in_project(self, file: Path) -> bool: ...


class PackageDirectoryIndex(Protocol):
    def directories_for_package(self, package_name: str) -> list[Path]: ...
