"""One ``AnnotationRootOwner`` adapter per owner kind.

Each adapter edits the annotation roots of its own layout section; saving the
layout file is left to the project model.
"""

from pathlib import Path

from external_annotations.models import OwnerKind
from external_annotations.project.layout import LibraryConfig, ModuleConfig, SdkConfig, relativize, resolve_path


class LayoutOwner:
    kind: OwnerKind

    def __init__(self, config: ModuleConfig | LibraryConfig, base_dir: Path) -> None:
        self.config = config
        self.base_dir = base_dir

    @property
    def name(self) -> str:
        return self.config.name

    def _content_root_values(self) -> list[str]:
        raise NotImplementedError

    def content_roots(self) -> list[Path]:
        return [resolve_path(self.base_dir, root) for root in self._content_root_values()]

    def annotation_roots(self) -> list[Path]:
        return [resolve_path(self.base_dir, root) for root in self.config.annotation_roots]

    def attach_annotation_root(self, root: Path) -> None:
        if root.resolve() in self.annotation_roots():
            return
        self.config.annotation_roots.append(relativize(self.base_dir, root))

    def detach_annotation_root(self, root: Path) -> None:
        value = relativize(self.base_dir, root)
        if value in self.config.annotation_roots:
            self.config.annotation_roots.remove(value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LayoutOwner) and (self.kind, self.name) == (other.kind, other.name)

    def __hash__(self) -> int:
        return hash((self.kind, self.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ModuleSourceOwner(LayoutOwner):
    kind = OwnerKind.MODULE
    config: ModuleConfig

    def _content_root_values(self) -> list[str]:
        return self.config.source_roots


class LibraryOwner(LayoutOwner):
    kind = OwnerKind.LIBRARY
    config: LibraryConfig

    def _content_root_values(self) -> list[str]:
        return self.config.class_roots


class SdkOwner(LibraryOwner):
    kind = OwnerKind.SDK
    config: SdkConfig
