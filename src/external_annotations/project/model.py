from __future__ import annotations

import logging
from pathlib import Path

from external_annotations.core.ports.project import OrderEntry
from external_annotations.core.resolver import package_path
from external_annotations.errors import ProjectConfigError
from external_annotations.project.layout import ProjectLayout, load_layout, save_layout
from external_annotations.project.owners import LayoutOwner, LibraryOwner, ModuleSourceOwner, SdkOwner

logger = logging.getLogger(__name__)


def _is_under(file: Path, root: Path) -> bool:
    return file == root or root in file.parents


class ConfiguredProject:
    """Project root model and package directory index backed by a layout file.

    A file below a module source root depends on the module's own sources and
    then on the module's declared dependencies, in declaration order. A file
    below a library or SDK class root depends on that library or SDK.
    """

    def __init__(self, layout: ProjectLayout, layout_file: Path) -> None:
        self.layout = layout
        self.layout_file = layout_file
        base_dir = layout_file.resolve().parent
        self.modules = [ModuleSourceOwner(config, base_dir) for config in layout.modules]
        self.libraries = {config.name: LibraryOwner(config, base_dir) for config in layout.libraries}
        self.sdks = {config.name: SdkOwner(config, base_dir) for config in layout.sdks}

    @classmethod
    def load(cls, layout_file: Path) -> ConfiguredProject:
        return cls(load_layout(layout_file), layout_file)

    def save(self) -> None:
        save_layout(self.layout, self.layout_file)

    def ordered_dependency_entries(self, file: Path) -> list[OrderEntry]:
        file = file.resolve()
        entries: list[OrderEntry] = []
        for module in self.modules:
            if any(_is_under(file, root) for root in module.content_roots()):
                entries.append(OrderEntry(module))
                entries.extend(self._dependency_entries(module))
        for owner in [*self.libraries.values(), *self.sdks.values()]:
            if any(_is_under(file, root) for root in owner.content_roots()):
                entries.append(OrderEntry(owner))
        return entries

    def annotation_roots(self, entry: OrderEntry) -> list[Path]:
        return entry.owner.annotation_roots()

    def attach_annotation_root(self, entry: OrderEntry, root: Path) -> None:
        if not root.is_dir():
            raise ProjectConfigError(f"Annotation root {root} is not a directory")
        owner = entry.owner
        already_attached = root.resolve() in owner.annotation_roots()
        owner.attach_annotation_root(root)
        try:
            self.save()
        except ProjectConfigError:
            if not already_attached and isinstance(owner, LayoutOwner):
                owner.detach_annotation_root(root)
            raise
        logger.info("Attached %s to %s in %s", root, entry.presentable_name, self.layout_file)

    def is_in_project(self, file: Path) -> bool:
        file = file.resolve()
        return any(_is_under(file, root) for module in self.modules for root in module.content_roots())

    def directories_for_package(self, package_name: str) -> list[Path]:
        owners = [*self.modules, *self.libraries.values(), *self.sdks.values()]
        relative = package_path(package_name)
        directories: list[Path] = []
        for owner in owners:
            for root in owner.content_roots():
                directory = root / relative
                if directory.is_dir() and directory not in directories:
                    directories.append(directory)
        return directories

    def _dependency_entries(self, module: ModuleSourceOwner) -> list[OrderEntry]:
        entries: list[OrderEntry] = []
        for dependency in module.config.dependencies:
            kind, _, name = dependency.partition(":")
            owners = self.libraries if kind == "library" else self.sdks
            owner = owners.get(name)
            if owner is None:
                logger.warning("Module '%s' depends on unknown %s '%s'", module.name, kind, name)
                continue
            entries.append(OrderEntry(owner))
        return entries
