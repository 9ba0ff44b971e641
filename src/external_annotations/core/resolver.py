"""Locate the ``annotations.xml`` that holds a symbol's external annotations.

Precedence, first existing document wins:

1. ``annotations.xml`` in any directory of the symbol's package, in index order;
2. ``<root>/<package path>/annotations.xml`` for each annotation root attached
   to the *first* dependency entry of the symbol's file, in attachment order.

Only the first entry is searched so that libraries cannot shadow each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from external_annotations.core.ports.documents import DocumentIO
from external_annotations.core.ports.project import OrderEntry, PackageDirectoryIndex, ProjectRootModel
from external_annotations.models import ANNOTATIONS_XML, SymbolRef

logger = logging.getLogger(__name__)


class CandidateOrigin(str, Enum):
    PACKAGE = "package"
    ATTACHED_ROOT = "attached-root"


@dataclass(frozen=True)
class DocumentCandidate:
    path: Path
    origin: CandidateOrigin
    root: Path | None = None
    entry: OrderEntry | None = None


@dataclass(frozen=True)
class Located:
    candidate: DocumentCandidate

    @property
    def path(self) -> Path:
        return self.candidate.path


@dataclass(frozen=True)
class NotFound:
    package_name: str
    entry: OrderEntry | None


Resolution = Located | NotFound


def package_path(package_name: str) -> Path:
    return Path(*package_name.split(".")) if package_name else Path()


def document_path(root: Path, package_name: str) -> Path:
    return root / package_path(package_name) / ANNOTATIONS_XML


class RootResolver:
    def __init__(self, directories: PackageDirectoryIndex, project: ProjectRootModel, io: DocumentIO) -> None:
        self.directories = directories
        self.project = project
        self.io = io

    def first_entry(self, symbol: SymbolRef) -> OrderEntry | None:
        entries = self.project.ordered_dependency_entries(symbol.containing_file)
        return entries[0] if entries else None

    def candidate_locations(self, symbol: SymbolRef) -> list[DocumentCandidate]:
        candidates = [
            DocumentCandidate(path=directory / ANNOTATIONS_XML, origin=CandidateOrigin.PACKAGE)
            for directory in self.directories.directories_for_package(symbol.package_name)
        ]
        entry = self.first_entry(symbol)
        if entry is not None:
            candidates.extend(
                DocumentCandidate(
                    path=document_path(root, symbol.package_name),
                    origin=CandidateOrigin.ATTACHED_ROOT,
                    root=root,
                    entry=entry,
                )
                for root in self.project.annotation_roots(entry)
            )
        return candidates

    async def locate(self, symbol: SymbolRef) -> Resolution:
        for candidate in self.candidate_locations(symbol):
            if await self.io.exists(candidate.path):
                logger.debug("Resolved %s to %s (%s)", symbol.external_name, candidate.path, candidate.origin.value)
                return Located(candidate)
        logger.debug("No annotations document for package '%s'", symbol.package_name)
        return NotFound(package_name=symbol.package_name, entry=self.first_entry(symbol))
