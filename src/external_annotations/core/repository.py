"""Entry point for reading and writing external annotations.

Writes run in two phases. ``request_target`` finds the existing document or
asks the prompter for a new annotation root; it may block on the user and
takes no lock. ``annotate_at`` then creates what is missing and merges the
annotation under the document's lock, without any interaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from external_annotations.core.ports.project import OrderEntry, ProjectRootModel
from external_annotations.core.ports.prompts import NonInteractivePrompter, Prompter
from external_annotations.core.query import AnnotationQuery
from external_annotations.core.resolver import Located, NotFound, RootResolver
from external_annotations.core.writer import check_annotation_request, create_document_and_root, upsert
from external_annotations.errors import ParseError, ProjectConfigError, WriteError
from external_annotations.models import SymbolEntry, SymbolRef, SynthesizedAnnotation
from external_annotations.store.documents import DocumentStore

logger = logging.getLogger(__name__)


class AnnotateStatus(str, Enum):
    ANNOTATED = "annotated"
    CANCELLED = "cancelled"
    NO_DEPENDENCY_ENTRY = "no-dependency-entry"


@dataclass(frozen=True)
class WriteTarget:
    package_name: str
    document: Path | None = None
    root: Path | None = None
    entry: OrderEntry | None = None


@dataclass(frozen=True)
class AnnotateResult:
    status: AnnotateStatus
    path: Path | None = None


class ExternalAnnotationsRepository:
    def __init__(
        self,
        resolver: RootResolver,
        store: DocumentStore,
        project: ProjectRootModel,
        prompter: Prompter | None = None,
    ) -> None:
        self.resolver = resolver
        self.store = store
        self.project = project
        self.prompter = prompter or NonInteractivePrompter()
        self.query = AnnotationQuery(resolver, store)

    async def find_annotation(self, symbol: SymbolRef, annotation_type: str) -> SynthesizedAnnotation | None:
        return await self.query.find(symbol, annotation_type)

    async def list_annotations(self, symbol: SymbolRef) -> list[SynthesizedAnnotation]:
        return await self.query.find_all(symbol)

    async def find_entry(self, symbol: SymbolRef) -> SymbolEntry | None:
        return await self.query.find_entry(symbol)

    async def request_target(self, symbol: SymbolRef) -> WriteTarget | AnnotateStatus:
        resolution = await self.resolver.locate(symbol)
        if isinstance(resolution, Located):
            return WriteTarget(package_name=symbol.package_name, document=resolution.path)
        if resolution.entry is None:
            logger.info("%s has no dependency entry to attach annotations to", symbol.containing_file)
            return AnnotateStatus.NO_DEPENDENCY_ENTRY
        root = self.prompter.choose_directory(resolution.entry)
        if root is None:
            return AnnotateStatus.CANCELLED
        return WriteTarget(package_name=resolution.package_name, root=root, entry=resolution.entry)

    async def target_in_root(self, symbol: SymbolRef, root: Path) -> WriteTarget | AnnotateStatus:
        """Phase one without prompting: use *root* when no document exists yet."""
        resolution = await self.resolver.locate(symbol)
        if isinstance(resolution, Located):
            return WriteTarget(package_name=symbol.package_name, document=resolution.path)
        return self._new_root_target(resolution, root)

    async def annotate_at(self, target: WriteTarget, external_name: str, annotation_type: str) -> Path:
        check_annotation_request(external_name, annotation_type)
        path = target.document
        if path is None:
            if target.root is None:
                raise WriteError("Write target has neither a document nor a root")
            if target.entry is not None:
                self._attach_root(target.entry, target.root)
            path = await create_document_and_root(self.store.io, target.root, target.package_name)

        async with self.store.lock(path):
            try:
                document = await self.store.load(path)
            except ParseError as e:
                raise WriteError(str(e)) from e
            except OSError as e:
                raise WriteError(f"Cannot read {path}: {e}") from e
            if document is None:
                raise WriteError(f"Annotations document {path} disappeared")
            updated = upsert(document, external_name, annotation_type)
            try:
                await self.store.save(updated)
            except OSError as e:
                raise WriteError(f"Cannot write {path}: {e}") from e
        logger.info("Annotated %s with %s in %s", external_name, annotation_type, path)
        return path

    async def annotate(self, symbol: SymbolRef, annotation_type: str, root: Path | None = None) -> AnnotateResult:
        target = await (self.request_target(symbol) if root is None else self.target_in_root(symbol, root))
        if isinstance(target, AnnotateStatus):
            return AnnotateResult(status=target)
        path = await self.annotate_at(target, symbol.external_name, annotation_type)
        return AnnotateResult(status=AnnotateStatus.ANNOTATED, path=path)

    def _new_root_target(self, resolution: NotFound, root: Path) -> WriteTarget | AnnotateStatus:
        if resolution.entry is None:
            return AnnotateStatus.NO_DEPENDENCY_ENTRY
        return WriteTarget(package_name=resolution.package_name, root=root, entry=resolution.entry)

    def _attach_root(self, entry: OrderEntry, root: Path) -> None:
        if root.resolve() in [attached.resolve() for attached in self.project.annotation_roots(entry)]:
            return
        try:
            self.project.attach_annotation_root(entry, root)
        except ProjectConfigError as e:
            raise WriteError(f"Cannot attach {root} to {entry.presentable_name}: {e}") from e
        logger.info("Attached annotation root %s to %s", root, entry.presentable_name)
