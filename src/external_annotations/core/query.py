from __future__ import annotations

import logging

from external_annotations.core.resolver import Located, RootResolver
from external_annotations.core.synthesis import synthesize
from external_annotations.errors import ConstructionError, ParseError
from external_annotations.models import SymbolEntry, SymbolRef, SynthesizedAnnotation
from external_annotations.store.document import matching_annotations
from external_annotations.store.documents import DocumentStore

logger = logging.getLogger(__name__)


class AnnotationQuery:
    """Read side of the repository. Never raises for missing or broken documents."""

    def __init__(self, resolver: RootResolver, store: DocumentStore) -> None:
        self.resolver = resolver
        self.store = store

    async def find(self, symbol: SymbolRef, annotation_type: str) -> SynthesizedAnnotation | None:
        entry = await self.find_entry(symbol)
        if entry is None:
            return None
        for annotation in matching_annotations(entry, annotation_type):
            try:
                return synthesize(annotation)
            except ConstructionError:
                logger.exception("Cannot build @%s for %s", annotation_type, symbol.external_name)
        return None

    async def find_all(self, symbol: SymbolRef) -> list[SynthesizedAnnotation]:
        entry = await self.find_entry(symbol)
        if entry is None:
            return []
        result: list[SynthesizedAnnotation] = []
        for annotation in entry.annotations:
            try:
                result.append(synthesize(annotation))
            except ConstructionError:
                logger.exception("Cannot build @%s for %s", annotation.name, symbol.external_name)
        return result

    async def find_entry(self, symbol: SymbolRef) -> SymbolEntry | None:
        resolution = await self.resolver.locate(symbol)
        if not isinstance(resolution, Located):
            return None
        path = resolution.path
        try:
            async with self.store.lock(path):
                document = await self.store.load(path)
        except ParseError as e:
            logger.warning("Ignoring external annotations of %s: %s", symbol.external_name, e)
            return None
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return None
        if document is None:
            return None
        return document.find_entry(symbol.external_name)
