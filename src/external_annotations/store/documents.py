from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from external_annotations.core.ports.documents import DocumentIO
from external_annotations.store.document import AnnotationsDocument, parse_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CachedDocument:
    text: str
    document: AnnotationsDocument


class DocumentStore:
    """Owns the parsed annotation documents and their per-document locks.

    Callers must hold ``lock(path)`` around ``load`` and ``save`` of the same
    document; loads of different documents are independent.
    """

    def __init__(self, io: DocumentIO) -> None:
        self.io = io
        self._cache: dict[Path, _CachedDocument] = {}
        self._locks: dict[Path, asyncio.Lock] = {}

    def lock(self, path: Path) -> asyncio.Lock:
        lock = self._locks.get(path)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[path] = lock
        return lock

    async def load(self, path: Path) -> AnnotationsDocument | None:
        """Return the parsed document at *path*, or ``None`` when there is none.

        Raises ``ParseError`` for malformed documents. The parse is reused
        while the stored text is unchanged.
        """
        text = await self.io.read_document(path)
        if text is None:
            self._cache.pop(path, None)
            return None
        cached = self._cache.get(path)
        if cached is not None and cached.text == text:
            return cached.document
        logger.debug("Parsing annotations document %s", path)
        document = parse_document(path, text)
        self._cache[path] = _CachedDocument(text, document)
        return document

    async def save(self, document: AnnotationsDocument) -> None:
        text = document.to_xml()
        await self.io.write_document(document.path, text)
        self._cache[document.path] = _CachedDocument(text, document)
