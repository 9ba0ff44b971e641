from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from external_annotations.core.ports.documents import DocumentIO
from external_annotations.core.resolver import package_path
from external_annotations.core.synthesis import is_qualified_name
from external_annotations.errors import ConstructionError, CreationError
from external_annotations.models import ANNOTATIONS_XML
from external_annotations.store.document import (
    ANNOTATION_TAG,
    EMPTY_DOCUMENT,
    ITEM_TAG,
    AnnotationsDocument,
    append_child,
)

logger = logging.getLogger(__name__)

# Characters outside the XML 1.0 Char production cannot be written to an attribute.
_XML_ILLEGAL_RE = re.compile("[^\t\n\r\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def check_annotation_request(external_name: str, annotation_type: str) -> None:
    if not external_name.strip():
        raise ConstructionError("External name must not be empty")
    if _XML_ILLEGAL_RE.search(external_name):
        raise ConstructionError(f"External name contains characters not allowed in XML: {external_name!r}")
    if not is_qualified_name(annotation_type):
        raise ConstructionError(f"Invalid annotation type name: {annotation_type!r}")


def upsert(document: AnnotationsDocument, external_name: str, annotation_type: str) -> AnnotationsDocument:
    """Return a copy of *document* with *annotation_type* appended to *external_name*.

    The annotation becomes the last child of the symbol's item; a symbol
    without an item gets a new one as the last child of the root. Repeated
    calls append repeated annotations. *document* itself is left untouched.
    """
    check_annotation_request(external_name, annotation_type)

    updated = document.copy()
    annotation = ET.Element(ANNOTATION_TAG, {"name": annotation_type})
    item = updated.find_item(external_name)
    if item is not None:
        append_child(item, annotation, depth=1)
        logger.debug("Appended %s to existing item %s in %s", annotation_type, external_name, document.path)
        return updated

    item = ET.Element(ITEM_TAG, {"name": external_name})
    append_child(item, annotation, depth=1)
    append_child(updated.root, item, depth=0)
    logger.debug("Added item %s with %s to %s", external_name, annotation_type, document.path)
    return updated


async def create_document_and_root(io: DocumentIO, root_dir: Path, package_name: str) -> Path:
    """Ensure ``<root_dir>/<package path>/annotations.xml`` exists and return its path.

    Existing directories and documents are reused. If creation fails, the
    directories made by this call are removed again and ``CreationError`` is
    raised.
    """
    if not await io.is_directory(root_dir):
        raise CreationError(f"Annotation root {root_dir} is not a directory")

    created: list[Path] = []
    directory = root_dir
    try:
        for segment in package_path(package_name).parts:
            child = directory / segment
            if await io.is_directory(child):
                directory = child
                continue
            try:
                directory = await io.create_directory(directory, segment)
            except FileExistsError:
                directory = child
                continue
            created.append(directory)

        path = directory / ANNOTATIONS_XML
        if await io.exists(path):
            return path
        try:
            return await io.create_document(directory, ANNOTATIONS_XML, EMPTY_DOCUMENT)
        except FileExistsError:
            return path
    except OSError as e:
        await _remove_created(io, created)
        raise CreationError(f"Could not create annotations document for '{package_name}' under {root_dir}: {e}") from e


async def _remove_created(io: DocumentIO, created: list[Path]) -> None:
    for directory in reversed(created):
        try:
            await io.remove_directory(directory)
        except OSError:
            logger.warning("Could not remove partially created directory %s", directory)
