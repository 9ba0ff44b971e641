from external_annotations.store.document import (
    ANNOTATION_TAG,
    EMPTY_DOCUMENT,
    ITEM_TAG,
    AnnotationsDocument,
    find_annotation,
    matching_annotations,
    parse_document,
)
from external_annotations.store.documents import DocumentStore
from external_annotations.store.filesystem import FileSystemDocumentIO
from external_annotations.store.memory import InMemoryDocumentIO

__all__ = [
    "ANNOTATION_TAG",
    "EMPTY_DOCUMENT",
    "ITEM_TAG",
    "AnnotationsDocument",
    "DocumentStore",
    "FileSystemDocumentIO",
    "InMemoryDocumentIO",
    "find_annotation",
    "matching_annotations",
    "parse_document",
]
