"""In-memory tree of one ``annotations.xml`` document.

The persisted form is::

    <root>
      <item name="pkg.Foo int bar()">
        <annotation name="org.jetbrains.annotations.Nullable"/>
        <annotation name="javax.annotation.Nonnull">
          <val name="when" value="ALWAYS"/>
        </annotation>
      </item>
    </root>

Any tag is accepted at each level; only elements count, so comments written
by people editing the file are skipped on read and kept on write.
"""

from __future__ import annotations

import copy
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from external_annotations.errors import ParseError
from external_annotations.models import AnnotationEntry, AnnotationParameter, SymbolEntry

ITEM_TAG = "item"
ANNOTATION_TAG = "annotation"
EMPTY_DOCUMENT = "<root></root>"

_INDENT = "  "
_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _child_elements(element: ET.Element) -> Iterator[ET.Element]:
    for child in element:
        # Comments and processing instructions carry a callable tag.
        if isinstance(child.tag, str):
            yield child


class AnnotationsDocument:
    def __init__(self, path: Path, root: ET.Element, has_declaration: bool = False) -> None:
        self.path = path
        self.root = root
        self.has_declaration = has_declaration

    def items(self) -> Iterator[ET.Element]:
        return _child_elements(self.root)

    def find_item(self, external_name: str) -> ET.Element | None:
        for item in self.items():
            if item.get("name") == external_name:
                return item
        return None

    def entries(self) -> list[SymbolEntry]:
        return [_to_symbol_entry(item) for item in self.items()]

    def find_entry(self, external_name: str) -> SymbolEntry | None:
        item = self.find_item(external_name)
        return _to_symbol_entry(item) if item is not None else None

    def copy(self) -> AnnotationsDocument:
        return AnnotationsDocument(self.path, copy.deepcopy(self.root), self.has_declaration)

    def to_xml(self) -> str:
        body = ET.tostring(self.root, encoding="unicode")
        prefix = _XML_DECLARATION if self.has_declaration else ""
        return f"{prefix}{body}\n"


def parse_document(path: Path, text: str) -> AnnotationsDocument:
    if not text.strip():
        raise ParseError(path, "document is empty")
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        parser.feed(text)
        root = parser.close()
    except ET.ParseError as e:
        raise ParseError(path, str(e)) from e
    return AnnotationsDocument(path, root, has_declaration=text.lstrip().startswith("<?xml"))


def matching_annotations(entry: SymbolEntry, type_name: str) -> Iterator[AnnotationEntry]:
    """Yield the annotations of *entry* named *type_name*, in document order."""
    return (annotation for annotation in entry.annotations if annotation.name == type_name)


def find_annotation(entry: SymbolEntry, type_name: str) -> AnnotationEntry | None:
    return next(matching_annotations(entry, type_name), None)


def append_child(parent: ET.Element, child: ET.Element, depth: int) -> None:
    """Append *child* as the last child of *parent*, which sits at *depth*.

    Existing whitespace is only touched between the previous last child and
    the new one.
    """
    child_indent = "\n" + _INDENT * (depth + 1)
    closing_indent = "\n" + _INDENT * depth
    if len(parent) == 0:
        parent.text = child_indent
    else:
        parent[-1].tail = child_indent
    child.tail = closing_indent
    parent.append(child)


def _to_symbol_entry(item: ET.Element) -> SymbolEntry:
    annotations = [
        AnnotationEntry(
            name=annotation.get("name", ""),
            parameters=[
                AnnotationParameter(name=param.get("name", ""), value=param.get("value", ""))
                for param in _child_elements(annotation)
            ],
        )
        for annotation in _child_elements(item)
    ]
    return SymbolEntry(name=item.get("name", ""), annotations=annotations)
