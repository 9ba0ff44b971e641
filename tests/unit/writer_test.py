"""Tests for merge-insert and document bootstrap."""

from __future__ import annotations

from pathlib import Path

import pytest

from external_annotations.core.writer import create_document_and_root, upsert
from external_annotations.errors import ConstructionError, CreationError
from external_annotations.store import (
    EMPTY_DOCUMENT,
    AnnotationsDocument,
    FileSystemDocumentIO,
    InMemoryDocumentIO,
    parse_document,
)

_PATH = Path("/roots/pkg/annotations.xml")


def _names(doc: AnnotationsDocument, external_name: str) -> list[str]:
    entry = doc.find_entry(external_name)
    assert entry is not None
    return [a.name for a in entry.annotations]


class TestUpsert:
    def test_on_empty_document(self) -> None:
        doc = upsert(parse_document(_PATH, EMPTY_DOCUMENT), "pkg.Foo#bar", "org.X.Nullable")

        entries = doc.entries()
        assert len(entries) == 1
        assert entries[0].name == "pkg.Foo#bar"
        assert len(entries[0].annotations) == 1
        assert entries[0].annotations[0].name == "org.X.Nullable"
        assert entries[0].annotations[0].parameters == []

    def test_appends_to_existing_symbol(self) -> None:
        original = parse_document(
            _PATH,
            '<root><item name="pkg.Foo#bar"><annotation name="org.X.A"/></item>'
            '<item name="pkg.Other"><annotation name="org.X.C"/></item></root>',
        )
        doc = upsert(original, "pkg.Foo#bar", "org.X.B")

        assert _names(doc, "pkg.Foo#bar") == ["org.X.A", "org.X.B"]
        assert _names(doc, "pkg.Other") == ["org.X.C"]
        assert [e.name for e in doc.entries()] == ["pkg.Foo#bar", "pkg.Other"]

    def test_new_symbol_is_last(self) -> None:
        original = parse_document(
            _PATH, '<root><item name="a"><annotation name="T"/></item><item name="b"><annotation name="T"/></item></root>'
        )
        doc = upsert(original, "c", "org.X.N")

        assert [e.name for e in doc.entries()] == ["a", "b", "c"]
        assert doc.entries()[:2] == original.entries()

    def test_never_creates_duplicate_items(self) -> None:
        doc = parse_document(_PATH, EMPTY_DOCUMENT)
        for annotation in ("org.X.A", "org.X.B", "org.X.C"):
            doc = upsert(doc, "pkg.Foo#bar", annotation)
        assert len(doc.entries()) == 1
        assert _names(doc, "pkg.Foo#bar") == ["org.X.A", "org.X.B", "org.X.C"]

    def test_repeated_upsert_appends_duplicates(self) -> None:
        doc = parse_document(_PATH, EMPTY_DOCUMENT)
        doc = upsert(upsert(doc, "s", "org.X.A"), "s", "org.X.A")
        assert _names(doc, "s") == ["org.X.A", "org.X.A"]

    def test_input_document_is_untouched(self) -> None:
        original = parse_document(_PATH, EMPTY_DOCUMENT)
        upsert(original, "s", "org.X.A")
        assert original.entries() == []

    @pytest.mark.parametrize(
        ("external_name", "annotation_type"),
        [
            ("", "org.X.A"),
            ("s", ""),
            ("s", "org.X.A(1)"),
            ("s", "org..A"),
            ("s", "@org.X.A"),
            ("pkg.Foo\x01x", "org.X.A"),
            ("pkg.Foo \uFFFE", "org.X.A"),
        ],
    )
    def test_invalid_request_raises_before_mutation(self, external_name: str, annotation_type: str) -> None:
        original = parse_document(_PATH, '<root><item name="s"><annotation name="org.X.A"/></item></root>')
        before = original.to_xml()
        with pytest.raises(ConstructionError):
            upsert(original, external_name, annotation_type)
        assert original.to_xml() == before

    def test_output_is_indented(self) -> None:
        doc = upsert(parse_document(_PATH, EMPTY_DOCUMENT), "pkg.Foo", "org.X.A")
        assert doc.to_xml() == '<root>\n  <item name="pkg.Foo">\n    <annotation name="org.X.A" />\n  </item>\n</root>\n'

    def test_comments_preserved(self) -> None:
        original = parse_document(_PATH, "<root>\n  <!-- keep me -->\n</root>")
        doc = upsert(original, "s", "org.X.A")
        xml = doc.to_xml()
        assert "<!-- keep me -->" in xml
        assert xml.index("keep me") < xml.index('name="s"')


class TestCreateDocumentAndRoot:
    @pytest.mark.asyncio
    async def test_creates_package_directories_and_document(self, tmp_path: Path) -> None:
        path = await create_document_and_root(FileSystemDocumentIO(), tmp_path, "com.example.util")

        assert path == tmp_path / "com" / "example" / "util" / "annotations.xml"
        assert path.read_text(encoding="utf-8") == EMPTY_DOCUMENT

    @pytest.mark.asyncio
    async def test_reuses_existing_directories_and_document(self, tmp_path: Path) -> None:
        existing = tmp_path / "com" / "example" / "annotations.xml"
        existing.parent.mkdir(parents=True)
        existing.write_text('<root><item name="x"/></root>', encoding="utf-8")

        path = await create_document_and_root(FileSystemDocumentIO(), tmp_path, "com.example")

        assert path == existing
        assert existing.read_text(encoding="utf-8") == '<root><item name="x"/></root>'

    @pytest.mark.asyncio
    async def test_default_package_uses_root(self, tmp_path: Path) -> None:
        path = await create_document_and_root(FileSystemDocumentIO(), tmp_path, "")
        assert path == tmp_path / "annotations.xml"

    @pytest.mark.asyncio
    async def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CreationError):
            await create_document_and_root(FileSystemDocumentIO(), tmp_path / "missing", "pkg")

    @pytest.mark.asyncio
    async def test_failure_removes_created_directories(self) -> None:
        class _FailingIO(InMemoryDocumentIO):
            async def create_document(self, parent: Path, filename: str, initial_content: str) -> Path:
                raise PermissionError("read-only")

        io = _FailingIO(directories=[Path("/root-dir")])
        with pytest.raises(CreationError):
            await create_document_and_root(io, Path("/root-dir"), "a.b")

        assert await io.is_directory(Path("/root-dir"))
        assert not await io.is_directory(Path("/root-dir/a"))
        assert not await io.is_directory(Path("/root-dir/a/b"))
        assert io.documents == {}
