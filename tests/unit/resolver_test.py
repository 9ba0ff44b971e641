"""Tests for document location precedence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from external_annotations.core.resolver import CandidateOrigin, Located, NotFound, RootResolver
from external_annotations.models import OwnerKind, SymbolRef
from external_annotations.project.model import ConfiguredProject
from external_annotations.store import FileSystemDocumentIO
from tests.conftest import APP_FILE, GUAVA_FILE, write_file


def _resolver(project: ConfiguredProject) -> RootResolver:
    return RootResolver(project, project, FileSystemDocumentIO())


def _attach(project: ConfiguredProject, file: Path, root: Path, entry_index: int = 0) -> None:
    entry = project.ordered_dependency_entries(file)[entry_index]
    project.attach_annotation_root(entry, root)


@pytest.mark.asyncio
async def test_package_local_document_wins_over_attached_root(project_dir: Path, project: ConfiguredProject) -> None:
    app_file = project_dir / APP_FILE
    local = write_file(project_dir / "src/com/example/annotations.xml", "<root></root>")
    write_file(project_dir / "app-annotations/com/example/annotations.xml", "<root></root>")
    _attach(project, app_file, project_dir / "app-annotations")

    symbol = SymbolRef(external_name="com.example.App", package_name="com.example", containing_file=app_file)
    resolution = await _resolver(project).locate(symbol)

    assert isinstance(resolution, Located)
    assert resolution.path == local
    assert resolution.candidate.origin is CandidateOrigin.PACKAGE


@pytest.mark.asyncio
async def test_attached_roots_searched_in_order(project_dir: Path, project: ConfiguredProject) -> None:
    app_file = project_dir / APP_FILE
    second = project_dir / "second"
    second.mkdir()
    _attach(project, app_file, project_dir / "app-annotations")
    _attach(project, app_file, second)
    expected = write_file(second / "com/example/annotations.xml", "<root></root>")

    symbol = SymbolRef(external_name="com.example.App", package_name="com.example", containing_file=app_file)
    resolution = await _resolver(project).locate(symbol)

    assert isinstance(resolution, Located)
    assert resolution.path == expected
    assert resolution.candidate.root == second
    assert resolution.candidate.origin is CandidateOrigin.ATTACHED_ROOT


@pytest.mark.asyncio
async def test_only_first_dependency_entry_is_searched(project_dir: Path, project: ConfiguredProject) -> None:
    app_file = project_dir / APP_FILE
    # Entry 1 is the guava library; the module's own entry (0) has no roots.
    _attach(project, app_file, project_dir / "guava-annotations", entry_index=1)
    write_file(project_dir / "guava-annotations/com/example/annotations.xml", "<root></root>")

    symbol = SymbolRef(external_name="com.example.App", package_name="com.example", containing_file=app_file)
    resolution = await _resolver(project).locate(symbol)

    assert isinstance(resolution, NotFound)
    assert resolution.package_name == "com.example"
    assert resolution.entry is not None
    assert resolution.entry.owner.kind is OwnerKind.MODULE


@pytest.mark.asyncio
async def test_library_file_uses_library_roots(project_dir: Path, project: ConfiguredProject) -> None:
    guava_file = project_dir / GUAVA_FILE
    _attach(project, guava_file, project_dir / "guava-annotations")
    expected = write_file(project_dir / "guava-annotations/com/google/common/base/annotations.xml", "<root></root>")

    symbol = SymbolRef(
        external_name="com.google.common.base.Strings",
        package_name="com.google.common.base",
        containing_file=guava_file,
    )
    resolution = await _resolver(project).locate(symbol)

    assert isinstance(resolution, Located)
    assert resolution.path == expected


@pytest.mark.asyncio
async def test_not_found_without_entries(tmp_path: Path) -> None:
    layout_file = tmp_path / "external-annotations.json"
    layout_file.write_text(json.dumps({"modules": []}), encoding="utf-8")
    project = ConfiguredProject.load(layout_file)

    symbol = SymbolRef(external_name="x.Y", package_name="x", containing_file=tmp_path / "Y.java")
    resolution = await _resolver(project).locate(symbol)

    assert resolution == NotFound(package_name="x", entry=None)


def test_candidate_locations_order(project_dir: Path, project: ConfiguredProject) -> None:
    app_file = project_dir / APP_FILE
    _attach(project, app_file, project_dir / "app-annotations")

    symbol = SymbolRef(external_name="com.example.App", package_name="com.example", containing_file=app_file)
    candidates = _resolver(project).candidate_locations(symbol)

    assert [c.path for c in candidates] == [
        project_dir / "src/com/example/annotations.xml",
        project_dir / "app-annotations/com/example/annotations.xml",
    ]
    assert [c.origin for c in candidates] == [CandidateOrigin.PACKAGE, CandidateOrigin.ATTACHED_ROOT]
