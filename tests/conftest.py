"""Shared fixtures and helpers for tests."""

import json
from pathlib import Path

import pytest

from external_annotations.core.ports.project import OrderEntry
from external_annotations.core.repository import ExternalAnnotationsRepository
from external_annotations.core.resolver import RootResolver
from external_annotations.project.model import ConfiguredProject
from external_annotations.store import DocumentStore, FileSystemDocumentIO

_TESTS_ROOT = Path(__file__).parent

APP_FILE = Path("src/com/example/App.java")
GUAVA_FILE = Path("lib/guava/com/google/common/base/Strings.java")
JDK_FILE = Path("jdk/java/lang/String.java")


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_TESTS_ROOT)
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakePrompter:
    def __init__(self, root: Path | None = None, confirm: bool | None = None) -> None:
        self.root = root
        self.confirm = confirm
        self.chosen_for: list[OrderEntry] = []
        self.confirm_calls = 0

    def choose_directory(self, entry: OrderEntry) -> Path | None:
        self.chosen_for.append(entry)
        return self.root

    def confirm_usage(self) -> bool | None:
        self.confirm_calls += 1
        return self.confirm


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def make_repository(
    project: ConfiguredProject,
    prompter: FakePrompter | None = None,
    io: FileSystemDocumentIO | None = None,
) -> ExternalAnnotationsRepository:
    io = io or FileSystemDocumentIO()
    resolver = RootResolver(project, project, io)
    return ExternalAnnotationsRepository(resolver, DocumentStore(io), project, prompter)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with one module depending on a library and an SDK."""
    tmp_path = tmp_path.resolve()
    write_file(tmp_path / APP_FILE, "package com.example;\nclass App {}\n")
    write_file(tmp_path / GUAVA_FILE, "package com.google.common.base;\n")
    write_file(tmp_path / JDK_FILE, "package java.lang;\n")
    for name in ("app-annotations", "guava-annotations", "jdk-annotations", "chosen"):
        (tmp_path / name).mkdir()
    layout = {
        "modules": [
            {
                "name": "app",
                "source_roots": ["src"],
                "annotation_roots": [],
                "dependencies": ["library:guava", "sdk:jdk"],
            }
        ],
        "libraries": [{"name": "guava", "class_roots": ["lib/guava"], "annotation_roots": []}],
        "sdks": [{"name": "jdk", "class_roots": ["jdk"], "annotation_roots": []}],
    }
    (tmp_path / "external-annotations.json").write_text(json.dumps(layout, indent=2), encoding="utf-8")
    return tmp_path


@pytest.fixture
def layout_file(project_dir: Path) -> Path:
    return project_dir / "external-annotations.json"


@pytest.fixture
def project(layout_file: Path) -> ConfiguredProject:
    return ConfiguredProject.load(layout_file)
