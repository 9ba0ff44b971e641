from __future__ import annotations

from dataclasses import dataclass

from external_annotations.config import Settings
from external_annotations.core.ports.prompts import NonInteractivePrompter, PreferenceStore, Prompter
from external_annotations.core.repository import ExternalAnnotationsRepository
from external_annotations.core.resolver import RootResolver
from external_annotations.core.usage import UsagePolicy
from external_annotations.project.model import ConfiguredProject
from external_annotations.project.preferences import JsonPreferenceStore
from external_annotations.store.documents import DocumentStore
from external_annotations.store.filesystem import FileSystemDocumentIO


@dataclass
class Services:
    project: ConfiguredProject
    resolver: RootResolver
    repository: ExternalAnnotationsRepository
    usage: UsagePolicy
    preferences: PreferenceStore


def build_services(settings: Settings, prompter: Prompter | None = None) -> Services:
    """Wire the repository for the project layout named in *settings*.

    Raises ``ProjectConfigError`` when the layout cannot be loaded.
    """
    if prompter is None or settings.headless:
        prompter = NonInteractivePrompter()
    project = ConfiguredProject.load(settings.project_file)
    io = FileSystemDocumentIO()
    resolver = RootResolver(project, project, io)
    repository = ExternalAnnotationsRepository(resolver, DocumentStore(io), project, prompter)
    preferences = JsonPreferenceStore(settings.resolved_preferences_file())
    return Services(
        project=project,
        resolver=resolver,
        repository=repository,
        usage=UsagePolicy(project, preferences, prompter),
        preferences=preferences,
    )
