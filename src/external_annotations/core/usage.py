from __future__ import annotations

import logging
from enum import Enum

from external_annotations.core.ports.project import ProjectRootModel
from external_annotations.core.ports.prompts import PreferenceStore, Prompter
from external_annotations.models import SymbolRef

logger = logging.getLogger(__name__)

USAGE_PREFERENCE_KEY = "ExternalAnnotations"


class UsageState(str, Enum):
    OUTSIDE_PROJECT = "outside-project"
    ALLOWED_BY_ROOTS = "allowed-by-roots"
    USER_DECIDED = "user-decided"
    UNKNOWN = "unknown"


class UsagePolicy:
    """Decide whether external annotations are consulted for a symbol.

    Symbols outside the project always use them, as do files whose dependency
    entries already carry an annotation root. Otherwise the project-wide
    answer stored under ``ExternalAnnotations`` applies; the first time, the
    user is asked and the answer is stored.
    """

    def __init__(self, project: ProjectRootModel, preferences: PreferenceStore, prompter: Prompter) -> None:
        self.project = project
        self.preferences = preferences
        self.prompter = prompter

    def state(self, symbol: SymbolRef) -> UsageState:
        file = symbol.containing_file
        if not self.project.is_in_project(file):
            return UsageState.OUTSIDE_PROJECT
        for entry in self.project.ordered_dependency_entries(file):
            if self.project.annotation_roots(entry):
                return UsageState.ALLOWED_BY_ROOTS
        if self.preferences.get_value(USAGE_PREFERENCE_KEY) is not None:
            return UsageState.USER_DECIDED
        return UsageState.UNKNOWN

    def use_external_annotations(self, symbol: SymbolRef) -> bool:
        state = self.state(symbol)
        if state in (UsageState.OUTSIDE_PROJECT, UsageState.ALLOWED_BY_ROOTS):
            return True
        if state is UsageState.USER_DECIDED:
            return self.preferences.get_value(USAGE_PREFERENCE_KEY) == "true"

        answer = self.prompter.confirm_usage()
        if answer is None:
            return False
        self.preferences.set_value(USAGE_PREFERENCE_KEY, "true" if answer else "false")
        logger.info("Stored external annotations usage default: %s", answer)
        return answer
