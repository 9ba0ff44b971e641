from pathlib import Path
from typing import Protocol

from external_annotations.core.ports.project import OrderEntry


class Prompter(Protocol):
    """Interactive questions asked outside of any document lock.

    Non-interactive implementations answer ``None`` instead of blocking.
    """

    def choose_directory(self, entry: OrderEntry) -> Path | None: ...

    def confirm_usage(self) -> bool | None: ...


class PreferenceStore(Protocol):
    def get_value(self, key: str) -> str | None: ...

    def set_value(self, key: str, value: str) -> None: ...


class NonInteractivePrompter:
    def choose_directory(self, entry: OrderEntry) -> Path | None:
        return None

    def confirm_usage(self) -> bool | None:
        return None
