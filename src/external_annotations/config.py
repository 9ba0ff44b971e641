from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_PREFERENCES_NAME = ".external-annotations-preferences.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EXTERNAL_ANNOTATIONS_", env_file=".env", env_file_encoding="utf-8")

    project_file: Path = Path("external-annotations.json")
    preferences_file: Path | None = None
    headless: bool = False
    log_level: str = "WARNING"

    def resolved_preferences_file(self) -> Path:
        if self.preferences_file is not None:
            return self.preferences_file
        return self.project_file.parent / _DEFAULT_PREFERENCES_NAME


@lru_cache
def get_settings() -> Settings:
    return Settings()
