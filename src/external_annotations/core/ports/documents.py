from pathlib import Path
from typing import Protocol


class DocumentIO(Protocol):
    async def exists(self, path: Path) -> bool: ...

    async def is_directory(self, path: Path) -> bool: ...

    async def read_document(self, path: Path) -> str | None: ...

    async def create_directory(self, parent: Path, name: str) -> Path: ...

    async def create_document(self, parent: Path, filename: str, initial_content: str) -> Path: ...

    async def write_document(self, path: Path, content: str) -> None: ...

    async def remove_directory(self, path: Path) -> None: ...
