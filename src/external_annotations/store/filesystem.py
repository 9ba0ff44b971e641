import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class FileSystemDocumentIO:
    """Local filesystem implementation of the ``DocumentIO`` port."""

    async def exists(self, path: Path) -> bool:
        return path.is_file()

    async def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    async def read_document(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    async def create_directory(self, parent: Path, name: str) -> Path:
        directory = parent / name
        directory.mkdir()
        logger.debug("Created directory %s", directory)
        return directory

    async def create_document(self, parent: Path, filename: str, initial_content: str) -> Path:
        path = parent / filename
        with path.open("x", encoding="utf-8") as f:
            f.write(initial_content)
        logger.info("Created annotations document %s", path)
        return path

    async def write_document(self, path: Path, content: str) -> None:
        # Readers never see a partial file.
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as temp_file:
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
            temp_path = Path(temp_file.name)
        try:
            os.replace(temp_path, path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    async def remove_directory(self, path: Path) -> None:
        path.rmdir()
