from pathlib import Path, PurePosixPath


class InMemoryDocumentIO:
    """``DocumentIO`` over dictionaries, for tests and dry runs.

    Paths are compared as given; directories must be registered before
    documents can be created inside them.
    """

    def __init__(self, directories: list[Path] | None = None) -> None:
        self.directories: set[PurePosixPath] = {PurePosixPath(d) for d in directories or []}
        self.documents: dict[PurePosixPath, str] = {}
        self.writes = 0

    def add_document(self, path: Path, content: str) -> None:
        key = PurePosixPath(path)
        self.directories.add(key.parent)
        self.documents[key] = content

    async def exists(self, path: Path) -> bool:
        return PurePosixPath(path) in self.documents

    async def is_directory(self, path: Path) -> bool:
        return PurePosixPath(path) in self.directories

    async def read_document(self, path: Path) -> str | None:
        return self.documents.get(PurePosixPath(path))

    async def create_directory(self, parent: Path, name: str) -> Path:
        if PurePosixPath(parent) not in self.directories:
            raise FileNotFoundError(f"No such directory: {parent}")
        directory = PurePosixPath(parent) / name
        if directory in self.directories:
            raise FileExistsError(f"Directory exists: {directory}")
        self.directories.add(directory)
        return Path(directory)

    async def create_document(self, parent: Path, filename: str, initial_content: str) -> Path:
        key = PurePosixPath(parent) / filename
        if PurePosixPath(parent) not in self.directories:
            raise FileNotFoundError(f"No such directory: {parent}")
        if key in self.documents:
            raise FileExistsError(f"Document exists: {key}")
        self.documents[key] = initial_content
        return Path(key)

    async def write_document(self, path: Path, content: str) -> None:
        key = PurePosixPath(path)
        if key.parent not in self.directories:
            raise FileNotFoundError(f"No such directory: {key.parent}")
        self.documents[key] = content
        self.writes += 1

    async def remove_directory(self, path: Path) -> None:
        self.directories.discard(PurePosixPath(path))
