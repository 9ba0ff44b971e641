from pathlib import Path


class ExternalAnnotationsError(Exception):
    """Base class for every error raised by the annotation repository."""


class ParseError(ExternalAnnotationsError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Malformed annotations document {path}: {reason}")
        self.path = path
        self.reason = reason


class ConstructionError(ExternalAnnotationsError):
    """An annotation literal or document node could not be built from its parts."""


class WriteError(ExternalAnnotationsError):
    """A write against an annotations document was aborted without changing it."""


class CreationError(WriteError):
    """A root directory chain or an annotations document could not be created."""


class ProjectConfigError(ExternalAnnotationsError):
    """The project layout file is missing, invalid or could not be saved."""
