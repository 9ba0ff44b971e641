from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

ANNOTATIONS_XML = "annotations.xml"


class SymbolKind(str, Enum):
    CLASS = "class"
    FIELD = "field"
    METHOD = "method"
    PARAMETER = "parameter"


class OwnerKind(str, Enum):
    MODULE = "module"
    LIBRARY = "library"
    SDK = "sdk"


class SymbolDeclaration(BaseModel):
    class_name: str
    kind: SymbolKind = SymbolKind.CLASS
    member_name: str | None = None
    return_type: str | None = None
    parameter_types: list[str] = Field(default_factory=list)
    parameter_index: int | None = None


class SymbolRef(BaseModel):
    external_name: str
    package_name: str
    containing_file: Path


class AnnotationParameter(BaseModel):
    name: str
    value: str


class AnnotationEntry(BaseModel):
    name: str
    parameters: list[AnnotationParameter] = Field(default_factory=list)


class SymbolEntry(BaseModel):
    name: str
    annotations: list[AnnotationEntry] = Field(default_factory=list)


class SynthesizedAnnotation(BaseModel):
    name: str
    parameters: list[AnnotationParameter] = Field(default_factory=list)
    text: str
