from typing import Protocol

from external_annotations.models import SymbolDeclaration


class SymbolNamer(Protocol):
    def external_name(self, declaration: SymbolDeclaration) -> str: ...
