"""Canonical external names for Java-style symbol declarations.

The format matches the keys found in ``annotations.xml`` files:

* class: ``pkg.Foo``
* field: ``pkg.Foo count``
* method: ``pkg.Foo int indexOf(java.lang.String, int)``
* constructor (no return type): ``pkg.Foo Foo(int)``
* parameter: the method name followed by the zero-based parameter index
"""

from pathlib import Path

from external_annotations.models import SymbolDeclaration, SymbolKind, SymbolRef


class JavaSymbolNamer:
    def external_name(self, declaration: SymbolDeclaration) -> str:
        class_name = declaration.class_name.strip()
        if not class_name:
            raise ValueError("class_name must not be empty")
        if declaration.kind is SymbolKind.CLASS:
            return class_name
        if not declaration.member_name:
            raise ValueError(f"member_name is required for {declaration.kind.value} declarations")
        if declaration.kind is SymbolKind.FIELD:
            return f"{class_name} {declaration.member_name}"

        signature = _method_signature(declaration)
        if declaration.kind is SymbolKind.METHOD:
            return f"{class_name} {signature}"

        index = declaration.parameter_index
        if index is None or index < 0:
            raise ValueError("parameter_index is required for parameter declarations")
        if declaration.parameter_types and index >= len(declaration.parameter_types):
            raise ValueError(f"parameter_index {index} out of range for {signature}")
        return f"{class_name} {signature} {index}"


def _method_signature(declaration: SymbolDeclaration) -> str:
    params = ", ".join(t.strip() for t in declaration.parameter_types)
    head = f"{declaration.return_type} " if declaration.return_type else ""
    return f"{head}{declaration.member_name}({params})"


def guess_package_name(external_name: str) -> str:
    """Return the package of the class an external name starts with.

    Segments up to the first capitalized one are taken as the package, which
    holds for conventionally named Java code.
    """
    class_name = external_name.split(" ", 1)[0]
    segments = class_name.split(".")
    package: list[str] = []
    for segment in segments[:-1]:
        if segment[:1].isupper():
            break
        package.append(segment)
    return ".".join(package)


def symbol_ref(external_name: str, containing_file: str | Path, package_name: str | None = None) -> SymbolRef:
    package = package_name if package_name is not None else guess_package_name(external_name)
    return SymbolRef(external_name=external_name, package_name=package, containing_file=Path(containing_file))
