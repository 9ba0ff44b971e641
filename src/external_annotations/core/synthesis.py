import re

from external_annotations.errors import ConstructionError
from external_annotations.models import AnnotationEntry, SynthesizedAnnotation

_IDENTIFIER = r"[A-Za-z_$][A-Za-z0-9_$]*"
_IDENTIFIER_RE = re.compile(rf"^{_IDENTIFIER}$")
_QUALIFIED_NAME_RE = re.compile(rf"^{_IDENTIFIER}(\.{_IDENTIFIER})*$")
_BRACKETS = {")": "(", "]": "[", "}": "{"}


def is_qualified_name(name: str) -> bool:
    return bool(_QUALIFIED_NAME_RE.match(name))


def synthesize(entry: AnnotationEntry) -> SynthesizedAnnotation:
    """Build the ``@Type(name=value,...)`` literal for a stored annotation.

    Raises ``ConstructionError`` when the result would not be a valid
    annotation literal.
    """
    if not is_qualified_name(entry.name):
        raise ConstructionError(f"Invalid annotation type name: {entry.name!r}")
    for param in entry.parameters:
        if not _IDENTIFIER_RE.match(param.name):
            raise ConstructionError(f"Invalid parameter name {param.name!r} in @{entry.name}")
        if not _is_valid_value(param.value):
            raise ConstructionError(f"Invalid value {param.value!r} for {param.name} in @{entry.name}")

    args = ",".join(f"{param.name}={param.value}" for param in entry.parameters)
    text = f"@{entry.name}({args})" if args else f"@{entry.name}"
    return SynthesizedAnnotation(name=entry.name, parameters=list(entry.parameters), text=text)


def _is_valid_value(value: str) -> bool:
    if not value.strip():
        return False
    stack: list[str] = []
    quote: str | None = None
    escaped = False
    for ch in value:
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in "\"'":
            quote = ch
        elif ch in "([{":
            stack.append(ch)
        elif ch in _BRACKETS:
            if not stack or stack.pop() != _BRACKETS[ch]:
                return False
    return quote is None and not stack
