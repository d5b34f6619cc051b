from typing import AbstractSet, Mapping

from bladewire.compiler.directives import sanitized
from bladewire.compiler.strings import is_numeric


def serialize_attributes(
    attributes: Mapping[str, str],
    bound: AbstractSet[str] = frozenset(),
    escape_bound: bool = True,
) -> str:
    """Render attributes as a PHP array body: ``'name' => expr,...``.

    With escape_bound, bound values that are not ``true`` or a number are
    wrapped in the runtime's attribute sanitizer.
    """
    parts = []
    for name, value in attributes.items():
        if escape_bound and name in bound and value != "true" and not is_numeric(value):
            value = sanitized(value)
        parts.append(f"'{name}' => {value}")
    return ",".join(parts)
