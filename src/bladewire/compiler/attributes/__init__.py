from bladewire.compiler.attributes.normalize import normalize_attribute_string
from bladewire.compiler.attributes.parser import (
    AttributeMap,
    AttributeParser,
    parse_attributes,
)
from bladewire.compiler.attributes.serialize import serialize_attributes

__all__ = [
    "AttributeMap",
    "AttributeParser",
    "normalize_attribute_string",
    "parse_attributes",
    "serialize_attributes",
]
