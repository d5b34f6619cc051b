"""Attribute grammar: raw attribute substring -> ordered attribute map."""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set, Tuple

from bladewire.compiler.attributes.normalize import normalize_attribute_string
from bladewire.compiler.attributes.serialize import serialize_attributes
from bladewire.compiler.exceptions import MalformedAttributeError
from bladewire.compiler.interpolation.base import EchoCompiler
from bladewire.compiler.strings import strip_quotes

_ATTRIBUTE = re.compile(
    r"""
    (?P<attribute>[\w\-:.@]+)
    (
        =
        (?P<value>
            (
                "[^"]+"
                |
                '[^']+'
                |
                [^\s>]+
            )
        )
    )?
    """,
    re.X | re.ASCII,
)

_PHP_OPEN_TAG = re.compile(r"<\?(?:php(?=\s|$)|=)")

BIND_PREFIX = "bind:"


@dataclass
class AttributeMap:
    """Attribute name -> PHP expression, plus the names bound dynamically.

    Bound values are expressions already; the others are single-quoted
    string fragments produced from the literal attribute text.
    """

    values: Dict[str, str] = field(default_factory=dict)
    bound: Set[str] = field(default_factory=set)

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def items(self):
        return self.values.items()

    def is_bound(self, name: str) -> bool:
        return name in self.bound

    def serialize(self, escape_bound: bool = True) -> str:
        return serialize_attributes(self.values, self.bound, escape_bound)


class AttributeParser:
    """Extracts attributes from the attribute part of a component tag.

    Parsing is lenient: a string without a single recognisable attribute
    yields an empty map. ``strict=True`` raises MalformedAttributeError for
    such strings instead.
    """

    def __init__(self, echo_compiler: EchoCompiler, strict: bool = False) -> None:
        self.echo_compiler = echo_compiler
        self.strict = strict

    def parse(self, attribute_string: str) -> AttributeMap:
        attribute_string = normalize_attribute_string(attribute_string)

        result = AttributeMap()
        matches = list(_ATTRIBUTE.finditer(attribute_string))
        if not matches:
            if self.strict and attribute_string.strip():
                raise MalformedAttributeError(attribute_string)
            return result

        for match in matches:
            attribute = match.group("attribute")
            value = match.group("value")

            # Valueless attributes are boolean flags
            if value is None:
                value = "true"
                if not attribute.startswith(BIND_PREFIX):
                    attribute = BIND_PREFIX + attribute

            value = strip_quotes(value)

            if attribute.startswith(BIND_PREFIX):
                attribute = attribute[len(BIND_PREFIX) :]
                result.bound.add(attribute)
            else:
                value = "'" + self.compile_attribute_echos(value) + "'"

            if attribute.startswith("::"):
                attribute = attribute[1:]

            result.values[attribute] = value

        return result

    def compile_attribute_echos(self, value: str) -> str:
        """Turn echo statements in a literal value into string concatenation.

        Example:
            Hello {{ $name }}  ->  Hello '.e($name).'
        """
        value = self.echo_compiler.compile_echos(value)
        value = escape_single_quotes_outside_of_php_blocks(value)
        value = value.replace("<?php echo ", "'.")
        return value.replace("; ?>", ".'")


def parse_attributes(
    attribute_string: str, echo_compiler: EchoCompiler, strict: bool = False
) -> AttributeMap:
    return AttributeParser(echo_compiler, strict=strict).parse(attribute_string)


def escape_single_quotes_outside_of_php_blocks(value: str) -> str:
    parts: List[str] = []
    for is_code, text in split_php_blocks(value):
        parts.append(text if is_code else text.replace("'", "\\'"))
    return "".join(parts)


def split_php_blocks(value: str) -> Iterator[Tuple[bool, str]]:
    """Yield (is_code, text) segments: literal text vs ``<?php ... ?>`` blocks."""
    pos = 0
    while pos < len(value):
        match = _PHP_OPEN_TAG.search(value, pos)
        if not match:
            yield False, value[pos:]
            return

        if match.start() > pos:
            yield False, value[pos : match.start()]

        end = _php_block_end(value, match.end())
        yield True, value[match.start() : end]
        pos = end


def _php_block_end(value: str, pos: int) -> int:
    quote = None
    index = pos
    while index < len(value):
        char = value[index]
        if quote:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif value.startswith("?>", index):
            return index + 2
        index += 1
    return len(value)
