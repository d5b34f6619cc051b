"""Compiler for ``<livewire:...>`` tags."""

import re
from typing import Dict, Mapping

from bladewire.compiler import directives
from bladewire.compiler.attributes.parser import AttributeParser
from bladewire.compiler.attributes.serialize import serialize_attributes
from bladewire.compiler.strings import camel
from bladewire.compiler.tags.scanner import (
    TagCategory,
    TagGrammar,
    TagMatch,
    TagScanner,
    any_close_tag,
)

# Opening and self-closing tags are compiled alike: both render immediately
LIVE_TAG = TagGrammar(
    category=TagCategory.SELF_CLOSING,
    opener=re.compile(r"<\s*livewire:"),
    heads=(re.compile(r"<\s*livewire:(?P<tag>[\w\-:.]*)", re.ASCII),),
    terminator=any_close_tag,
    directive_attributes=False,
    short_bind_attributes=False,
)

RESERVED_TAGS = {
    "styles": directives.LIVE_STYLES,
    "scripts": directives.LIVE_SCRIPTS,
}


def normalize_live_attribute_keys(attributes: Mapping[str, str]) -> Dict[str, str]:
    """Camel-case attribute keys the way live components expect them.

    Keys without an underscore are camel-cased. Keys with an underscore are
    kept and also made available under their camel-cased name; an attribute
    written in camelCase directly wins over such an alias.
    """
    normalized: Dict[str, str] = {}
    for key, value in attributes.items():
        normalized[key if "_" in key else camel(key)] = value

    result = {camel(key): value for key, value in normalized.items() if "_" in key}
    result.update(normalized)
    return result


class LiveComponentTagCompiler:
    """Rewrites live component tags into render-and-echo statements.

    The component itself is never resolved: every tag goes through the
    generic anonymous component, and only its attributes are compiled.
    """

    def __init__(self, attribute_parser: AttributeParser) -> None:
        self.attribute_parser = attribute_parser
        self.scanner = TagScanner(LIVE_TAG)

    def compile(self, value: str) -> str:
        return self.scanner.sub(self._compile_tag, value)

    def component_string(self, attributes: Mapping[str, str]) -> str:
        return directives.render_and_echo(
            directives.ANONYMOUS_COMPONENT_CLASS,
            serialize_attributes(attributes, escape_bound=False),
        )

    def _compile_tag(self, match: TagMatch) -> str:
        if match.name in RESERVED_TAGS:
            return RESERVED_TAGS[match.name]

        attributes = self.attribute_parser.parse(match.attributes)
        return self.component_string(normalize_live_attribute_keys(attributes.values))
