"""Compiler for ``<x-...>`` component tags and ``<x-slot>`` tags."""

from __future__ import annotations

import logging
import re

from bladewire.compiler import directives
from bladewire.compiler.attributes.parser import AttributeMap, AttributeParser
from bladewire.compiler.attributes.serialize import serialize_attributes
from bladewire.compiler.partition import partition_data_and_attributes
from bladewire.compiler.resolver import ComponentResolver
from bladewire.compiler.strings import camel, strip_quotes
from bladewire.compiler.tags.scanner import (
    TagCategory,
    TagGrammar,
    TagMatch,
    TagScanner,
    close_tag,
    self_close_tag,
)

logger = logging.getLogger(__name__)

_COMPONENT_OPENER = re.compile(r"<\s*x[-:]")
_COMPONENT_HEAD = re.compile(r"<\s*x[-:](?P<tag>[\w\-:.]*)", re.ASCII)

_SLOT_HEAD = r"<\s*x[-:]slot(?::(?P<inline>\w+(?:-\w+)*))?"
_SLOT_NAME = r"""\s+(?P<bound>:?)name=(?P<name>"[^"]+"|'[^']+'|[^\s>]+)"""

SLOT_TAG = TagGrammar(
    category=TagCategory.SLOT,
    opener=re.compile(r"<\s*x[-:]slot"),
    heads=(
        re.compile(_SLOT_HEAD + _SLOT_NAME, re.ASCII),
        re.compile(_SLOT_HEAD, re.ASCII),
    ),
    terminator=close_tag,
    short_bind_attributes=False,
)

SELF_CLOSING_TAG = TagGrammar(
    category=TagCategory.SELF_CLOSING,
    opener=_COMPONENT_OPENER,
    heads=(_COMPONENT_HEAD,),
    terminator=self_close_tag,
)

OPENING_TAG = TagGrammar(
    category=TagCategory.OPENING,
    opener=_COMPONENT_OPENER,
    heads=(_COMPONENT_HEAD,),
    terminator=close_tag,
)

_CLOSING_SLOT = re.compile(r"</\s*x[-:]slot[^>]*>")
_CLOSING_TAG = re.compile(r"</\s*x[-:][\w\-:.]*\s*>", re.ASCII)


class ComponentTagCompiler:
    """Rewrites component and slot tags into component directives.

    Passes run in a fixed order, each over the output of the previous one:
    slots, self-closing tags, opening tags, closing tags. Closing tags are
    matched on the ``x-`` prefix alone; pairing is left to the runtime.

    Example:
        <x-alert type="error" :message="$msg" />

    becomes (with ``App\\View\\Components\\Alert(type)``):

        <?php App\\View\\Components\\Alert::resolve(['type' => 'error',
            '_data' => ['message' => $msg]]); ?>
        @endComponentClass##END-COMPONENT-CLASS##
    """

    def __init__(
        self, resolver: ComponentResolver, attribute_parser: AttributeParser
    ) -> None:
        self.resolver = resolver
        self.attribute_parser = attribute_parser
        self.slot_scanner = TagScanner(SLOT_TAG)
        self.self_closing_scanner = TagScanner(SELF_CLOSING_TAG)
        self.opening_scanner = TagScanner(OPENING_TAG)

    def compile(self, value: str) -> str:
        """Compile the component and slot tags within the given string."""
        value = self.compile_slots(value)
        return self.compile_tags(value)

    def compile_tags(self, value: str) -> str:
        value = self.compile_self_closing_tags(value)
        value = self.compile_opening_tags(value)
        return self.compile_closing_tags(value)

    def compile_slots(self, value: str) -> str:
        value = self.slot_scanner.sub(self._compile_slot, value)
        return _CLOSING_SLOT.sub(lambda m: directives.END_SLOT, value)

    def compile_self_closing_tags(self, value: str) -> str:
        return self.self_closing_scanner.sub(self._compile_self_closing_tag, value)

    def compile_opening_tags(self, value: str) -> str:
        return self.opening_scanner.sub(self._compile_opening_tag, value)

    def compile_closing_tags(self, value: str) -> str:
        return _CLOSING_TAG.sub(lambda m: directives.end_component(), value)

    def component_string(self, component: str, attributes: AttributeMap) -> str:
        """Build the instantiate directive for a resolved component."""
        identity = self.resolver.resolve(component)

        if not identity.is_class:
            # Class-less component: the view is handed to the generic
            # anonymous component along with every attribute
            if component.startswith(directives.MAIL_PREFIX):
                view = directives.mail_view(component)
            else:
                view = f"'{identity.name}'"

            parameters = {
                "view": view,
                "data": "[" + attributes.serialize(escape_bound=False) + "]",
            }
            class_name = directives.ANONYMOUS_COMPONENT_CLASS
        else:
            data, rest = partition_data_and_attributes(
                identity.name, attributes.values, self.resolver.classes
            )
            parameters = {camel(key): value for key, value in data.items()}
            parameters["_data"] = (
                "[" + serialize_attributes(rest, attributes.bound, escape_bound=False) + "]"
            )
            class_name = identity.name

        return directives.instantiate(
            class_name, serialize_attributes(parameters, escape_bound=False)
        )

    def _compile_slot(self, match: TagMatch) -> str:
        name = strip_quotes(match.inline_name or match.name_attribute)

        if "-" in name and match.inline_name:
            name = camel(name)

        if not match.name_bound:
            name = f"'{name}'"

        attributes = self.attribute_parser.parse(match.attributes)
        return directives.begin_slot(name, attributes.serialize())

    def _compile_self_closing_tag(self, match: TagMatch) -> str:
        logger.debug("Compiling self-closing tag <x-%s />", match.name)
        attributes = self.attribute_parser.parse(match.attributes)
        return self.component_string(
            match.name, attributes
        ) + directives.end_component(self_closing=True)

    def _compile_opening_tag(self, match: TagMatch) -> str:
        logger.debug("Compiling opening tag <x-%s>", match.name)
        attributes = self.attribute_parser.parse(match.attributes)
        return self.component_string(match.name, attributes)
