"""Expansion of shorthand attribute forms into ``bind:name=value``.

Applied in order:

    :$title                        ->  :title="$title"
    {{ $attributes->merge([...]) }} ->  :attributes="$attributes->merge([...])"
    @class(['p-4', 'bold' => $x])  ->  :class="\\Illuminate\\Support\\Arr::toCssClasses([...])"
    @style([...])                  ->  :style="\\Illuminate\\Support\\Arr::toCssStyles([...])"
    :title="$title"                ->  bind:title="$title"
"""

import re
from typing import List, Optional

from bladewire.compiler.directives import CSS_CLASSES_HELPER, CSS_STYLES_HELPER

_SHORT_ATTRIBUTE = re.compile(r"\s:\$(\w+)", re.ASCII)

# start of the string or whitespace, then the attribute bag being echoed
_ATTRIBUTE_BAG = re.compile(
    r"(?:^|\s+)\{\{\s*(\$attributes(?:[^}]+?(?<!\s))?)\s*\}\}"
)

# a single leading colon, and only attributes that carry a value
_BIND_ATTRIBUTE = re.compile(
    r"(?:^|\s+):(?!:)([\w\-:.@]+)=", re.M | re.ASCII
)


def balanced_group_end(value: str, start: int) -> Optional[int]:
    """Return the index just past the parenthesised group opening at start.

    Returns None when value[start] is not "(" or the group never closes.
    """
    if start >= len(value) or value[start] != "(":
        return None

    depth = 0
    for index in range(start, len(value)):
        char = value[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def parse_short_attribute_syntax(value: str) -> str:
    return _SHORT_ATTRIBUTE.sub(lambda m: f' :{m.group(1)}="${m.group(1)}"', value)


def parse_attribute_bag(value: str) -> str:
    return _ATTRIBUTE_BAG.sub(lambda m: f' :attributes="{m.group(1)}"', value)


def parse_directive_statements(value: str, directive: str, helper: str) -> str:
    """Rewrite ``@<directive>(...)`` into a bound attribute calling helper.

    Double quotes inside the arguments become single quotes so the result
    can sit inside a double-quoted attribute value. An unbalanced call is
    left untouched.
    """
    opener = f"@{directive}("
    parts: List[str] = []
    pos = 0

    while True:
        start = value.find(opener, pos)
        if start == -1:
            break

        group_start = start + len(opener) - 1
        end = balanced_group_end(value, group_start)
        if end is None:
            parts.append(value[pos : start + 1])
            pos = start + 1
            continue

        arguments = value[group_start:end].replace('"', "'")
        parts.append(value[pos:start])
        parts.append(f':{directive}="{helper}{arguments}"')
        pos = end

    parts.append(value[pos:])
    return "".join(parts)


def parse_class_statements(value: str) -> str:
    return parse_directive_statements(value, "class", CSS_CLASSES_HELPER)


def parse_style_statements(value: str) -> str:
    return parse_directive_statements(value, "style", CSS_STYLES_HELPER)


def parse_bind_attributes(value: str) -> str:
    return _BIND_ATTRIBUTE.sub(lambda m: f" bind:{m.group(1)}=", value)


def normalize_attribute_string(value: str) -> str:
    """Expand every shorthand form into its canonical ``bind:`` form."""
    value = parse_short_attribute_syntax(value)
    value = parse_attribute_bag(value)
    value = parse_class_statements(value)
    value = parse_style_statements(value)
    return parse_bind_attributes(value)
