"""Scanning of component tags in a template body.

Tag spans are found with a small backtracking matcher instead of a single
regular expression, because attribute lists may contain directive calls with
arbitrarily nested parentheses (``@class(['a' => fn($x)])``). The matcher
tries alternatives in the same order a greedy regex engine would, so an
unquoted value such as ``a=b c`` still gives way when the tag would not
close otherwise. Results are memoised per position, which keeps failing
scans from going exponential.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Pattern, Tuple

from bladewire.compiler.attributes.normalize import balanced_group_end

_WHITESPACE = re.compile(r"\s*")
_ATTRIBUTE_NAME = re.compile(r"[\w\-:.@]+", re.ASCII)
_DOUBLE_QUOTED = re.compile(r'"[^"]*"')
_SINGLE_QUOTED = re.compile(r"'[^']*'")
_UNQUOTED = re.compile(r"[^'\"=<>]+")
_ATTRIBUTE_BAG = re.compile(r"\{\{\s*\$attributes(?:[^}]+?)?\s*\}\}")
_SHORT_BIND = re.compile(r":\$\w+", re.ASCII)

Terminator = Callable[[str, int], Optional[int]]


class TagCategory(Enum):
    SLOT = "slot"
    SELF_CLOSING = "self-closing"
    OPENING = "opening"
    CLOSING = "closing"


@dataclass
class TagMatch:
    """One tag found in a template. Only lives for a single replacement."""

    name: str
    attributes: str
    category: TagCategory
    start: int
    end: int
    inline_name: str = ""
    name_attribute: str = ""
    name_bound: bool = False


@dataclass(frozen=True)
class TagGrammar:
    """How one category of tag is recognised.

    ``opener`` locates candidate tag starts; ``heads`` are tried in order at
    each candidate and must consume everything up to the attribute list.
    Named groups ``tag``, ``inline``, ``bound`` and ``name`` end up on the
    TagMatch.
    """

    category: TagCategory
    opener: Pattern[str]
    heads: Tuple[Pattern[str], ...]
    terminator: Terminator
    directive_attributes: bool = True
    short_bind_attributes: bool = True


def close_tag(value: str, pos: int) -> Optional[int]:
    """``>`` not preceded by ``/``, ``=`` or ``-``."""
    if value.startswith(">", pos) and (pos == 0 or value[pos - 1] not in "/=-"):
        return pos + 1
    return None


def self_close_tag(value: str, pos: int) -> Optional[int]:
    if value.startswith("/>", pos):
        return pos + 2
    return None


def any_close_tag(value: str, pos: int) -> Optional[int]:
    """``>`` or ``/>``."""
    if value.startswith("/>", pos):
        return pos + 2
    if value.startswith(">", pos):
        return pos + 1
    return None


class TagScanner:
    def __init__(self, grammar: TagGrammar) -> None:
        self.grammar = grammar

    def finditer(self, value: str) -> Iterator[TagMatch]:
        pos = 0
        while pos <= len(value):
            candidate = self.grammar.opener.search(value, pos)
            if not candidate:
                return

            match = self.match_at(value, candidate.start())
            if match is None:
                pos = candidate.start() + 1
                continue

            yield match
            pos = match.end

    def sub(self, replace: Callable[[TagMatch], str], value: str) -> str:
        """Replace every tag of this grammar with replace(match)."""
        parts = []
        pos = 0
        for match in self.finditer(value):
            parts.append(value[pos : match.start])
            parts.append(replace(match))
            pos = match.end
        parts.append(value[pos:])
        return "".join(parts)

    def match_at(self, value: str, start: int) -> Optional[TagMatch]:
        for head in self.grammar.heads:
            head_match = head.match(value, start)
            if not head_match:
                continue

            memo: Dict[int, Optional[Tuple[int, int]]] = {}
            span = self._scan_attributes(value, head_match.end(), memo)
            if span is None:
                continue

            attributes_end, end = span
            groups = head_match.groupdict()
            return TagMatch(
                name=groups.get("tag") or "",
                attributes=value[head_match.end() : attributes_end],
                category=self.grammar.category,
                start=start,
                end=end,
                inline_name=groups.get("inline") or "",
                name_attribute=groups.get("name") or "",
                name_bound=groups.get("bound") == ":",
            )
        return None

    def _scan_attributes(
        self, value: str, pos: int, memo: Dict[int, Optional[Tuple[int, int]]]
    ) -> Optional[Tuple[int, int]]:
        """Match ``(\\s+ attribute)* \\s* terminator`` from pos.

        Returns (end of attribute list, end of tag), or None. Walks an
        explicit stack of (position, whitespace end, remaining attribute
        ends), so the number of attributes a tag can carry is not bound by
        the recursion limit.
        """
        if pos in memo:
            return memo[pos]

        stack = [self._frame(value, pos)]
        result = None

        while stack:
            frame_pos, whitespace_end, attribute_ends = stack[-1]

            # the previous attribute alternative matched through to the end
            if result is not None:
                memo[frame_pos] = result
                stack.pop()
                continue

            attribute_end = next(attribute_ends, None)
            if attribute_end is not None:
                if attribute_end in memo:
                    result = memo[attribute_end]
                else:
                    stack.append(self._frame(value, attribute_end))
                continue

            end = self.grammar.terminator(value, whitespace_end)
            if end is not None:
                result = (whitespace_end, end)
            memo[frame_pos] = result
            stack.pop()

        return result

    def _frame(self, value: str, pos: int) -> Tuple[int, int, Iterator[int]]:
        whitespace_end = _WHITESPACE.match(value, pos).end()
        if whitespace_end > pos:
            return pos, whitespace_end, self._attribute_ends(value, whitespace_end)
        return pos, whitespace_end, iter(())

    def _attribute_ends(self, value: str, pos: int) -> Iterator[int]:
        """Every way a single attribute can end when it starts at pos."""
        if self.grammar.directive_attributes:
            for directive in ("@class", "@style"):
                if value.startswith(directive + "(", pos):
                    end = balanced_group_end(value, pos + len(directive))
                    if end is not None:
                        yield end

            bag = _ATTRIBUTE_BAG.match(value, pos)
            if bag:
                yield bag.end()

        if self.grammar.short_bind_attributes:
            short = _SHORT_BIND.match(value, pos)
            if short:
                yield short.end()

        name = _ATTRIBUTE_NAME.match(value, pos)
        if not name:
            return

        if value.startswith("=", name.end()):
            value_start = name.end() + 1
            for quoted in (_DOUBLE_QUOTED, _SINGLE_QUOTED):
                quoted_match = quoted.match(value, value_start)
                if quoted_match:
                    yield quoted_match.end()

            unquoted = _UNQUOTED.match(value, value_start)
            if unquoted:
                # Longest first, giving way one character at a time
                yield from range(unquoted.end(), value_start, -1)

        yield name.end()
