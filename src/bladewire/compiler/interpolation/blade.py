"""Default echo compiler for Blade interpolation syntax."""

import re
from typing import Callable, List

_RAW_ECHO = re.compile(r"(@)?\{!!\s*(.+?)\s*!!\}(\r?\n)?", re.S)
_ESCAPED_ECHO = re.compile(r"(@)?\{\{\{\s*(.+?)\s*\}\}\}(\r?\n)?", re.S)
_REGULAR_ECHO = re.compile(r"(@)?\{\{\s*(.+?)\s*\}\}(\r?\n)?", re.S)


class BladeEchoCompiler:
    """Compiles ``{{ }}``, ``{{{ }}}`` and ``{!! !!}`` into PHP echo statements.

    Example:
        Hello {{ $name }}   ->  Hello <?php echo e($name); ?>
        {!! $html !!}       ->  <?php echo $html; ?>
        @{{ $literal }}     ->  {{ $literal }}
    """

    def __init__(self) -> None:
        self.echo_methods: List[Callable[[str], str]] = [
            self.compile_raw_echos,
            self.compile_escaped_echos,
            self.compile_regular_echos,
        ]

    def compile_echos(self, value: str) -> str:
        for method in self.echo_methods:
            value = method(value)
        return value

    def compile_raw_echos(self, value: str) -> str:
        def replacer(match: re.Match) -> str:
            if match.group(1):
                return match.group(0)[1:]
            return f"<?php echo {self._wrap(match.group(2))}; ?>{self._whitespace(match)}"

        return _RAW_ECHO.sub(replacer, value)

    def compile_escaped_echos(self, value: str) -> str:
        def replacer(match: re.Match) -> str:
            if match.group(1):
                return match.group(0)
            return f"<?php echo e({self._wrap(match.group(2))}); ?>{self._whitespace(match)}"

        return _ESCAPED_ECHO.sub(replacer, value)

    def compile_regular_echos(self, value: str) -> str:
        def replacer(match: re.Match) -> str:
            if match.group(1):
                return match.group(0)[1:]
            return f"<?php echo e({self._wrap(match.group(2))}); ?>{self._whitespace(match)}"

        return _REGULAR_ECHO.sub(replacer, value)

    def _wrap(self, expression: str) -> str:
        expression = expression.strip()
        if expression.endswith(";"):
            expression = expression.rsplit(";", 1)[0]
        return expression

    def _whitespace(self, match: re.Match) -> str:
        newline = match.group(3)
        return newline * 2 if newline else ""
