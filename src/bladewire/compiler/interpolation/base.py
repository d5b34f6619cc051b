from typing import Protocol, runtime_checkable


@runtime_checkable
class EchoCompiler(Protocol):
    """Turns interpolation syntax into the host runtime's echo statements.

    The attribute parser only relies on the emitted statements having the
    shape ``<?php echo EXPR; ?>``; everything else is passed through.
    """

    def compile_echos(self, value: str) -> str: ...
