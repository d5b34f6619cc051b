from bladewire.compiler.interpolation.base import EchoCompiler
from bladewire.compiler.interpolation.blade import BladeEchoCompiler

__all__ = ["EchoCompiler", "BladeEchoCompiler"]
