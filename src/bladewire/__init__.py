from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bladewire")
except PackageNotFoundError:
    __version__ = "unknown"

from bladewire.config import AnonymousComponentPath, CompilerConfig, load_config
from bladewire.compiler.exceptions import (
    BladewireError,
    MalformedAttributeError,
    RegistryLookupError,
    UnresolvedComponentError,
)
from bladewire.compiler.pipeline import TagVariant, TemplateCompiler, build_compiler
from bladewire.registry import FileViewFinder, StaticClassRegistry, StaticViewFinder

__all__ = [
    "AnonymousComponentPath",
    "BladewireError",
    "CompilerConfig",
    "FileViewFinder",
    "MalformedAttributeError",
    "RegistryLookupError",
    "StaticClassRegistry",
    "StaticViewFinder",
    "TagVariant",
    "TemplateCompiler",
    "UnresolvedComponentError",
    "build_compiler",
    "load_config",
]
