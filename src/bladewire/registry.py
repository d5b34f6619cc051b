"""Lookup facilities the compiler consults while resolving tag names.

The compiler never loads classes or reads templates itself; it asks a
ClassRegistry whether a component class exists (and which constructor
parameters it declares) and a ViewFinder whether a view template exists.
"""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Union,
    runtime_checkable,
)

from bladewire.compiler.exceptions import RegistryLookupError
from bladewire.config import CompilerConfig

HINT_PATH_DELIMITER = "::"

DEFAULT_EXTENSIONS = ("blade.php", "php", "css", "html")


@runtime_checkable
class ClassRegistry(Protocol):
    def class_exists(self, name: str) -> bool: ...

    def constructor_parameter_names(self, name: str) -> Sequence[str]: ...


@runtime_checkable
class ViewFinder(Protocol):
    def exists(self, name: str) -> bool: ...


ClassDeclaration = Union[Sequence[str], Callable[..., Any]]


class StaticClassRegistry:
    """Component classes declared up front.

    Each class name maps either to its constructor parameter names, or to a
    Python callable whose signature supplies them:

        StaticClassRegistry({
            "App\\\\View\\\\Components\\\\Alert": ["type", "message"],
            "App\\\\View\\\\Components\\\\Card": CardProps,
        })
    """

    def __init__(self, classes: Optional[Mapping[str, ClassDeclaration]] = None):
        self._classes: Dict[str, ClassDeclaration] = {}
        for name, declaration in (classes or {}).items():
            self.register(name, declaration)

    def register(self, name: str, declaration: ClassDeclaration = ()) -> None:
        self._classes[self._normalize(name)] = declaration

    def class_exists(self, name: str) -> bool:
        return self._normalize(name) in self._classes

    def constructor_parameter_names(self, name: str) -> Sequence[str]:
        declaration = self._classes.get(self._normalize(name))
        if declaration is None:
            return []
        if callable(declaration):
            return [
                param.name
                for param in inspect.signature(declaration).parameters.values()
                if param.name != "self"
                and param.kind
                not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
            ]
        return list(declaration)

    def _normalize(self, name: str) -> str:
        return name.lstrip("\\")


class StaticViewFinder:
    """A fixed set of existing view names."""

    def __init__(self, views: Iterable[str] = ()):
        self.views = set(views)

    def exists(self, name: str) -> bool:
        if name.count(HINT_PATH_DELIMITER) > 1:
            raise RegistryLookupError(f"View [{name}] has an invalid name.")
        return name in self.views


class FileViewFinder:
    """Finds view templates on disk.

    ``components.alert`` is looked up as ``components/alert.blade.php``
    (then the other extensions) under every view path; ``mail::button``
    under the paths registered for the ``mail`` hint.
    """

    def __init__(
        self,
        paths: Iterable[Union[str, Path]] = (),
        hints: Optional[Mapping[str, Iterable[Union[str, Path]]]] = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.paths: List[Path] = [Path(p) for p in paths]
        self.hints: Dict[str, List[Path]] = {}
        self.extensions = list(extensions)
        for namespace, hint_paths in (hints or {}).items():
            self.add_namespace(namespace, hint_paths)

    @classmethod
    def from_config(cls, config: CompilerConfig) -> "FileViewFinder":
        finder = cls(paths=config.view_paths, hints=config.view_hints)
        for anonymous_path in config.anonymous_paths:
            finder.add_namespace(anonymous_path.prefix_hash, [anonymous_path.path])
        return finder

    def add_location(self, path: Union[str, Path]) -> None:
        self.paths.append(Path(path))

    def add_namespace(
        self, namespace: str, paths: Iterable[Union[str, Path]]
    ) -> None:
        self.hints.setdefault(namespace, []).extend(Path(p) for p in paths)

    def exists(self, name: str) -> bool:
        return self.find(name) is not None

    def find(self, name: str) -> Optional[Path]:
        """Return the template file for a view name, or None.

        Raises RegistryLookupError for names with more than one hint
        delimiter.
        """
        name = name.strip().replace("/", ".")

        if HINT_PATH_DELIMITER in name:
            segments = name.split(HINT_PATH_DELIMITER)
            if len(segments) != 2:
                raise RegistryLookupError(f"View [{name}] has an invalid name.")
            namespace, view = segments
            if namespace not in self.hints:
                return None
            return self._find_in_paths(view, self.hints[namespace])

        return self._find_in_paths(name, self.paths)

    def _find_in_paths(self, name: str, paths: Iterable[Path]) -> Optional[Path]:
        relative = name.replace(".", "/")
        for path in paths:
            for extension in self.extensions:
                candidate = path / f"{relative}.{extension}"
                if candidate.is_file():
                    return candidate
        return None
