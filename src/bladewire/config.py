"""Compiler configuration.

A configuration is built once per compilation run and never changes
afterwards. It can be created directly or read from a JSON file:

    {
        "aliases": {"alert": "App\\\\View\\\\Components\\\\Alert"},
        "namespaces": {"nightshade": "Nightshade\\\\View\\\\Components"},
        "app_namespace": "App\\\\",
        "anonymous_paths": [{"path": "resources/views/ui", "prefix": "ui"}],
        "anonymous_namespaces": {"admin": "admin.components"},
        "classes": {"App\\\\View\\\\Components\\\\Alert": ["type", "message"]},
        "view_paths": ["resources/views"],
        "view_hints": {"mail": ["resources/views/vendor/mail"]}
    }

Relative filesystem paths are resolved against the config file's directory.
When no path is given, ``BLADEWIRE_CONFIG`` names the file to read.
"""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

CONFIG_ENV_VAR = "BLADEWIRE_CONFIG"


@dataclass(frozen=True)
class AnonymousComponentPath:
    """A directory of view-only components, optionally under a prefix."""

    path: str
    prefix: Optional[str] = None

    @property
    def prefix_hash(self) -> str:
        return hashlib.md5((self.prefix or self.path).encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CompilerConfig:
    aliases: Mapping[str, str] = field(default_factory=dict)
    namespaces: Mapping[str, str] = field(default_factory=dict)
    app_namespace: str = "App\\"
    anonymous_paths: Tuple[AnonymousComponentPath, ...] = ()
    anonymous_namespaces: Mapping[str, str] = field(default_factory=dict)
    classes: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    view_paths: Tuple[str, ...] = ()
    view_hints: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        app_namespace = self.app_namespace
        if app_namespace and not app_namespace.endswith("\\"):
            app_namespace += "\\"
        object.__setattr__(self, "app_namespace", app_namespace)

        for name in (
            "aliases",
            "namespaces",
            "anonymous_namespaces",
            "classes",
            "view_hints",
        ):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        object.__setattr__(self, "anonymous_paths", tuple(self.anonymous_paths))
        object.__setattr__(self, "view_paths", tuple(self.view_paths))

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], base_dir: Optional[Path] = None
    ) -> "CompilerConfig":
        """Build a config from decoded JSON data.

        Also accepts the view alias dump of the Laravel side, where
        ``namespaces`` maps view hints to directories and ``paths`` lists
        the view paths: list-valued namespaces become view hints.

        Raises ValueError naming the offending key when a value has the
        wrong shape.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Config must be a JSON object")

        def resolve(path: str) -> str:
            if base_dir is None or Path(path).is_absolute():
                return path
            return str(base_dir / path)

        namespaces: Dict[str, str] = {}
        view_hints: Dict[str, Tuple[str, ...]] = {}
        for prefix, target in _mapping(data, "namespaces").items():
            if isinstance(target, str):
                namespaces[prefix] = target
            else:
                view_hints[prefix] = tuple(
                    resolve(p) for p in _paths(target, f"namespaces.{prefix}")
                )

        for hint, paths in _mapping(data, "view_hints").items():
            view_hints[hint] = view_hints.get(hint, ()) + tuple(
                resolve(p) for p in _paths(paths, f"view_hints.{hint}")
            )

        anonymous_paths = []
        for index, entry in enumerate(_list(data, "anonymous_paths")):
            key = f"anonymous_paths[{index}]"
            if isinstance(entry, str):
                entry = {"path": entry}
            if not isinstance(entry, Mapping) or not isinstance(entry.get("path"), str):
                raise ValueError(f"Config key {key!r} must be a path or an object with a 'path'")
            prefix = entry.get("prefix")
            if prefix is not None and not isinstance(prefix, str):
                raise ValueError(f"Config key {key + '.prefix'!r} must be a string")
            anonymous_paths.append(
                AnonymousComponentPath(path=resolve(entry["path"]), prefix=prefix)
            )

        app_namespace = data.get("app_namespace", "App\\")
        if not isinstance(app_namespace, str):
            raise ValueError("Config key 'app_namespace' must be a string")

        view_paths = _paths(data.get("view_paths", []), "view_paths") + _paths(
            data.get("paths", []), "paths"
        )

        return cls(
            aliases=_string_mapping(data, "aliases"),
            namespaces=namespaces,
            app_namespace=app_namespace,
            anonymous_paths=tuple(anonymous_paths),
            anonymous_namespaces=_string_mapping(data, "anonymous_namespaces"),
            classes={
                name: _paths(params, f"classes.{name}")
                for name, params in _mapping(data, "classes").items()
            },
            view_paths=tuple(resolve(p) for p in view_paths),
            view_hints=view_hints,
        )


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    # PHP encodes an empty associative array as []
    if value == []:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"Config key {key!r} must be an object")
    return value


def _list(data: Mapping[str, Any], key: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"Config key {key!r} must be a list")
    return value


def _string_mapping(data: Mapping[str, Any], key: str) -> Dict[str, str]:
    value = _mapping(data, key)
    for name, target in value.items():
        if not isinstance(target, str):
            raise ValueError(f"Config key {key + '.' + name!r} must be a string")
    return dict(value)


def _paths(value: Any, key: str) -> Tuple[str, ...]:
    """A string or a list of strings, as a tuple."""
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise ValueError(f"Config key {key!r} must be a string or a list of strings")
    return tuple(value)


def load_config(path: Optional[Path] = None) -> CompilerConfig:
    """Read a JSON config file, or return the default config."""
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return CompilerConfig()
        path = Path(env_path)

    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    return CompilerConfig.from_mapping(data, base_dir=path.resolve().parent)
