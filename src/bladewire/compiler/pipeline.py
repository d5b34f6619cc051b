"""Whole-template compilation across tag variants."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from bladewire.compiler.attributes.parser import AttributeParser
from bladewire.compiler.interpolation.base import EchoCompiler
from bladewire.compiler.interpolation.blade import BladeEchoCompiler
from bladewire.compiler.resolver import ComponentIdentity, ComponentResolver
from bladewire.compiler.tags.component import ComponentTagCompiler
from bladewire.compiler.tags.live import LiveComponentTagCompiler
from bladewire.config import CompilerConfig, load_config
from bladewire.registry import (
    ClassRegistry,
    FileViewFinder,
    StaticClassRegistry,
    ViewFinder,
)

logger = logging.getLogger(__name__)


class TagVariant(Enum):
    STANDARD = "standard"
    LIVE = "live"


DEFAULT_VARIANTS = (TagVariant.LIVE, TagVariant.STANDARD)


class TemplateCompiler:
    """Compiles every supported tag syntax in a template.

    Compilers hold no per-template state, so one instance can compile any
    number of templates, concurrently or not.
    """

    def __init__(
        self,
        config: CompilerConfig,
        classes: ClassRegistry,
        views: ViewFinder,
        echo_compiler: Optional[EchoCompiler] = None,
        variants: Sequence[TagVariant] = DEFAULT_VARIANTS,
        strict: bool = False,
    ) -> None:
        self.config = config
        self.variants = tuple(variants)
        self.attribute_parser = AttributeParser(
            echo_compiler or BladeEchoCompiler(), strict=strict
        )
        self.resolver = ComponentResolver(config, classes, views)
        self.compilers: Dict[TagVariant, Any] = {
            TagVariant.STANDARD: ComponentTagCompiler(
                self.resolver, self.attribute_parser
            ),
            TagVariant.LIVE: LiveComponentTagCompiler(self.attribute_parser),
        }

    def compile(self, value: str) -> str:
        for variant in self.variants:
            value = self.compilers[variant].compile(value)
        return value

    def resolve(self, component: str) -> ComponentIdentity:
        return self.resolver.resolve(component)


def build_compiler(
    config: Optional[CompilerConfig] = None,
    variants: Sequence[TagVariant] = DEFAULT_VARIANTS,
    strict: bool = False,
) -> TemplateCompiler:
    """Wire a compiler from configuration, looking views up on disk."""
    if config is None:
        config = load_config()

    logger.debug(
        "Building compiler with %d aliases, %d namespaces, %d anonymous paths",
        len(config.aliases),
        len(config.namespaces),
        len(config.anonymous_paths),
    )
    return TemplateCompiler(
        config,
        StaticClassRegistry(config.classes),
        FileViewFinder.from_config(config),
        variants=variants,
        strict=strict,
    )
