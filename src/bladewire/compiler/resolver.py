"""Resolution of component tag names to classes or views.

Strategies run in a fixed order and the first one that returns an identity
wins:

    1. explicit alias          (hard failure if the alias resolves to nothing)
    2. class namespace         prefix::alert  ->  <namespace>\\Alert
    3. default class           alert          ->  App\\View\\Components\\Alert
    4. anonymous namespaces    alert          ->  components.alert[.index]
    5. anonymous paths         ui::alert      ->  <hash>::alert[.index]
    6. mail views              mail::button   ->  mail::button
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from bladewire.compiler.directives import MAIL_PREFIX
from bladewire.compiler.exceptions import RegistryLookupError, UnresolvedComponentError
from bladewire.compiler.strings import after, camel, replace_first, ucfirst
from bladewire.registry import HINT_PATH_DELIMITER

if TYPE_CHECKING:
    from bladewire.config import CompilerConfig
    from bladewire.registry import ClassRegistry, ViewFinder

logger = logging.getLogger(__name__)


class ComponentKind(Enum):
    CLASS = "class"
    VIEW = "view"
    MAIL = "mail"


@dataclass(frozen=True)
class ComponentIdentity:
    """What a tag resolved to: a class name or a view name."""

    name: str
    kind: ComponentKind
    tag: str

    @property
    def is_class(self) -> bool:
        return self.kind is ComponentKind.CLASS


ResolverStrategy = Callable[[str, "ComponentResolver"], Optional[ComponentIdentity]]


def format_class_name(component: str) -> str:
    """``forms.text-input`` -> ``Forms\\TextInput``."""
    return "\\".join(ucfirst(camel(piece)) for piece in component.split("."))


def guess_view_name(name: str, prefix: str = "components.") -> str:
    if not prefix.endswith("."):
        prefix += "."

    if HINT_PATH_DELIMITER in name:
        return replace_first(name, HINT_PATH_DELIMITER, HINT_PATH_DELIMITER + prefix)

    return prefix + name


def resolve_alias(
    component: str, resolver: ComponentResolver
) -> Optional[ComponentIdentity]:
    alias = resolver.config.aliases.get(component)
    if alias is None:
        return None

    if resolver.class_exists(alias):
        return ComponentIdentity(alias, ComponentKind.CLASS, component)

    if resolver.view_exists(alias):
        return ComponentIdentity(alias, ComponentKind.VIEW, component)

    raise UnresolvedComponentError(component, alias=alias)


def resolve_namespaced_class(
    component: str, resolver: ComponentResolver
) -> Optional[ComponentIdentity]:
    class_name = resolver.find_class_by_component(component)
    if class_name is None:
        return None
    return ComponentIdentity(class_name, ComponentKind.CLASS, component)


def resolve_default_class(
    component: str, resolver: ComponentResolver
) -> Optional[ComponentIdentity]:
    class_name = resolver.guess_class_name(component)
    if not resolver.class_exists(class_name):
        return None
    return ComponentIdentity(class_name, ComponentKind.CLASS, component)


def resolve_anonymous_namespace(
    component: str, resolver: ComponentResolver
) -> Optional[ComponentIdentity]:
    # The implicit "components" directory applies to every tag and comes first
    candidates = [(component, "components")]
    candidates.extend(
        (prefix, directory)
        for prefix, directory in resolver.config.anonymous_namespaces.items()
        if component.startswith(prefix + HINT_PATH_DELIMITER)
    )

    for prefix, directory in candidates:
        component_name = after(component, prefix + HINT_PATH_DELIMITER)
        view = guess_view_name(component_name, directory)

        for candidate in (view, view + ".index"):
            if resolver.view_exists(candidate):
                return ComponentIdentity(candidate, ComponentKind.VIEW, component)

    return None


def resolve_anonymous_path(
    component: str, resolver: ComponentResolver
) -> Optional[ComponentIdentity]:
    for path in resolver.config.anonymous_paths:
        try:
            prefixed = component.startswith((path.prefix or "") + HINT_PATH_DELIMITER)
            if HINT_PATH_DELIMITER in component and not prefixed:
                continue

            formatted = (
                after(component, HINT_PATH_DELIMITER) if prefixed else component
            )
            view = path.prefix_hash + HINT_PATH_DELIMITER + formatted

            for candidate in (view, view + ".index"):
                if resolver.views.exists(candidate):
                    return ComponentIdentity(candidate, ComponentKind.VIEW, component)
        except RegistryLookupError as e:
            logger.debug("Skipping anonymous path %s for [%s]: %s", path.path, component, e)

    return None


def resolve_mail_view(
    component: str, resolver: ComponentResolver
) -> Optional[ComponentIdentity]:
    if component.startswith(MAIL_PREFIX):
        return ComponentIdentity(component, ComponentKind.MAIL, component)
    return None


DEFAULT_STRATEGIES: Sequence[ResolverStrategy] = (
    resolve_alias,
    resolve_namespaced_class,
    resolve_default_class,
    resolve_anonymous_namespace,
    resolve_anonymous_path,
    resolve_mail_view,
)


class ComponentResolver:
    """Resolves tag names using the configured lookup strategies."""

    def __init__(
        self,
        config: CompilerConfig,
        classes: ClassRegistry,
        views: ViewFinder,
        strategies: Optional[Sequence[ResolverStrategy]] = None,
    ) -> None:
        self.config = config
        self.classes = classes
        self.views = views
        self.strategies: List[ResolverStrategy] = list(
            DEFAULT_STRATEGIES if strategies is None else strategies
        )

    def resolve(self, component: str) -> ComponentIdentity:
        for strategy in self.strategies:
            identity = strategy(component, self)
            if identity is not None:
                logger.debug(
                    "Resolved [%s] to %s %s via %s",
                    component,
                    identity.kind.value,
                    identity.name,
                    strategy.__name__,
                )
                return identity

        raise UnresolvedComponentError(component)

    def find_class_by_component(self, component: str) -> Optional[str]:
        """Look the component up under its registered class namespace."""
        segments = component.split(HINT_PATH_DELIMITER)
        prefix = segments[0]

        if prefix not in self.config.namespaces or len(segments) < 2:
            return None

        class_name = (
            self.config.namespaces[prefix] + "\\" + format_class_name(segments[1])
        )
        if self.class_exists(class_name):
            return class_name

        return None

    def guess_class_name(self, component: str) -> str:
        return (
            self.config.app_namespace
            + "View\\Components\\"
            + format_class_name(component)
        )

    def class_exists(self, name: str) -> bool:
        return self.classes.class_exists(name)

    def view_exists(self, name: str) -> bool:
        try:
            return self.views.exists(name)
        except RegistryLookupError as e:
            logger.debug("View lookup for [%s] failed: %s", name, e)
            return False
