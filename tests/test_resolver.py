import hashlib
from typing import Iterable, Mapping, Optional

import pytest

from bladewire.compiler.exceptions import RegistryLookupError, UnresolvedComponentError
from bladewire.compiler.resolver import (
    ComponentKind,
    ComponentResolver,
    format_class_name,
    guess_view_name,
    resolve_default_class,
)
from bladewire.config import AnonymousComponentPath, CompilerConfig
from bladewire.registry import StaticClassRegistry, StaticViewFinder


class SelectiveViewFinder:
    """View finder that fails for some hint namespaces."""

    def __init__(self, views: Iterable[str], broken: Iterable[str]) -> None:
        self.views = set(views)
        self.broken = set(broken)

    def exists(self, name: str) -> bool:
        if name.split("::")[0] in self.broken:
            raise RegistryLookupError(f"View [{name}] has an invalid name.")
        return name in self.views


def make_resolver(
    classes: Optional[Mapping] = None, views: Iterable[str] = (), **config
) -> ComponentResolver:
    return ComponentResolver(
        CompilerConfig(**config), StaticClassRegistry(classes), StaticViewFinder(views)
    )


def test_format_class_name() -> None:
    assert format_class_name("alert") == "Alert"
    assert format_class_name("forms.text-input") == "Forms\\TextInput"
    assert format_class_name("user_profile.avatar") == "UserProfile\\Avatar"


def test_guess_view_name() -> None:
    assert guess_view_name("alert") == "components.alert"
    assert guess_view_name("alert", "admin.components") == "admin.components.alert"
    assert guess_view_name("pkg::alert", "components") == "pkg::components.alert"


def test_alias_to_class() -> None:
    resolver = make_resolver(
        classes={"App\\Widgets\\Alert": []}, aliases={"alert": "App\\Widgets\\Alert"}
    )
    identity = resolver.resolve("alert")
    assert identity.name == "App\\Widgets\\Alert"
    assert identity.kind is ComponentKind.CLASS


def test_alias_to_view() -> None:
    resolver = make_resolver(views=["widgets.alert"], aliases={"alert": "widgets.alert"})
    identity = resolver.resolve("alert")
    assert identity.name == "widgets.alert"
    assert identity.kind is ComponentKind.VIEW


def test_broken_alias_never_falls_through() -> None:
    # Both the default class and the anonymous view would match "foo"
    resolver = make_resolver(
        classes={"App\\View\\Components\\Foo": []},
        views=["components.foo"],
        aliases={"foo": "App\\Foo"},
    )
    with pytest.raises(UnresolvedComponentError, match=r"\[App\\Foo\] for component \[foo\]"):
        resolver.resolve("foo")


def test_namespaced_class() -> None:
    resolver = make_resolver(
        classes={"Nightshade\\View\\Components\\Calendar\\DatePicker": []},
        namespaces={"nightshade": "Nightshade\\View\\Components"},
    )
    identity = resolver.resolve("nightshade::calendar.date-picker")
    assert identity.name == "Nightshade\\View\\Components\\Calendar\\DatePicker"
    assert identity.is_class


def test_namespaced_class_missing_falls_through() -> None:
    resolver = make_resolver(
        views=["nightshade::components.calendar"],
        namespaces={"nightshade": "Nightshade\\View\\Components"},
    )
    assert resolver.resolve("nightshade::calendar").name == "nightshade::components.calendar"


def test_default_class_convention() -> None:
    resolver = make_resolver(classes={"App\\View\\Components\\Forms\\TextInput": []})
    assert resolver.resolve("forms.text-input").name == (
        "App\\View\\Components\\Forms\\TextInput"
    )


def test_default_class_uses_application_namespace() -> None:
    resolver = make_resolver(
        classes={"Acme\\View\\Components\\Alert": []}, app_namespace="Acme"
    )
    assert resolver.resolve("alert").name == "Acme\\View\\Components\\Alert"


def test_default_class_strategy_alone() -> None:
    resolver = make_resolver()
    assert resolve_default_class("alert", resolver) is None


def test_class_beats_anonymous_view() -> None:
    resolver = make_resolver(
        classes={"App\\View\\Components\\Alert": []}, views=["components.alert"]
    )
    assert resolver.resolve("alert").kind is ComponentKind.CLASS


def test_anonymous_component_view() -> None:
    resolver = make_resolver(views=["components.alert"])
    identity = resolver.resolve("alert")
    assert identity.name == "components.alert"
    assert identity.kind is ComponentKind.VIEW


def test_anonymous_index_view() -> None:
    resolver = make_resolver(views=["components.card.index"])
    assert resolver.resolve("card").name == "components.card.index"


def test_anonymous_namespace() -> None:
    resolver = make_resolver(
        views=["admin.components.panel"],
        anonymous_namespaces={"admin": "admin.components"},
    )
    assert resolver.resolve("admin::panel").name == "admin.components.panel"


def test_anonymous_path_with_prefix() -> None:
    prefix_hash = hashlib.md5(b"ui").hexdigest()
    resolver = make_resolver(
        views=[f"{prefix_hash}::button"],
        anonymous_paths=(AnonymousComponentPath("/views/ui", prefix="ui"),),
    )
    assert resolver.resolve("ui::button").name == f"{prefix_hash}::button"


def test_anonymous_path_without_prefix() -> None:
    path = AnonymousComponentPath("/views/shared")
    resolver = make_resolver(
        views=[f"{path.prefix_hash}::modal.index"], anonymous_paths=(path,)
    )
    assert resolver.resolve("modal").name == f"{path.prefix_hash}::modal.index"


def test_anonymous_path_skips_other_prefixes() -> None:
    path = AnonymousComponentPath("/views/ui", prefix="ui")
    resolver = make_resolver(
        views=[f"{path.prefix_hash}::button"], anonymous_paths=(path,)
    )
    with pytest.raises(UnresolvedComponentError):
        resolver.resolve("other::button")


def test_anonymous_path_lookup_errors_are_swallowed() -> None:
    broken = AnonymousComponentPath("/views/broken")
    working = AnonymousComponentPath("/views/working")
    resolver = ComponentResolver(
        CompilerConfig(anonymous_paths=(broken, working)),
        StaticClassRegistry(),
        SelectiveViewFinder(
            views=[f"{working.prefix_hash}::button"], broken=[broken.prefix_hash]
        ),
    )
    assert resolver.resolve("button").name == f"{working.prefix_hash}::button"


def test_mail_components_resolve_to_themselves() -> None:
    identity = make_resolver().resolve("mail::message")
    assert identity.name == "mail::message"
    assert identity.kind is ComponentKind.MAIL


def test_unresolved_component() -> None:
    with pytest.raises(
        UnresolvedComponentError,
        match=r"Unable to locate a class or view for component \[missing\]\.",
    ):
        make_resolver().resolve("missing")


def test_custom_strategy_order() -> None:
    resolver = ComponentResolver(
        CompilerConfig(),
        StaticClassRegistry({"App\\View\\Components\\Alert": []}),
        StaticViewFinder(),
        strategies=[resolve_default_class],
    )
    assert resolver.resolve("alert").is_class
    with pytest.raises(UnresolvedComponentError):
        resolver.resolve("mail::message")


def test_public_helpers() -> None:
    resolver = make_resolver(
        classes={"Vendor\\Ui\\Modal": []}, namespaces={"ui": "Vendor\\Ui"}
    )
    assert resolver.guess_class_name("forms.input") == "App\\View\\Components\\Forms\\Input"
    assert resolver.find_class_by_component("ui::modal") == "Vendor\\Ui\\Modal"
    assert resolver.find_class_by_component("ui::drawer") is None
    assert resolver.find_class_by_component("modal") is None
