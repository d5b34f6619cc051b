import pytest

from bladewire.compiler.attributes.parser import AttributeParser
from bladewire.compiler.interpolation.blade import BladeEchoCompiler
from bladewire.compiler.pipeline import TemplateCompiler
from bladewire.compiler.tags.live import (
    LiveComponentTagCompiler,
    normalize_live_attribute_keys,
)
from bladewire.config import CompilerConfig
from bladewire.registry import StaticClassRegistry, StaticViewFinder

RENDER = "<?php echo Illuminate\\View\\AnonymousComponent::resolve([{}])->render(); ?>"


@pytest.fixture
def compiler() -> LiveComponentTagCompiler:
    return LiveComponentTagCompiler(AttributeParser(BladeEchoCompiler()))


@pytest.mark.parametrize(
    "template,expected",
    [
        ("<livewire:styles />", "@livewireStyles"),
        ("<livewire:scripts/>", "@livewireScripts"),
        ("<livewire:styles>", "@livewireStyles"),
    ],
)
def test_reserved_tags(compiler, template: str, expected: str) -> None:
    assert compiler.compile(template) == expected


def test_snake_case_keys_keep_both_spellings(compiler) -> None:
    result = compiler.compile('<livewire:foo snake_case="1" other-attr="2">')
    assert result == RENDER.format(
        "'snakeCase' => '1','snake_case' => '1','otherAttr' => '2'"
    )


def test_explicit_camel_case_attribute_wins(compiler) -> None:
    result = compiler.compile('<livewire:foo foo_bar="1" fooBar="2" />')
    assert result == RENDER.format("'fooBar' => '2','foo_bar' => '1'")


def test_bound_attributes_are_not_sanitized(compiler) -> None:
    result = compiler.compile('<livewire:counter :count="$n" />')
    assert result == RENDER.format("'count' => $n")


def test_falsy_literals_are_kept(compiler) -> None:
    result = compiler.compile('<livewire:counter start="0" />')
    assert result == RENDER.format("'start' => '0'")


def test_component_name_is_not_resolved(compiler) -> None:
    # No registry is consulted, so unknown names compile fine
    result = compiler.compile("<livewire:does-not.exist />")
    assert result == RENDER.format("")


def test_surrounding_text_is_kept(compiler) -> None:
    result = compiler.compile("<div>\n    <livewire:styles />\n</div>")
    assert result == "<div>\n    @livewireStyles\n</div>"


def test_normalize_keys() -> None:
    assert normalize_live_attribute_keys({"a-b": "1", "c_d": "2"}) == {
        "cD": "2",
        "aB": "1",
        "c_d": "2",
    }


def test_live_and_standard_tags_in_one_template() -> None:
    compiler = TemplateCompiler(
        CompilerConfig(), StaticClassRegistry(), StaticViewFinder(["components.alert"])
    )
    result = compiler.compile("<livewire:styles /><x-alert />")
    assert result.startswith("@livewireStyles<?php Illuminate\\View\\AnonymousComponent")
    assert result.endswith("@endComponentClass##END-COMPONENT-CLASS##")
