"""Text shapes of the directives emitted for the host runtime."""

ANONYMOUS_COMPONENT_CLASS = "Illuminate\\View\\AnonymousComponent"

SANITIZE_ATTRIBUTE = (
    "\\Illuminate\\View\\Compilers\\BladeCompiler::sanitizeComponentAttribute"
)
CSS_CLASSES_HELPER = "\\Illuminate\\Support\\Arr::toCssClasses"
CSS_STYLES_HELPER = "\\Illuminate\\Support\\Arr::toCssStyles"

END_COMPONENT = "@endComponentClass##END-COMPONENT-CLASS##"
END_SLOT = " @endslot"

LIVE_STYLES = "@livewireStyles"
LIVE_SCRIPTS = "@livewireScripts"

MAIL_PREFIX = "mail::"


def mail_view(view: str) -> str:
    """Runtime lookup of a built-in mail view through the view factory."""
    return (
        "$__env->getContainer()->make(Illuminate\\View\\Factory::class)"
        f"->make('{view}')"
    )


def sanitized(value: str) -> str:
    return f"{SANITIZE_ATTRIBUTE}({value})"


def instantiate(class_name: str, parameters: str) -> str:
    return f"<?php {class_name}::resolve([{parameters}]); ?>"


def render_and_echo(class_name: str, parameters: str) -> str:
    return f"<?php echo {class_name}::resolve([{parameters}])->render(); ?>"


def end_component(self_closing: bool = False) -> str:
    if self_closing:
        return "\n" + END_COMPONENT
    return " " + END_COMPONENT


def begin_slot(name: str, attributes: str) -> str:
    return f" @slot({name}, null, [{attributes}]) "
