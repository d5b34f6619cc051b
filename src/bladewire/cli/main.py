"""Main CLI entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler

from bladewire import __version__
from bladewire.compiler.exceptions import BladewireError
from bladewire.compiler.pipeline import DEFAULT_VARIANTS, TagVariant, build_compiler
from bladewire.config import CONFIG_ENV_VAR, CompilerConfig, load_config

console = Console(stderr=True)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = (
    "Try running 'bladewire --help' for more information."
)

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "bladewire": [
        {
            "name": "Commands",
            "commands": ["compile", "resolve"],
        }
    ]
}

VARIANT_CHOICES = {
    "all": DEFAULT_VARIANTS,
    "standard": (TagVariant.STANDARD,),
    "live": (TagVariant.LIVE,),
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def _load_config(config_path: Optional[str]) -> CompilerConfig:
    try:
        return load_config(Path(config_path) if config_path else None)
    except (OSError, ValueError) as e:
        raise click.BadParameter(f"Could not read config: {e}", param_hint="--config")


def _read_template(template: str) -> str:
    if template == "-":
        return sys.stdin.read()
    return Path(template).read_text(encoding="utf-8")


@click.group(
    help=f"""
[bold white on cyan] bladewire [/] [bold cyan]v{__version__}[/] Compile component tags into Blade directives.

Run [bold cyan]bladewire compile TEMPLATE[/] to print the compiled template.
Run [bold cyan]bladewire resolve TAG[/] to see what a tag name resolves to.

[dim]Configuration is read from --config, or from the file named by ${CONFIG_ENV_VAR}.[/dim]
"""
)
@click.version_option(__version__)
def cli() -> None:
    pass


@cli.command("compile")
@click.argument("template", type=click.Path(dir_okay=False, allow_dash=True))
@click.option("--config", "config_path", default=None, help="JSON configuration file")
@click.option(
    "--variant",
    type=click.Choice(list(VARIANT_CHOICES)),
    default="all",
    help="Which tag syntaxes to compile",
)
@click.option("--output", "-o", default=None, help="Write the result to this file")
@click.option("--strict", is_flag=True, help="Fail on unparsable attribute lists")
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details")
def compile_template(
    template: str,
    config_path: Optional[str],
    variant: str,
    output: Optional[str],
    strict: bool,
    verbose: bool,
) -> None:
    """Compile the component tags of a template."""
    _configure_logging(verbose)

    try:
        source = _read_template(template)
    except OSError as e:
        raise click.BadParameter(f"Could not read template: {e}", param_hint="TEMPLATE")

    variants: Tuple[TagVariant, ...] = VARIANT_CHOICES[variant]
    compiler = build_compiler(_load_config(config_path), variants=variants, strict=strict)

    try:
        compiled = compiler.compile(source)
    except BladewireError as e:
        raise click.ClickException(str(e))

    if output:
        Path(output).write_text(compiled, encoding="utf-8")
        console.print(f"✅ Compiled [cyan]{template}[/] -> [cyan]{output}[/]")
    else:
        click.echo(compiled, nl=False)


@cli.command()
@click.argument("tag")
@click.option("--config", "config_path", default=None, help="JSON configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details")
def resolve(tag: str, config_path: Optional[str], verbose: bool) -> None:
    """Show the class or view a tag name resolves to."""
    _configure_logging(verbose)

    compiler = build_compiler(_load_config(config_path))

    try:
        identity = compiler.resolve(tag)
    except BladewireError as e:
        raise click.ClickException(str(e))

    click.echo(f"{identity.kind.value} {identity.name}")


if __name__ == "__main__":
    cli()
