import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from bladewire.cli.main import cli

END = "@endComponentClass##END-COMPONENT-CLASS##"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    views = tmp_path / "views" / "components"
    views.mkdir(parents=True)
    (views / "alert.blade.php").write_text("<div>{{ $slot }}</div>")
    (tmp_path / "bladewire.json").write_text(
        json.dumps(
            {
                "view_paths": ["views"],
                "classes": {"App\\View\\Components\\Button": ["type"]},
            }
        )
    )
    return tmp_path


def test_compile_to_stdout(project: Path) -> None:
    template = project / "page.blade.php"
    template.write_text('<x-alert type="error" />')

    result = CliRunner().invoke(
        cli, ["compile", str(template), "--config", str(project / "bladewire.json")]
    )

    assert result.exit_code == 0, result.output
    assert result.output == (
        "<?php Illuminate\\View\\AnonymousComponent::resolve(['view' => "
        "'components.alert','data' => ['type' => 'error']]); ?>\n" + END
    )


def test_compile_to_file(project: Path) -> None:
    template = project / "page.blade.php"
    template.write_text('<x-button type="submit">Go</x-button>')
    output = project / "page.php"

    result = CliRunner().invoke(
        cli,
        [
            "compile",
            str(template),
            "--config",
            str(project / "bladewire.json"),
            "-o",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    assert output.read_text() == (
        "<?php App\\View\\Components\\Button::resolve(['type' => 'submit',"
        "'_data' => []]); ?>Go " + END
    )


def test_compile_from_stdin() -> None:
    result = CliRunner().invoke(
        cli, ["compile", "-", "--variant", "live"], input="<livewire:styles />"
    )
    assert result.exit_code == 0, result.output
    assert result.output == "@livewireStyles"


def test_compile_unresolved_component(project: Path) -> None:
    template = project / "page.blade.php"
    template.write_text("<x-nope />")

    result = CliRunner().invoke(
        cli, ["compile", str(template), "--config", str(project / "bladewire.json")]
    )

    assert result.exit_code == 1
    assert "nope" in result.output


def test_resolve_view(project: Path) -> None:
    result = CliRunner().invoke(
        cli, ["resolve", "alert", "--config", str(project / "bladewire.json")]
    )
    assert result.exit_code == 0, result.output
    assert result.output == "view components.alert\n"


def test_resolve_class_from_environment(project: Path) -> None:
    result = CliRunner().invoke(
        cli,
        ["resolve", "button"],
        env={"BLADEWIRE_CONFIG": str(project / "bladewire.json")},
    )
    assert result.exit_code == 0, result.output
    assert result.output == "class App\\View\\Components\\Button\n"


def test_unreadable_config(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli, ["resolve", "alert", "--config", str(tmp_path / "missing.json")]
    )
    assert result.exit_code == 2


def test_malformed_config_is_a_bad_parameter(tmp_path: Path) -> None:
    config = tmp_path / "bladewire.json"
    config.write_text(json.dumps({"anonymous_paths": [{"prefix": "ui"}]}))

    result = CliRunner().invoke(cli, ["resolve", "alert", "--config", str(config)])

    assert result.exit_code == 2
    assert "anonymous_paths" in result.output
