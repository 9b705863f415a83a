import io
from pathlib import Path

import pytest
from rich.console import Console

from stencil.config import Settings
from stencil.errors import RenderError, TemplateNotFound, TemplateRootMissing
from stencil.scaffold import GenerateOptions, generate

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR{{ name }}"


def _quiet() -> Console:
    return Console(quiet=True)


def _component_template(root: Path) -> Path:
    template = root / "component"
    (template / "{name_snc}").mkdir(parents=True)
    (template / "src").mkdir()
    (template / "{name_pc}.txt").write_text("Hello {name}", encoding="utf-8")
    (template / "{name_snc}" / "__init__.py").write_text(
        'class {{ name_pc }}:\n    label = "{{ name_sc }}"\n', encoding="utf-8"
    )
    (template / "src" / ".env").write_text("APP={{ name_snc }}\n", encoding="utf-8")
    (template / ".gitkeep").write_text("", encoding="utf-8")
    (template / "logo.png").write_bytes(PNG_BYTES)
    return template


def test_generate_end_to_end(tmp_path: Path):
    _component_template(tmp_path / "templates")
    destination = tmp_path / "out"

    result = generate(
        "component",
        GenerateOptions(name="my-widget", destination=destination),
        Settings(template_path=str(tmp_path / "templates")),
        console=_quiet(),
    )

    assert (destination / "MyWidget.txt").read_text(encoding="utf-8") == "Hello my-widget"
    assert (destination / "my_widget" / "__init__.py").read_text(encoding="utf-8") == (
        'class MyWidget:\n    label = "my-widget"\n'
    )
    assert (destination / "src" / ".env").read_text(encoding="utf-8") == "APP=my_widget\n"
    assert (destination / "logo.png").read_bytes() == PNG_BYTES
    assert not (destination / ".gitkeep").exists()
    assert sorted(result.files) == ["MyWidget.txt", "logo.png", "my_widget/__init__.py", "src/.env"]
    assert result.destination == destination.resolve()


def test_generate_reports_progress(tmp_path: Path):
    _component_template(tmp_path / "templates")
    buffer = io.StringIO()

    generate(
        "component",
        GenerateOptions(name="my-widget", destination=tmp_path / "out"),
        Settings(template_path=str(tmp_path / "templates")),
        console=Console(file=buffer, width=200),
    )

    output = buffer.getvalue()
    assert "Generating files from 'component' template with name: my-widget" in output
    assert "Done!" in output


def test_generate_uses_first_root_with_type(tmp_path: Path):
    first = tmp_path / "first"
    (first / "component").mkdir(parents=True)
    (first / "component" / "from.txt").write_text("first", encoding="utf-8")
    second = tmp_path / "second"
    (second / "component").mkdir(parents=True)
    (second / "component" / "from.txt").write_text("second", encoding="utf-8")

    generate(
        "component",
        GenerateOptions(name="x", destination=tmp_path / "out"),
        Settings(template_path=f"{tmp_path / 'missing'},{first},{second}"),
        console=_quiet(),
    )

    assert (tmp_path / "out" / "from.txt").read_text(encoding="utf-8") == "first"


def test_generate_does_not_clean_destination(tmp_path: Path):
    _component_template(tmp_path / "templates")
    destination = tmp_path / "out"
    destination.mkdir()
    (destination / "existing.txt").write_text("keep me", encoding="utf-8")

    generate(
        "component",
        GenerateOptions(name="my-widget", destination=destination),
        Settings(template_path=str(tmp_path / "templates")),
        console=_quiet(),
    )

    assert (destination / "existing.txt").read_text(encoding="utf-8") == "keep me"
    assert (destination / "MyWidget.txt").exists()


def test_missing_type_writes_nothing(tmp_path: Path):
    _component_template(tmp_path / "templates")
    destination = tmp_path / "out"
    destination.mkdir()
    (destination / "existing.txt").write_text("untouched", encoding="utf-8")

    with pytest.raises(TemplateNotFound):
        generate(
            "service",
            GenerateOptions(name="my-widget", destination=destination),
            Settings(template_path=str(tmp_path / "templates")),
            console=_quiet(),
        )

    assert [path.name for path in destination.iterdir()] == ["existing.txt"]
    assert (destination / "existing.txt").read_text(encoding="utf-8") == "untouched"


def test_missing_roots_write_nothing(tmp_path: Path):
    destination = tmp_path / "out"

    with pytest.raises(TemplateRootMissing):
        generate(
            "component",
            GenerateOptions(name="my-widget", destination=destination),
            Settings(template_path=str(tmp_path / "nowhere")),
            console=_quiet(),
        )

    assert not destination.exists()


def test_render_error_aborts_before_writing(tmp_path: Path):
    template = tmp_path / "templates" / "broken"
    template.mkdir(parents=True)
    (template / "bad.txt").write_text("{{% for %}}", encoding="utf-8")
    destination = tmp_path / "out"

    with pytest.raises(RenderError):
        generate(
            "broken",
            GenerateOptions(name="x", destination=destination),
            Settings(template_path=str(tmp_path / "templates")),
            console=_quiet(),
        )

    assert not destination.exists()


def test_dry_run_lists_files_without_writing(tmp_path: Path):
    _component_template(tmp_path / "templates")
    destination = tmp_path / "out"

    result = generate(
        "component",
        GenerateOptions(name="my-widget", destination=destination, dry_run=True),
        Settings(template_path=str(tmp_path / "templates")),
        console=_quiet(),
    )

    assert "MyWidget.txt" in result.files
    assert not destination.exists()
