from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ENV_TEMPLATE_PATH, SETTINGS_FILE, load_settings
from .errors import RenderError, SettingsError, TemplateNotFound, TemplateRootMissing
from .locator import list_templates
from .naming import derive_names
from .scaffold import GenerateOptions, generate

app = typer.Typer(help="Generate files from template folders.")
console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2
EXIT_NOT_FOUND = 3

TEMPLATE_PATH_HELP = f"Comma-separated template roots, searched in order. Falls back to {SETTINGS_FILE}."


class OutputFormat(str, Enum):
    table = "table"
    json = "json"
    md = "md"


def _json_print(payload: dict) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=True, sort_keys=True))


def _print_key_value_table(title: str, rows: list[tuple[str, str]]) -> None:
    table = Table(title=title)
    table.add_column("Field")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


def _emit_success(
    command: str,
    output_format: OutputFormat,
    data: dict,
    md_renderer: Callable[[dict], str] | None = None,
    table_renderer: Callable[[dict], None] | None = None,
) -> None:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": True,
                "command": command,
                "exit_code": EXIT_OK,
                "data": data,
            }
        )
        return

    if output_format == OutputFormat.md and md_renderer is not None:
        console.print(md_renderer(data))
        return

    if output_format == OutputFormat.table and table_renderer is not None:
        table_renderer(data)
        return

    if output_format == OutputFormat.md:
        lines = [f"# {command}", ""]
        lines.extend(f"- **{key}**: {value}" for key, value in data.items())
        console.print("\n".join(lines))
    else:
        _print_key_value_table(
            title=command,
            rows=[(str(key), str(value)) for key, value in data.items()],
        )


def _emit_error(
    command: str,
    output_format: OutputFormat,
    exit_code: int,
    code: str,
    message: str,
) -> None:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": False,
                "command": command,
                "exit_code": exit_code,
                "error": {
                    "code": code,
                    "message": message,
                },
            }
        )
    elif output_format == OutputFormat.md:
        console.print(f"# {command}\n\n- **status**: error\n- **code**: {code}\n- **message**: {message}")
    else:
        console.print()
        console.print(f"[red]Error ({code}):[/red] {message}")

    raise typer.Exit(code=exit_code)


def _progress_console(output_format: OutputFormat) -> Console:
    # JSON mode keeps stdout to the single result envelope.
    return Console(quiet=output_format == OutputFormat.json)


@app.command("generate")
def generate_files(
    template_type: str = typer.Argument(..., help="Template type, the folder name inside a template root."),
    name: str = typer.Option(..., "--name", "-n", help="Name used to derive the case variants."),
    destination: Path = typer.Option(Path("."), "--destination", "-d", help="Directory to write into."),
    template_path: Optional[str] = typer.Option(
        None, "--template-path", "-t", envvar=ENV_TEMPLATE_PATH, help=TEMPLATE_PATH_HELP
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render in memory and list files without writing."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Generate files from a template type."""
    # _emit_error always raises typer.Exit; the bare raises after it are unreachable.
    try:
        settings = load_settings(template_path)
        result = generate(
            template_type,
            GenerateOptions(name=name, destination=destination, dry_run=dry_run),
            settings,
            console=_progress_console(output_format),
        )
    except TemplateNotFound as error:
        _emit_error("generate", output_format, EXIT_NOT_FOUND, "template_not_found", str(error))
        raise
    except (TemplateRootMissing, SettingsError) as error:
        code = "template_root_missing" if isinstance(error, TemplateRootMissing) else "settings_error"
        _emit_error("generate", output_format, EXIT_INVALID_INPUT, code, str(error))
        raise
    except RenderError as error:
        _emit_error("generate", output_format, EXIT_ERROR, "render_error", str(error))
        raise
    except OSError as error:
        _emit_error("generate", output_format, EXIT_ERROR, "io_error", str(error))
        raise

    data = {
        "template": result.template_type,
        "source": str(result.source),
        "destination": str(result.destination),
        "dry_run": dry_run,
        "files": list(result.files),
    }

    def render_md(payload: dict) -> str:
        lines = [f"# Generated from `{payload['template']}`", ""]
        lines.append(f"- **destination**: `{payload['destination']}`")
        lines.extend(f"- `{item}`" for item in payload["files"])
        return "\n".join(lines)

    def render_table(payload: dict) -> None:
        title = "Planned files" if payload["dry_run"] else "Generated files"
        table = Table(title=f"{title} in {payload['destination']}")
        table.add_column("File")
        for item in payload["files"]:
            table.add_row(item)
        console.print(table)

    _emit_success(command="generate", output_format=output_format, data=data, md_renderer=render_md, table_renderer=render_table)


@app.command("list")
def list_types(
    template_path: Optional[str] = typer.Option(
        None, "--template-path", "-t", envvar=ENV_TEMPLATE_PATH, help=TEMPLATE_PATH_HELP
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """List template types available in the template roots."""
    try:
        settings = load_settings(template_path)
    except SettingsError as error:
        _emit_error("list", output_format, EXIT_INVALID_INPUT, "settings_error", str(error))
        raise

    entries = list_templates(settings.roots)
    if not entries:
        _emit_error(
            command="list",
            output_format=output_format,
            exit_code=EXIT_NOT_FOUND,
            code="no_templates",
            message=f"No templates found in: {settings.template_path}",
        )

    data = {
        "template_path": settings.template_path,
        "templates": [
            {"type": entry.template_type, "root": str(entry.root), "shadowed": entry.shadowed}
            for entry in entries
        ],
    }

    def render_md(payload: dict) -> str:
        lines = [f"# Templates in `{payload['template_path']}`", ""]
        for item in payload["templates"]:
            suffix = " (shadowed)" if item["shadowed"] else ""
            lines.append(f"- `{item['type']}` from `{item['root']}`{suffix}")
        return "\n".join(lines)

    def render_table(payload: dict) -> None:
        table = Table(title="Templates")
        table.add_column("Type")
        table.add_column("Root")
        table.add_column("Shadowed")
        for item in payload["templates"]:
            table.add_row(item["type"], item["root"], "yes" if item["shadowed"] else "")
        console.print(table)

    _emit_success(command="list", output_format=output_format, data=data, md_renderer=render_md, table_renderer=render_table)


@app.command("names")
def show_names(
    name: str = typer.Argument(..., help="Name to derive case variants from."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Show the placeholder values derived from a name."""
    data = derive_names(name).metadata()
    _emit_success(command="names", output_format=output_format, data=data)


@app.command("version")
def version(
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
) -> None:
    """Print version."""
    _emit_success(command="version", output_format=output_format, data={"version": __version__})


if __name__ == "__main__":
    app()
