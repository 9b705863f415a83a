from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .config import Settings
from .content import render_contents
from .fileset import filter_hidden, load_fileset, write_fileset
from .locator import locate
from .naming import derive_names
from .paths import render_paths


@dataclass(frozen=True)
class GenerateOptions:
    name: str
    destination: Path
    dry_run: bool = False


@dataclass(frozen=True)
class GenerateResult:
    template_type: str
    source: Path
    destination: Path
    files: tuple[str, ...]


def generate(
    template_type: str,
    options: GenerateOptions,
    settings: Settings,
    console: Console | None = None,
) -> GenerateResult:
    console = console or Console()

    root = locate(settings.roots, template_type)
    source = root / template_type
    destination = options.destination.resolve()

    console.print()
    console.print(
        f"[bold green]Generating files from '{template_type}' template with name: {escape(options.name)}[/bold green]",
        highlight=False,
    )

    metadata = derive_names(options.name).metadata()

    files = load_fileset(source)
    filter_hidden(files)
    render_paths(files, metadata)
    asyncio.run(render_contents(files, metadata))

    if not options.dry_run:
        write_fileset(files, destination)

    console.print()
    console.print("[green]Done![/green]")

    return GenerateResult(
        template_type=template_type,
        source=source,
        destination=destination,
        files=tuple(files),
    )
