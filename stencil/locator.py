from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .config import split_roots
from .errors import TemplateNotFound, TemplateRootMissing

__all__ = ["TemplateEntry", "list_templates", "locate", "split_roots"]


@dataclass(frozen=True)
class TemplateEntry:
    template_type: str
    root: Path
    shadowed: bool = False


def locate(roots: Iterable[Path], template_type: str) -> Path:
    """Return the first root containing ``template_type``.

    Roots are searched in the order given; the first match wins.
    """
    candidates = [Path(root) for root in roots]
    if not candidates:
        raise TemplateRootMissing("No template folder configured")

    for root in candidates:
        if (root / template_type).exists():
            return root

    existing = [root for root in candidates if root.exists()]
    if not existing:
        missing = ", ".join(str(root.resolve()) for root in candidates)
        raise TemplateRootMissing(f"Template folder ({missing}) doesn't exist")

    raise TemplateNotFound(f"Template folder that contains template {template_type} doesn't exist")


def list_templates(roots: Iterable[Path]) -> list[TemplateEntry]:
    entries: list[TemplateEntry] = []
    seen: set[str] = set()
    for root in (Path(item) for item in roots):
        if not root.is_dir():
            continue
        for child in sorted(root.iterdir()):
            if not child.is_dir() or child.name.startswith("."):
                continue
            entries.append(
                TemplateEntry(
                    template_type=child.name,
                    root=root,
                    shadowed=child.name in seen,
                )
            )
            seen.add(child.name)
    return entries
