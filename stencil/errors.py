from __future__ import annotations

from pathlib import Path


class StencilError(RuntimeError):
    pass


class TemplateNotFound(StencilError):
    pass


class TemplateRootMissing(StencilError):
    pass


class SettingsError(StencilError):
    pass


class RenderError(StencilError):
    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(f"Failed to render {path}: {message}")
        self.path = str(path)
