from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import SettingsError

HIDDEN_PREFIX = "."
SETTINGS_FILE = ".stencil.yml"
ENV_TEMPLATE_PATH = "STENCIL_TEMPLATE_PATH"
DEFAULT_TEMPLATE_PATH = "templates"


@dataclass(frozen=True)
class Settings:
    template_path: str = DEFAULT_TEMPLATE_PATH

    @property
    def roots(self) -> list[Path]:
        return split_roots(self.template_path)


def split_roots(template_path: str) -> list[Path]:
    return [Path(item.strip()) for item in template_path.split(",") if item.strip()]


def _read_settings_file(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as error:
        raise SettingsError(f"Invalid settings file {path}: {error}") from error

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    return data


def _coerce_template_path(value: object, source: Path) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ",".join(value)
    raise SettingsError(f"template_path in {source} must be a string or a list of strings")


def load_settings(template_path: str | None = None, cwd: Path | None = None) -> Settings:
    """Resolve settings, preferring an explicit template path over the settings file."""
    if template_path:
        return Settings(template_path=template_path)

    settings_path = (cwd or Path.cwd()) / SETTINGS_FILE
    if not settings_path.is_file():
        return Settings()

    data = _read_settings_file(settings_path)
    if "template_path" not in data:
        return Settings()
    return Settings(template_path=_coerce_template_path(data["template_path"], settings_path))
