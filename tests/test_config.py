from pathlib import Path

import pytest

from stencil.config import DEFAULT_TEMPLATE_PATH, SETTINGS_FILE, Settings, load_settings, split_roots
from stencil.errors import SettingsError


def test_split_roots_keeps_order_and_drops_blanks():
    assert split_roots(" first , ,second,") == [Path("first"), Path("second")]


def test_explicit_template_path_wins(tmp_path: Path):
    (tmp_path / SETTINGS_FILE).write_text("template_path: from-file\n", encoding="utf-8")

    settings = load_settings("a,b", cwd=tmp_path)

    assert settings.template_path == "a,b"
    assert settings.roots == [Path("a"), Path("b")]


def test_settings_file_string(tmp_path: Path):
    (tmp_path / SETTINGS_FILE).write_text("template_path: shared,local\n", encoding="utf-8")

    assert load_settings(cwd=tmp_path).roots == [Path("shared"), Path("local")]


def test_settings_file_list(tmp_path: Path):
    (tmp_path / SETTINGS_FILE).write_text("template_path:\n  - one\n  - two\n", encoding="utf-8")

    assert load_settings(cwd=tmp_path).template_path == "one,two"


def test_missing_settings_file_uses_default(tmp_path: Path):
    assert load_settings(cwd=tmp_path) == Settings(template_path=DEFAULT_TEMPLATE_PATH)


def test_empty_settings_file_uses_default(tmp_path: Path):
    (tmp_path / SETTINGS_FILE).write_text("", encoding="utf-8")

    assert load_settings(cwd=tmp_path).template_path == DEFAULT_TEMPLATE_PATH


def test_invalid_settings_file_raises(tmp_path: Path):
    (tmp_path / SETTINGS_FILE).write_text("template_path: 12\n", encoding="utf-8")

    with pytest.raises(SettingsError):
        load_settings(cwd=tmp_path)


def test_non_mapping_settings_file_raises(tmp_path: Path):
    (tmp_path / SETTINGS_FILE).write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(SettingsError):
        load_settings(cwd=tmp_path)
