from __future__ import annotations

import asyncio
import re
from enum import Enum
from pathlib import PurePosixPath
from typing import Mapping

from jinja2 import ChainableUndefined, Environment, TemplateError

from .errors import RenderError
from .fileset import FileRecord, FileSet
from .naming import camel_case, pascal_case, slug_case, snake_case

SAMPLE_SIZE = 512

# Every tag starts with "{{", so bare "{%" and "{#" in scripts or format strings stay literal.
VARIABLE_START = "{{"

# Bare {key} only; ${key}, {key.attr} and {key(args)} in file bodies are left alone.
_BARE_TOKEN = re.compile(r"(?<!\$)\{(\w+)\}", re.ASCII)

BINARY_EXTENSIONS = {
    "7z", "a", "avi", "bin", "bmp", "bz2", "class", "dll", "dmg", "doc", "docx",
    "eot", "exe", "flac", "gif", "gz", "ico", "jar", "jpeg", "jpg", "lib", "mov",
    "mp3", "mp4", "o", "otf", "pdf", "png", "ppt", "pptx", "psd", "pyc", "so",
    "sqlite", "tar", "tgz", "tif", "tiff", "ttf", "wav", "webm", "webp", "woff",
    "woff2", "xls", "xlsx", "xz", "zip",
}


class FileKind(str, Enum):
    text = "text"
    binary = "binary"


def _samples(data: bytes) -> list[bytes]:
    if len(data) <= SAMPLE_SIZE * 3:
        return [data]
    middle = len(data) // 2 - SAMPLE_SIZE // 2
    return [data[:SAMPLE_SIZE], data[middle : middle + SAMPLE_SIZE], data[-SAMPLE_SIZE:]]


def classify(data: bytes, filename: str | None = None) -> FileKind:
    """Decide whether ``data`` should be rendered as text or copied as-is.

    A known binary extension on ``filename`` short-circuits the check.
    Otherwise the head, middle and tail of the buffer are scanned for NUL and
    low control bytes, and the whole buffer must decode as UTF-8.
    """
    if filename:
        suffixes = PurePosixPath(filename).name.lower().split(".")[1:]
        if any(suffix in BINARY_EXTENSIONS for suffix in suffixes):
            return FileKind.binary

    for chunk in _samples(data):
        if any(byte <= 0x08 for byte in chunk):
            return FileKind.binary

    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return FileKind.binary
    return FileKind.text


def build_environment() -> Environment:
    env = Environment(
        undefined=ChainableUndefined,
        variable_start_string=VARIABLE_START,
        variable_end_string="}}",
        block_start_string="{{%",
        block_end_string="%}}",
        comment_start_string="{{!",
        comment_end_string="}}",
        autoescape=False,
        keep_trailing_newline=True,
        enable_async=True,
    )
    env.filters.update(
        {
            "camel": lambda value: camel_case(str(value)),
            "pascal": lambda value: pascal_case(str(value)),
            "slug": lambda value: slug_case(str(value)),
            "snake": lambda value: snake_case(str(value)),
        }
    )
    return env


def _replace_bare_tokens(text: str, metadata: Mapping[str, str]) -> str:
    def substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        return str(metadata[key]) if key in metadata else match.group(0)

    return _BARE_TOKEN.sub(substitute, text)


async def _render_file(
    env: Environment,
    key: str,
    record: FileRecord,
    metadata: Mapping[str, str],
) -> None:
    if classify(record.contents, PurePosixPath(key).name) is FileKind.binary:
        return

    source = record.contents.decode("utf-8")
    rendered = source
    # Text without a tag opener only goes through the bare-token pass.
    if env.variable_start_string in source:
        if "\r\n" in source and source.count("\r\n") == source.count("\n"):
            env = env.overlay(newline_sequence="\r\n")
        try:
            rendered = await env.from_string(source).render_async(**metadata)
        except TemplateError as error:
            raise RenderError(key, str(error)) from error

    rendered = _replace_bare_tokens(rendered, metadata)
    record.contents = rendered.encode("utf-8")


async def render_contents(
    files: FileSet,
    metadata: Mapping[str, str],
    environment: Environment | None = None,
) -> FileSet:
    """Render every text file of ``files`` in place, one task per file.

    The first failing file aborts the stage. Files rendered before the failure
    keep their new contents.
    """
    env = environment or build_environment()
    await asyncio.gather(*(_render_file(env, key, record, metadata) for key, record in list(files.items())))
    return files
