from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import HIDDEN_PREFIX


@dataclass
class FileRecord:
    contents: bytes
    mode: int = 0o644


FileSet = dict[str, FileRecord]


def load_fileset(source: Path) -> FileSet:
    """Read every regular file below ``source`` keyed by its POSIX relative path."""
    files: FileSet = {}
    for path in sorted(source.rglob("*")):
        if not path.is_file():
            continue
        key = path.relative_to(source).as_posix()
        files[key] = FileRecord(contents=path.read_bytes(), mode=path.stat().st_mode & 0o777)
    return files


def filter_hidden(files: FileSet) -> FileSet:
    # Only the leading character of the whole key counts: "src/.env" is kept.
    for key in list(files):
        if key.startswith(HIDDEN_PREFIX):
            del files[key]
    return files


def write_fileset(files: FileSet, destination: Path) -> list[Path]:
    written: list[Path] = []
    for key, record in files.items():
        target = destination / key
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(record.contents)
        target.chmod(record.mode)
        written.append(target)
    return written
