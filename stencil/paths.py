from __future__ import annotations

import re
from typing import Mapping

from .fileset import FileSet

# Optional "$", then "{body}" or "{body(args)}". Arguments are matched but never used.
PLACEHOLDER_PATTERN = re.compile(r"\$?\{([@#$%&\w.]*)(\(([^)]*)\))?\}", re.ASCII)


def replace_placeholders(value: str, metadata: Mapping[str, str], *, keep_unknown: bool = False) -> str:
    """Substitute every placeholder token in ``value`` from ``metadata``.

    Only the part of the token body before the first ``.`` is looked up, so
    ``{name.upper}`` resolves exactly like ``{name}``. Tokens naming a key that
    is not in ``metadata`` become the empty string unless ``keep_unknown`` is set.
    """

    def substitute(match: re.Match[str]) -> str:
        key = match.group(1).split(".", 1)[0]
        if key in metadata:
            return str(metadata[key])
        if keep_unknown:
            return match.group(0)
        return ""

    return PLACEHOLDER_PATTERN.sub(substitute, value)


def render_paths(files: FileSet, metadata: Mapping[str, str]) -> FileSet:
    # Two keys rendering to the same path: the one processed last wins.
    for key in list(files):
        new_key = replace_placeholders(key, metadata)
        if new_key != key:
            files[new_key] = files[key]
            del files[key]
    return files
