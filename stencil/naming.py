"""Case variants of a template name."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass

__all__ = [
    "METADATA_KEYS",
    "TemplateName",
    "camel_case",
    "derive_names",
    "pascal_case",
    "slug_case",
    "snake_case",
]

METADATA_KEYS = ("name", "name_cc", "name_pc", "name_sc", "name_snc")

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[\W_]+")


def _words(value: str) -> list[str]:
    text = _ACRONYM_BOUNDARY.sub(r"\1 \2", value)
    text = _CAMEL_BOUNDARY.sub(r"\1 \2", text)
    text = _SEPARATORS.sub(" ", text)
    return text.lower().split()


def camel_case(value: str) -> str:
    words = _words(value)
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def pascal_case(value: str) -> str:
    return "".join(word.capitalize() for word in _words(value))


def slug_case(value: str) -> str:
    return "-".join(_words(value))


def snake_case(value: str) -> str:
    return "_".join(_words(value))


@dataclass(frozen=True)
class TemplateName:
    """The raw name plus its derived forms.

    Field names double as the placeholder keys available to path and content
    templates, e.g. ``{name_pc}`` or ``{{ name_snc }}``.
    """

    name: str
    name_cc: str
    name_pc: str
    name_sc: str
    name_snc: str

    def metadata(self) -> dict[str, str]:
        return asdict(self)


def derive_names(name: str) -> TemplateName:
    return TemplateName(
        name=name,
        name_cc=camel_case(name),
        name_pc=pascal_case(name),
        name_sc=slug_case(name),
        name_snc=snake_case(name),
    )
