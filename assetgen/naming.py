"""File name normalization and identifier synthesis."""

from __future__ import annotations

import re
from typing import Iterable, Set

from .models import NamingConvention

_CAMEL_SEPARATORS = re.compile(r"[_\s\-.]+(.)?")
_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_NON_IDENTIFIER = re.compile(r"[^a-zA-Z0-9_]")
_IDENTIFIER_START = re.compile(r"^[a-zA-Z_]")

DEFAULT_IDENTIFIER = "img"

# Words a generated module cannot use as a binding name.
RESERVED_WORDS = frozenset(
    {
        "arguments",
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "eval",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
    }
)


def to_camel(value: str) -> str:
    """Return an identifier-safe camelCase token for ``value``."""
    camel = _CAMEL_SEPARATORS.sub(lambda match: (match.group(1) or "").upper(), value)
    if camel[:1].isupper():
        camel = camel[0].lower() + camel[1:]
    return _NON_ALNUM.sub("", camel)


def to_kebab_case(value: str) -> str:
    return _to_separated(value, "-")


def to_snake_case(value: str) -> str:
    return _to_separated(value, "_")


def _to_separated(value: str, separator: str) -> str:
    text = _CASE_BOUNDARY.sub(rf"\1{separator}\2", value)
    text = re.sub(r"[\s_.\-]+", separator, text).lower()
    text = re.sub(rf"[^a-z0-9{separator}]", "", text)
    text = re.sub(rf"{separator}+", separator, text)
    return text.strip(separator)


def split_extension(file_name: str) -> tuple[str, str]:
    """Split ``file_name`` into its base name and extension (dot included).

    Only the final ``.`` counts, and a name that is all extension yields an
    empty base, so that normalized output always splits back into the same
    two parts.
    """
    stem, dot, extension = file_name.rpartition(".")
    if not dot:
        return file_name, ""
    return stem, f".{extension}"


def normalize_file_name(file_name: str, convention: NamingConvention) -> str:
    """Apply ``convention`` to the base name, keeping the extension verbatim."""
    if convention is NamingConvention.UNCHANGED:
        return file_name
    base, extension = split_extension(file_name)
    if convention is NamingConvention.KEBAB_CASE:
        return to_kebab_case(base) + extension
    return to_snake_case(base) + extension


def to_valid_identifier(value: str) -> str:
    cleaned = _NON_IDENTIFIER.sub("_", value)
    if not cleaned:
        return ""
    if not _IDENTIFIER_START.match(cleaned) or cleaned in RESERVED_WORDS:
        return f"_{cleaned}"
    return cleaned


def binding_base(segments: Iterable[str]) -> str:
    """Join camelCased path segments into a candidate binding name."""
    parts = [to_camel(segment) for segment in segments]
    return to_valid_identifier("_".join(part for part in parts if part))


class IdentifierAllocator:
    """Hands out unique binding identifiers for a single generation run."""

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._used: Set[str] = set(reserved)

    def allocate(self, candidate: str) -> str:
        """Return ``candidate`` or the first free ``candidateN`` (N >= 2)."""
        base = to_valid_identifier(candidate) or DEFAULT_IDENTIFIER
        name = base
        counter = 2
        while name in self._used:
            name = f"{base}{counter}"
            counter += 1
        self._used.add(name)
        return name

    def __contains__(self, name: object) -> bool:
        return name in self._used

    @property
    def used(self) -> frozenset[str]:
        return frozenset(self._used)


__all__ = [
    "DEFAULT_IDENTIFIER",
    "IdentifierAllocator",
    "binding_base",
    "normalize_file_name",
    "split_extension",
    "to_camel",
    "to_kebab_case",
    "to_snake_case",
    "to_valid_identifier",
]
