"""Renders manifest trees and binding declarations into source text."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..manifest import ManifestTree
from ..models import HeaderMode, OutputLanguage, PlatformMode, StaticDescriptor

HEADER_SHORT_INFO = "/* AUTO-GENERATED FILE. DO NOT EDIT.\n * Run: assetgen gen\n */"
STATIC_IMAGE_TYPE = "StaticImageData"
STATIC_IMAGE_TYPE_IMPORT = f'import type {{ {STATIC_IMAGE_TYPE} }} from "next/image";'

_BARE_KEY = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
_INDENT = "  "


@dataclass(frozen=True)
class BindingDeclaration:
    """A top-level statement binding one asset to an identifier."""

    identifier: str
    code: str
    descriptor: bool = False


def import_declaration(identifier: str, relative_path: str) -> BindingDeclaration:
    return BindingDeclaration(
        identifier=identifier,
        code=f"import {identifier} from {json.dumps('./' + relative_path)};",
    )


def descriptor_declaration(
    identifier: str,
    descriptor: StaticDescriptor,
    language: OutputLanguage = OutputLanguage.TYPESCRIPT,
) -> BindingDeclaration:
    annotation = f": {STATIC_IMAGE_TYPE}" if language is OutputLanguage.TYPESCRIPT else ""
    record = (
        f"{{ src: {json.dumps(descriptor.src)}, "
        f"width: {descriptor.width}, height: {descriptor.height} }}"
    )
    return BindingDeclaration(
        identifier=identifier,
        code=f"const {identifier}{annotation} = {record};",
        descriptor=True,
    )


def runtime_reference(relative_path: str) -> str:
    """Return an inline bundler resolution expression for ``relative_path``."""
    return f"require({json.dumps('./' + relative_path)})"


def render_literal(tree: ManifestTree, indent: int = 0) -> str:
    """Render ``tree`` as an object literal; leaves are emitted as raw code."""
    if not tree:
        return "{}"
    pad = _INDENT * indent
    entries = []
    for key, value in tree.items():
        rendered_key = key if _BARE_KEY.match(key) else json.dumps(key)
        rendered_value = render_literal(value, indent + 1) if isinstance(value, dict) else value
        entries.append(f"{_INDENT * (indent + 1)}{rendered_key}: {rendered_value}")
    return "{\n" + ",\n".join(entries) + f"\n{pad}}}"


class CodeEmitter:
    """Produces the generated asset module from a Jinja2 template."""

    TEMPLATE_NAME = "module.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def emit(
        self,
        tree: ManifestTree,
        declarations: Iterable[BindingDeclaration],
        mode: PlatformMode,
        *,
        language: OutputLanguage = OutputLanguage.TYPESCRIPT,
        header: HeaderMode = HeaderMode.SHORT_INFO,
        export_name: str = "ImageAssets",
    ) -> str:
        ordered = self._order_declarations(declarations)
        typescript = language is OutputLanguage.TYPESCRIPT
        type_imports: List[str] = []
        if typescript and any(declaration.descriptor for declaration in ordered):
            type_imports.append(STATIC_IMAGE_TYPE_IMPORT)

        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(
            header=HEADER_SHORT_INFO if header is HeaderMode.SHORT_INFO else "",
            type_imports=type_imports,
            declarations=ordered,
            export_name=export_name,
            tree=render_literal(tree),
            as_const=typescript and mode is not PlatformMode.RUNTIME_RESOLVED,
        )

    @staticmethod
    def _order_declarations(
        declarations: Iterable[BindingDeclaration],
    ) -> Sequence[BindingDeclaration]:
        unique = {(item.identifier, item.code): item for item in declarations}
        return [unique[key] for key in sorted(unique)]


__all__ = [
    "BindingDeclaration",
    "CodeEmitter",
    "HEADER_SHORT_INFO",
    "STATIC_IMAGE_TYPE",
    "descriptor_declaration",
    "import_declaration",
    "render_literal",
    "runtime_reference",
]
