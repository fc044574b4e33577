"""Generated module rendering."""

from .emitter import (
    HEADER_SHORT_INFO,
    BindingDeclaration,
    CodeEmitter,
    descriptor_declaration,
    import_declaration,
    render_literal,
    runtime_reference,
)

__all__ = [
    "BindingDeclaration",
    "CodeEmitter",
    "HEADER_SHORT_INFO",
    "descriptor_declaration",
    "import_declaration",
    "render_literal",
    "runtime_reference",
]
