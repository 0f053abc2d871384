"""Tree-sitter parsing for Rust source."""

from rustsyms.extract._internal.parsing.treesitter import (
    DEFAULT_EDITION,
    ParseResult,
    RustSyntaxParser,
    collect_diagnostics,
    node_text,
    rust_language,
)

__all__ = [
    "DEFAULT_EDITION",
    "ParseResult",
    "RustSyntaxParser",
    "collect_diagnostics",
    "node_text",
    "rust_language",
]
