"""Tree-sitter parsing of Rust source.

This is the only place that talks to tree-sitter directly. It provides:
- Grammar loading (once per process)
- ``parse(text, edition) -> ParseResult`` with the tree and its diagnostics
- Diagnostic collection from ``ERROR`` and ``MISSING`` nodes, with spans

The tree-sitter grammar is edition-agnostic; ``edition`` is carried on the
result so callers can report what was requested.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any

import tree_sitter
import tree_sitter_rust

from rustsyms.core.errors import ExtractionError
from rustsyms.extract.models import Diagnostic, Span

DEFAULT_EDITION = "2024"

_SNIPPET_MAX = 40


@functools.cache
def rust_language() -> tree_sitter.Language:
    """Load the Rust grammar. Cached for the life of the process."""
    try:
        return tree_sitter.Language(tree_sitter_rust.language())
    except (ValueError, TypeError) as err:
        raise ExtractionError.grammar_unavailable(str(err)) from err


@dataclass
class ParseResult:
    """Result of parsing one text snapshot."""

    tree: Any  # tree_sitter.Tree
    root_node: Any  # tree_sitter.Node
    source: bytes
    edition: str
    diagnostics: list[Diagnostic] = field(default_factory=list)


def node_text(node: Any, source: bytes) -> str:
    """Decode a node's text from the source snapshot."""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _snippet(node: Any, source: bytes) -> str:
    text = node_text(node, source).strip()
    first_line = text.splitlines()[0] if text else ""
    if len(first_line) > _SNIPPET_MAX:
        return first_line[: _SNIPPET_MAX - 3] + "..."
    return first_line


def collect_diagnostics(root: Any, source: bytes) -> list[Diagnostic]:
    """Walk the tree for error-recovery nodes.

    An ``ERROR`` node yields one diagnostic for its whole region; nodes inside
    it are not reported again. ``MISSING`` nodes (zero-width tokens the parser
    inserted) yield one diagnostic each.
    """
    diagnostics: list[Diagnostic] = []

    # Depth-first, in source order. Explicit stack: deeply nested input must
    # not hit the interpreter recursion limit.
    stack = [root]
    while stack:
        node = stack.pop()

        if node.is_missing:
            diagnostics.append(
                Diagnostic(message=f"Missing `{node.type}`", span=Span.from_node(node))
            )
            continue

        if node.type == "ERROR":
            snippet = _snippet(node, source)
            message = f"Syntax error near `{snippet}`" if snippet else "Syntax error"
            diagnostics.append(Diagnostic(message=message, span=Span.from_node(node)))
            continue

        if node.has_error:
            stack.extend(reversed(node.children))

    return diagnostics


@dataclass
class RustSyntaxParser:
    """
    Tree-sitter parser for Rust source.

    One instance per thread: ``tree_sitter.Parser`` keeps internal state
    between calls.

    Usage::

        parser = RustSyntaxParser()
        result = parser.parse("pub fn f() {}")
        result.root_node.type  # "source_file"
    """

    _parser: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser(rust_language())

    def parse(self, text: str, edition: str = DEFAULT_EDITION) -> ParseResult:
        """Parse one text snapshot.

        Never raises for malformed input: problems come back as diagnostics
        alongside the best-effort tree.
        """
        source = text.encode("utf-8")
        tree = self._parser.parse(source)
        diagnostics = collect_diagnostics(tree.root_node, source)

        return ParseResult(
            tree=tree,
            root_node=tree.root_node,
            source=source,
            edition=edition,
            diagnostics=diagnostics,
        )
