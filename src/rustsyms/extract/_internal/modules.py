"""Scope assembly: the nested module tree and file-backed module references.

One scope is an ordered run of sibling nodes, either the file root or the
``declaration_list`` of an inline ``mod name { ... }``. ``assemble_scope``
turns a scope into items and module references, recursing into inline
modules so the result mirrors the source nesting.

``ERROR`` nodes are transparent here: the declarations error recovery kept
inside them are treated as siblings in the enclosing scope.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from rustsyms.extract._internal.classify import classify_item, field_text
from rustsyms.extract._internal.docs import resolve_doc_comment
from rustsyms.extract._internal.impls import ImplIndex
from rustsyms.extract._internal.parsing import node_text
from rustsyms.extract._internal.visibility import is_included, visibility_of
from rustsyms.extract.models import (
    AdtDetails,
    ItemInfo,
    ModuleDetails,
    ModuleReference,
    Span,
)


@dataclass(frozen=True)
class AssemblyContext:
    """Per-file state shared by every scope of one extraction."""

    source: bytes
    include_private: bool
    impls: ImplIndex


def expected_module_paths(module_path: list[str], name: str) -> list[str]:
    """Candidate files for ``mod name;`` declared inside ``module_path``.

    >>> expected_module_paths(["a", "b"], "c")
    ['a/b/c.rs', 'a/b/c/mod.rs']
    """
    prefix = "".join(f"{segment}/" for segment in module_path)
    return [f"{prefix}{name}.rs", f"{prefix}{name}/mod.rs"]


def _scope_nodes(children: Iterable[Any]) -> Iterator[Any]:
    """Yield scope members in order, splicing in the children of ERROR nodes."""
    pending = list(reversed(list(children)))
    while pending:
        node = pending.pop()
        if node.type == "ERROR":
            pending.extend(reversed(node.named_children))
            continue
        yield node


def assemble_scope(
    children: Iterable[Any], ctx: AssemblyContext, module_path: list[str]
) -> tuple[list[ItemInfo], list[ModuleReference]]:
    """Build the items and module references of one scope, in declaration order."""
    items: list[ItemInfo] = []
    references: list[ModuleReference] = []

    for node in _scope_nodes(children):
        if node.type == "mod_item":
            _assemble_mod(node, ctx, module_path, items, references)
            continue

        if node.type == "impl_item" and ctx.impls.is_attached(node):
            continue

        if not is_included(visibility_of(node), ctx.include_private):
            continue

        item = classify_item(node, ctx.source)
        if item is None:
            continue
        if isinstance(item.details, AdtDetails):
            item.details.methods = ctx.impls.methods_for(item.name)
        items.append(item)

    return items, references


def _assemble_mod(
    node: Any,
    ctx: AssemblyContext,
    module_path: list[str],
    items: list[ItemInfo],
    references: list[ModuleReference],
) -> None:
    name = field_text(node, "name", ctx.source)
    if name is None:
        return

    visibility = visibility_of(node)
    if not is_included(visibility, ctx.include_private):
        return

    body = node.child_by_field_name("body")
    if body is None:
        references.append(
            ModuleReference(
                name=name,
                visibility=visibility,
                expected_paths=expected_module_paths(module_path, name),
                span=Span.from_node(node),
            )
        )
        return

    inner_items, inner_references = assemble_scope(
        body.named_children, ctx, [*module_path, name]
    )
    items.append(
        ItemInfo(
            name=name,
            raw_text=node_text(node, ctx.source),
            doc_comment=resolve_doc_comment(node, ctx.source),
            visibility=visibility,
            span=Span.from_node(node),
            details=ModuleDetails(items=inner_items, module_references=inner_references),
        )
    )
