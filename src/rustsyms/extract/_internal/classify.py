"""Declaration classification.

``classify_item`` is the single dispatch from a tree-sitter node type to an
``ItemInfo`` with the matching details variant. Adding a declaration kind
means adding a classifier to ``_CLASSIFIERS`` and, if it needs its own
shape, a details dataclass in ``rustsyms.extract.models``.

Module declarations are not handled here: whether a ``mod`` is an inline
module or a reference to another file depends on the enclosing scope, which
only the module assembler knows.

A node whose name is missing (partial input) classifies to ``None`` and is
dropped without a diagnostic; the parser already reports the syntax error.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from rustsyms.extract._internal.docs import resolve_doc_comment
from rustsyms.extract._internal.parsing import node_text
from rustsyms.extract._internal.visibility import visibility_of
from rustsyms.extract.models import (
    AdtDetails,
    AdtKind,
    FunctionDetails,
    ItemDetails,
    ItemInfo,
    OtherDetails,
    Span,
    TraitDetails,
    TraitMethodInfo,
)

_ADT_KINDS: dict[str, AdtKind] = {
    "struct_item": "struct",
    "enum_item": "enum",
    "union_item": "union",
}

# Residual declarations named by an identifier field: node type -> item kind
_NAMED_OTHER_KINDS: dict[str, str] = {
    "const_item": "const",
    "static_item": "static",
    "type_item": "type_alias",
    "macro_definition": "macro",
    "extern_crate_declaration": "extern_crate",
}

_FUNCTION_TYPES = frozenset({"function_item", "function_signature_item"})


def field_text(node: Any, field_name: str, source: bytes) -> str | None:
    """Text of a field child; None when absent, parser-inserted or empty."""
    child = node.child_by_field_name(field_name)
    if child is None or child.is_missing:
        return None
    text = node_text(child, source).strip()
    return text or None


def function_signature(node: Any, source: bytes) -> str:
    """Declaration text up to where the body block starts, right-trimmed.

    Declarations without a body (trait or extern signatures) keep their full
    text.
    """
    body = node.child_by_field_name("body")
    if body is None:
        return node_text(node, source)
    return source[node.start_byte : body.start_byte].decode("utf-8", errors="replace").rstrip()


def _build(node: Any, source: bytes, name: str, details: ItemDetails) -> ItemInfo:
    return ItemInfo(
        name=name,
        raw_text=node_text(node, source),
        doc_comment=resolve_doc_comment(node, source),
        visibility=visibility_of(node),
        span=Span.from_node(node),
        details=details,
    )


def _classify_function(node: Any, source: bytes) -> ItemInfo | None:
    name = field_text(node, "name", source)
    if name is None:
        return None
    return _build(node, source, name, FunctionDetails(signature=function_signature(node, source)))


def _classify_adt(node: Any, source: bytes) -> ItemInfo | None:
    name = field_text(node, "name", source)
    if name is None:
        return None
    return _build(node, source, name, AdtDetails(kind=_ADT_KINDS[node.type]))


def trait_methods(node: Any, source: bytes) -> list[TraitMethodInfo]:
    """Methods declared in a trait body, in declaration order."""
    body = node.child_by_field_name("body")
    if body is None:
        return []

    methods: list[TraitMethodInfo] = []
    for child in body.named_children:
        if child.type not in _FUNCTION_TYPES:
            continue
        name = field_text(child, "name", source)
        if name is None:
            continue
        methods.append(
            TraitMethodInfo(
                name=name,
                signature=function_signature(child, source),
                doc_comment=resolve_doc_comment(child, source),
                span=Span.from_node(child),
            )
        )
    return methods


def _classify_trait(node: Any, source: bytes) -> ItemInfo | None:
    name = field_text(node, "name", source)
    if name is None:
        return None
    return _build(node, source, name, TraitDetails(methods=trait_methods(node, source)))


def impl_display_name(node: Any, source: bytes) -> str | None:
    """``"<Trait> for <Type>"`` for trait impls, ``"<Type>"`` for inherent impls."""
    impl_type = field_text(node, "type", source)
    if impl_type is None:
        return None
    trait = field_text(node, "trait", source)
    return f"{trait} for {impl_type}" if trait else impl_type


def _classify_impl(node: Any, source: bytes) -> ItemInfo | None:
    name = impl_display_name(node, source)
    if name is None:
        return None
    return _build(node, source, name, OtherDetails(item_kind="impl"))


def _classify_use(node: Any, source: bytes) -> ItemInfo | None:
    path = field_text(node, "argument", source)
    if path is None:
        return None
    return _build(node, source, path, OtherDetails(item_kind="use"))


def _classify_named_other(node: Any, source: bytes) -> ItemInfo | None:
    name = field_text(node, "name", source)
    if name is None:
        return None
    return _build(node, source, name, OtherDetails(item_kind=_NAMED_OTHER_KINDS[node.type]))


_CLASSIFIERS: dict[str, Callable[[Any, bytes], ItemInfo | None]] = {
    "function_item": _classify_function,
    "function_signature_item": _classify_function,
    "struct_item": _classify_adt,
    "enum_item": _classify_adt,
    "union_item": _classify_adt,
    "trait_item": _classify_trait,
    "impl_item": _classify_impl,
    "use_declaration": _classify_use,
    **{node_type: _classify_named_other for node_type in _NAMED_OTHER_KINDS},
}

ADT_NODE_TYPES = frozenset(_ADT_KINDS)


def classify_item(node: Any, source: bytes) -> ItemInfo | None:
    """Classify one declaration node. Unknown node types yield None."""
    classifier = _CLASSIFIERS.get(node.type)
    if classifier is None:
        return None
    return classifier(node, source)
