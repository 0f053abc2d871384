"""Association of impl blocks with the data types they extend.

Matching is textual: an impl block belongs to every struct, enum or union
whose name occurs as a substring of the block's implementing type text. That
keeps ``impl<T> Wrapper<T>`` and ``impl fmt::Display for crate::a::Wrapper``
attached to ``Wrapper`` without any name resolution, at the cost of false
positives (``impl Sample`` also attaches to a type named ``Sam``).

The index is built in one pass over the whole file, independent of module
scope: a block inside ``mod a { ... }`` can attach to a type declared at the
crate root and vice versa.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rustsyms.extract._internal.classify import ADT_NODE_TYPES, classify_item, field_text
from rustsyms.extract._internal.visibility import is_included, visibility_of
from rustsyms.extract.models import ItemInfo


@dataclass
class ImplBlock:
    """One impl block with its already filtered and classified methods."""

    node: Any
    type_text: str
    methods: list[ItemInfo] = field(default_factory=list)

    @property
    def key(self) -> tuple[int, int]:
        return (self.node.start_byte, self.node.end_byte)


@dataclass
class ImplIndex:
    """File-wide view of impl blocks, in file order."""

    blocks: list[ImplBlock] = field(default_factory=list)
    adt_names: list[str] = field(default_factory=list)
    _attached: set[tuple[int, int]] = field(default_factory=set, repr=False)

    @classmethod
    def build(cls, root: Any, source: bytes, include_private: bool) -> ImplIndex:
        """Collect every impl block and every data type name in the file."""
        index = cls()

        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "impl_item":
                block = _collect_block(node, source, include_private)
                if block is not None:
                    index.blocks.append(block)
            elif node.type in ADT_NODE_TYPES:
                name = field_text(node, "name", source)
                if name is not None:
                    index.adt_names.append(name)
            stack.extend(reversed(node.named_children))

        for block in index.blocks:
            if any(name in block.type_text for name in index.adt_names):
                index._attached.add(block.key)
        return index

    def methods_for(self, adt_name: str) -> list[ItemInfo]:
        """Methods of every block whose implementing type mentions ``adt_name``."""
        methods: list[ItemInfo] = []
        for block in self.blocks:
            if adt_name in block.type_text:
                methods.extend(block.methods)
        return methods

    def is_attached(self, impl_node: Any) -> bool:
        """True if the block's methods were handed to some data type in the file."""
        return (impl_node.start_byte, impl_node.end_byte) in self._attached


def _collect_block(node: Any, source: bytes, include_private: bool) -> ImplBlock | None:
    type_text = field_text(node, "type", source)
    if type_text is None:
        return None

    block = ImplBlock(node=node, type_text=type_text)
    body = node.child_by_field_name("body")
    if body is None:
        return block

    for child in body.named_children:
        if child.type != "function_item":
            continue
        if not is_included(visibility_of(child), include_private):
            continue
        method = classify_item(child, source)
        if method is not None:
            block.methods.append(method)
    return block
