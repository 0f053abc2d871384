"""Tests for scope assembly."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from rustsyms.extract._internal.impls import ImplIndex
from rustsyms.extract._internal.modules import (
    AssemblyContext,
    assemble_scope,
    expected_module_paths,
)
from rustsyms.extract.models import AdtDetails, ItemInfo, ModuleDetails, ModuleReference, OtherDetails


def _assemble(
    parse_rust: Callable[[str], Any], text: str, include_private: bool = False
) -> tuple[list[ItemInfo], list[ModuleReference]]:
    result = parse_rust(text)
    ctx = AssemblyContext(
        source=result.source,
        include_private=include_private,
        impls=ImplIndex.build(result.root_node, result.source, include_private),
    )
    return assemble_scope(result.root_node.named_children, ctx, [])


class TestExpectedModulePaths:
    """Candidate file paths for module references."""

    @pytest.mark.parametrize(
        ("module_path", "name", "expected"),
        [
            ([], "foo", ["foo.rs", "foo/mod.rs"]),
            (["a"], "b", ["a/b.rs", "a/b/mod.rs"]),
            (["a", "b"], "c", ["a/b/c.rs", "a/b/c/mod.rs"]),
        ],
    )
    def test_given_nesting_when_computed_then_prefixed(
        self, module_path: list[str], name: str, expected: list[str]
    ) -> None:
        """The accumulated nesting path prefixes both candidates."""
        assert expected_module_paths(module_path, name) == expected


class TestAssembleScope:
    """Walking one scope."""

    def test_given_module_reference_when_assembled_then_reference_not_item(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """A body-less mod is recorded only as a reference."""
        # When
        items, refs = _assemble(parse_rust, "pub mod net;\n")

        # Then
        assert items == []
        assert [(r.name, r.expected_paths) for r in refs] == [("net", ["net.rs", "net/mod.rs"])]
        assert refs[0].visibility.render() == "pub"

    def test_given_nested_inline_modules_when_assembled_then_tree_mirrors_source(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """Inline modules nest; references inside them get prefixed paths."""
        # Given
        text = "pub mod a {\n    pub mod b {\n        pub mod c;\n        pub fn f() {}\n    }\n}\n"

        # When
        items, refs = _assemble(parse_rust, text)

        # Then
        assert refs == []
        (a,) = items
        assert isinstance(a.details, ModuleDetails)
        (b,) = a.details.items
        assert isinstance(b.details, ModuleDetails)
        assert [i.name for i in b.details.items] == ["f"]
        (c_ref,) = b.details.module_references
        assert c_ref.expected_paths == ["a/b/c.rs", "a/b/c/mod.rs"]

    def test_given_private_module_when_public_only_then_omitted_entirely(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """Excluded modules contribute neither item nor reference, nor their contents."""
        text = "mod hidden {\n    pub fn f() {}\n}\nmod also_hidden;\n"
        assert _assemble(parse_rust, text) == ([], [])

    def test_given_private_items_when_public_only_then_filtered(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """Only items passing the inclusion policy are kept, in order."""
        text = "pub fn a() {}\nfn b() {}\npub(crate) fn c() {}\n"
        items, _ = _assemble(parse_rust, text)
        assert [i.name for i in items] == ["a", "c"]

    def test_given_adt_with_impl_when_assembled_then_impl_consumed(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """Attached impl blocks feed methods and are not emitted themselves."""
        # Given
        text = "pub struct S;\nimpl S { pub fn m(&self) {} }\n"

        # When
        items, _ = _assemble(parse_rust, text, include_private=True)

        # Then
        (s,) = items
        assert isinstance(s.details, AdtDetails)
        assert [m.name for m in s.details.methods] == ["m"]

    def test_given_unattached_impl_when_private_included_then_other_item(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """Impl blocks for foreign types surface as 'other' items, which are private."""
        # Given
        text = "impl Display for Remote {}\n"

        # When
        private_items, _ = _assemble(parse_rust, text, include_private=True)
        public_items, _ = _assemble(parse_rust, text)

        # Then
        (impl_item,) = private_items
        assert impl_item.name == "Display for Remote"
        assert impl_item.details == OtherDetails(item_kind="impl")
        assert public_items == []

    def test_given_recovered_region_when_assembled_then_valid_items_kept(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """Declarations around syntax errors survive."""
        items, _ = _assemble(parse_rust, "pub fn good() {}\n}\n")
        assert "good" in [i.name for i in items]
