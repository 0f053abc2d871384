"""Tests for doc comment resolution."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from rustsyms.extract._internal.docs import (
    doc_attribute_value,
    doc_from_preceding_lines,
    resolve_doc_comment,
)

FirstNode = Callable[[str, str], tuple[Any, bytes]]


class TestResolveDocComment:
    """Doc comments from preceding tree siblings."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("/// One line\npub fn f() {}", "One line"),
            ("/// First\n/// Second\npub fn f() {}", "First\nSecond"),
            ("///   padded   \npub fn f() {}", "padded"),
            ("/// Doc\n\n\npub fn f() {}", "Doc"),
            ("/// Doc\n#[inline]\npub fn f() {}", "Doc"),
            ('#[doc = "From attribute"]\npub fn f() {}', "From attribute"),
            ('/// Line\n#[doc = "Attr"]\npub fn f() {}', "Line\nAttr"),
            ("pub fn f() {}", None),
            ("// plain comment\npub fn f() {}", None),
            ("//// four slashes\npub fn f() {}", None),
            ("/* block */\npub fn f() {}", None),
        ],
    )
    def test_given_preceding_trivia_when_resolved_then_docs_collected(
        self, first_node: FirstNode, text: str, expected: str | None
    ) -> None:
        """Only a contiguous run of outer docs and attributes counts."""
        # Given
        node, source = first_node(text, "function_item")

        # When
        doc = resolve_doc_comment(node, source)

        # Then
        assert doc == expected

    def test_given_plain_comment_between_when_resolved_then_run_stops(
        self, first_node: FirstNode
    ) -> None:
        """A plain comment ends the run; docs above it are not attached."""
        # Given
        node, source = first_node("/// Orphaned\n// note\npub fn f() {}", "function_item")

        # When / Then
        assert resolve_doc_comment(node, source) is None

    def test_given_docs_on_previous_item_when_resolved_then_not_borrowed(
        self, parse_rust: Callable[[str], Any]
    ) -> None:
        """Code between two items stops the walk."""
        # Given
        result = parse_rust("/// For a\npub fn a() {}\npub fn b() {}\n")
        a, b = result.root_node.named_children[-2:]

        # When / Then
        assert resolve_doc_comment(a, result.source) == "For a"
        assert resolve_doc_comment(b, result.source) is None


class TestDocAttributeValue:
    """#[doc = ...] attribute parsing."""

    def test_given_derive_attribute_when_read_then_none(self, first_node: FirstNode) -> None:
        """Non-doc attributes contribute nothing."""
        node, _ = first_node("#[derive(Debug)]\npub struct S;", "attribute_item")
        assert doc_attribute_value(node) is None

    def test_given_raw_string_doc_when_read_then_unquoted(self, first_node: FirstNode) -> None:
        """Raw string literals are unquoted too."""
        node, _ = first_node('#[doc = r#"Raw "quoted" doc"#]\npub struct S;', "attribute_item")
        assert doc_attribute_value(node) == 'Raw "quoted" doc'


class TestDocFromPrecedingLines:
    """Line-scanning fallback."""

    def test_given_doc_lines_with_blanks_when_scanned_then_collected(self) -> None:
        """Blank lines are skipped, doc lines kept in source order."""
        # Given
        source = b"/// a\n\n/// b\nfn x() {}"

        # When
        doc = doc_from_preceding_lines(source, source.index(b"fn"))

        # Then
        assert doc == "a\nb"

    def test_given_code_line_when_scanned_then_stops(self) -> None:
        """The first non-doc line ends the scan."""
        source = b"/// stale\nlet y = 1;\n/// fresh\nfn x() {}"
        assert doc_from_preceding_lines(source, source.index(b"fn")) == "fresh"

    def test_given_no_docs_when_scanned_then_none(self) -> None:
        """Nothing collected means no doc comment."""
        source = b"fn x() {}"
        assert doc_from_preceding_lines(source, 0) is None
