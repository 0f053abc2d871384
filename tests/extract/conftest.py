"""Shared fixtures for extraction tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from rustsyms.extract._internal.parsing import ParseResult, RustSyntaxParser


@pytest.fixture
def parse_rust() -> Callable[[str], ParseResult]:
    """Parse a Rust snippet with a fresh parser."""
    parser = RustSyntaxParser()

    def _parse(text: str) -> ParseResult:
        return parser.parse(text)

    return _parse


@pytest.fixture
def first_node(parse_rust: Callable[[str], ParseResult]) -> Callable[[str, str], tuple[Any, bytes]]:
    """Parse a snippet and return the first top-level node of a type, plus the source."""

    def _first(text: str, node_type: str) -> tuple[Any, bytes]:
        result = parse_rust(text)
        for child in result.root_node.named_children:
            if child.type == node_type:
                return child, result.source
        raise AssertionError(f"no top-level {node_type} in {text!r}")

    return _first
