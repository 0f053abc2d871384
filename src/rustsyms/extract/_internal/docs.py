"""Doc comment resolution.

Documentation for a declaration comes from the contiguous run of trivia
directly above it:

    /// First line          <- collected
    ///                     <- collected (empty line of docs)
    #[doc = "More"]         <- collected
    #[derive(Debug)]        <- skipped, attributes don't break the run
    pub struct S;

A plain comment, an inner doc comment (``//!``), a block comment or any code
ends the run. Blank lines are not nodes in the tree and never end it.
"""

from __future__ import annotations

import re
from typing import Any

_QUOTED = re.compile(r'^r?(?P<hashes>#*)"(?P<body>.*)"(?P=hashes)$', re.DOTALL)


def _outer_doc_line(text: str) -> str | None:
    """Content of a ``///`` comment, or None for any other comment."""
    stripped = text.strip()
    if stripped.startswith("///") and not stripped.startswith("////"):
        return stripped[3:].strip()
    return None


def _unquote(literal: str) -> str:
    match = _QUOTED.match(literal.strip())
    if match is None:
        return literal.strip()
    return match.group("body").strip()


def doc_attribute_value(node: Any) -> str | None:
    """Content of a ``#[doc = "..."]`` attribute item, None for other attributes."""
    attribute = next((c for c in node.children if c.type == "attribute"), None)
    if attribute is None or attribute.named_child_count == 0:
        return None

    path = attribute.named_children[0]
    if path.type != "identifier" or path.text != b"doc":
        return None

    value = attribute.child_by_field_name("value")
    if value is None or value.type not in ("string_literal", "raw_string_literal"):
        return None
    return _unquote(value.text.decode("utf-8", errors="replace"))


def doc_from_preceding_lines(source: bytes, offset: int) -> str | None:
    """Line-based fallback: scan raw lines upward from ``offset``.

    Blank lines are skipped, ``///`` lines collected, and the first other
    line stops the scan. The partial line the declaration starts on is
    ignored.
    """
    before = source[:offset].decode("utf-8", errors="replace")
    lines = before.split("\n")[:-1]

    docs: list[str] = []
    for line in reversed(lines):
        if not line.strip():
            continue
        doc = _outer_doc_line(line)
        if doc is None:
            break
        docs.append(doc)

    if not docs:
        return None
    docs.reverse()
    return "\n".join(docs)


def resolve_doc_comment(node: Any, source: bytes) -> str | None:
    """Documentation attached to a declaration node, joined with newlines."""
    parent = node.parent
    if parent is not None and parent.type == "ERROR":
        # Error recovery does not give reliable sibling trivia
        return doc_from_preceding_lines(source, node.start_byte)

    docs: list[str] = []
    sibling = node.prev_sibling
    while sibling is not None:
        if sibling.type == "line_comment":
            doc = _outer_doc_line(sibling.text.decode("utf-8", errors="replace"))
            if doc is None:
                break
            docs.append(doc)
        elif sibling.type == "attribute_item":
            value = doc_attribute_value(sibling)
            if value is not None:
                docs.append(value)
        else:
            break
        sibling = sibling.prev_sibling

    if not docs:
        return None
    docs.reverse()
    return "\n".join(docs)
