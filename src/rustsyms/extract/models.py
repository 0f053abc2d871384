"""Result types for Rust symbol extraction.

Every type here is a plain dataclass created fresh for one extraction call.
``to_dict()`` produces the JSON shape consumers read (lower-camel-case keys);
optional fields are emitted as ``null`` rather than dropped so the schema is
stable.

Shape of a response::

    {
      "success": bool,
      "parseTimeMs": int,
      "diagnostics": [{"message", "severity", "span"}],
      "fileInfo": {"items": [ItemInfo], "moduleReferences": [ModuleReference]}
    }

Item details are a closed tagged union keyed by ``type``: ``function``,
``algebraicDataType``, ``trait``, ``module`` and ``other``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from rustsyms.core.errors import ExtractionError

AdtKind = Literal["struct", "enum", "union"]


# ============================================================================
# LOCATIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Byte range into the UTF-8 source plus 1-based line/column for display.

    Columns count bytes, matching tree-sitter points.
    """

    start: int
    end: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def from_node(cls, node: Any) -> Span:
        return cls(
            start=node.start_byte,
            end=node.end_byte,
            start_line=node.start_point[0] + 1,
            start_column=node.start_point[1] + 1,
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1] + 1,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "start": self.start,
            "end": self.end,
            "startLine": self.start_line,
            "startColumn": self.start_column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
        }


# ============================================================================
# VISIBILITY
# ============================================================================


class VisibilityKind(str, Enum):
    """Closed set of visibility tags."""

    PRIVATE = "private"
    PUBLIC_CRATE = "pub(crate)"
    PUBLIC_SUPER = "pub(super)"
    PUBLIC_IN = "pub(in)"
    PUBLIC = "pub"


@dataclass(frozen=True, slots=True)
class Visibility:
    """A visibility tag; ``path`` is set only for ``pub(in <path>)``."""

    kind: VisibilityKind = VisibilityKind.PRIVATE
    path: str | None = None

    @property
    def is_private(self) -> bool:
        return self.kind is VisibilityKind.PRIVATE

    def render(self) -> str:
        """Rendered form used in JSON: "private", "pub", "pub(in crate::a)", ..."""
        if self.kind is VisibilityKind.PUBLIC_IN:
            return f"pub(in {self.path})"
        return self.kind.value

    def __str__(self) -> str:
        return self.render()


PRIVATE = Visibility()


# ============================================================================
# ITEM DETAILS
# ============================================================================


@dataclass(slots=True)
class FunctionDetails:
    signature: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "function", "signature": self.signature}


@dataclass(slots=True)
class AdtDetails:
    """Struct, enum or union. ``methods`` is filled from impl blocks."""

    kind: AdtKind
    methods: list[ItemInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "algebraicDataType",
            "kind": self.kind,
            "methods": [m.to_dict() for m in self.methods],
        }


@dataclass(slots=True)
class TraitMethodInfo:
    """A method declared inside a trait body (with or without a default body)."""

    name: str
    signature: str
    doc_comment: str | None
    span: Span

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "signature": self.signature,
            "docComment": self.doc_comment,
            "span": self.span.to_dict(),
        }


@dataclass(slots=True)
class TraitDetails:
    methods: list[TraitMethodInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "trait", "methods": [m.to_dict() for m in self.methods]}


@dataclass(slots=True)
class ModuleDetails:
    """Contents of an inline ``mod name { ... }`` block."""

    items: list[ItemInfo] = field(default_factory=list)
    module_references: list[ModuleReference] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "module",
            "items": [i.to_dict() for i in self.items],
            "moduleReferences": [r.to_dict() for r in self.module_references],
        }


@dataclass(slots=True)
class OtherDetails:
    """Residual declarations: use, const, static, type_alias, impl, macro, extern_crate."""

    item_kind: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "other", "itemKind": self.item_kind}


ItemDetails = FunctionDetails | AdtDetails | TraitDetails | ModuleDetails | OtherDetails


# ============================================================================
# ITEMS AND FILES
# ============================================================================


@dataclass(slots=True)
class ItemInfo:
    """One declaration with its metadata."""

    name: str
    raw_text: str
    doc_comment: str | None
    visibility: Visibility
    span: Span
    details: ItemDetails

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "rawText": self.raw_text,
            "docComment": self.doc_comment,
            "visibility": self.visibility.render(),
            "span": self.span.to_dict(),
            "details": self.details.to_dict(),
        }


@dataclass(slots=True)
class ModuleReference:
    """A ``mod name;`` declaration, expected to live in another file."""

    name: str
    visibility: Visibility
    expected_paths: list[str]
    span: Span

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "visibility": self.visibility.render(),
            "expectedPaths": list(self.expected_paths),
            "span": self.span.to_dict(),
        }


@dataclass(slots=True)
class FileInfo:
    """Top-level result: the crate-root scope of one file."""

    items: list[ItemInfo] = field(default_factory=list)
    module_references: list[ModuleReference] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [i.to_dict() for i in self.items],
            "moduleReferences": [r.to_dict() for r in self.module_references],
        }


# ============================================================================
# DIAGNOSTICS AND RESPONSE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable syntax problem reported by the parser."""

    message: str
    severity: str = "error"
    span: Span | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "severity": self.severity,
            "span": self.span.to_dict() if self.span is not None else None,
        }


@dataclass(slots=True)
class ParseResponse:
    """Result of extracting one file."""

    success: bool
    parse_time_ms: int
    diagnostics: list[Diagnostic]
    file_info: FileInfo

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "parseTimeMs": self.parse_time_ms,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "fileInfo": self.file_info.to_dict(),
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the whole response.

        Raises:
            ExtractionError: If any part cannot be encoded. Nothing partial is
                returned.
        """
        return dump_json(self.to_dict(), indent=indent)


def dump_json(data: Any, indent: int | None = None) -> str:
    """Encode a to_dict() result, raising ExtractionError on any encoder failure."""
    try:
        return json.dumps(data, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise ExtractionError.serialization_failure(str(e)) from e
