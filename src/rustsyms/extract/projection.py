"""Flat, per-module view of an extracted file.

The nested tree in ``FileInfo`` is the canonical result. Some consumers want
one record per module instead; ``flatten_modules`` derives that from the
tree without re-parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rustsyms.extract.models import (
    FileInfo,
    ItemInfo,
    ModuleDetails,
    ModuleReference,
    Span,
    dump_json,
)

MODULE_PATH_SEPARATOR = "::"


@dataclass(slots=True)
class ModuleSummary:
    """One module scope: its non-module items and its own module references.

    The crate root has an empty ``path`` and ``name`` and no span.
    """

    path: str
    name: str
    items: list[ItemInfo] = field(default_factory=list)
    module_references: list[ModuleReference] = field(default_factory=list)
    span: Span | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "items": [i.to_dict() for i in self.items],
            "moduleReferences": [r.to_dict() for r in self.module_references],
            "span": self.span.to_dict() if self.span is not None else None,
        }


def _is_module(item: ItemInfo) -> bool:
    return isinstance(item.details, ModuleDetails)


def flatten_modules(file_info: FileInfo) -> list[ModuleSummary]:
    """Crate root first, then every inline module in pre-order."""
    summaries = [
        ModuleSummary(
            path="",
            name="",
            items=[i for i in file_info.items if not _is_module(i)],
            module_references=list(file_info.module_references),
        )
    ]

    # (path segments, item) pairs; reversed so pops come out in source order
    stack: list[tuple[list[str], ItemInfo]] = [
        ([item.name], item) for item in reversed(file_info.items) if _is_module(item)
    ]
    while stack:
        segments, module = stack.pop()
        details = module.details
        assert isinstance(details, ModuleDetails)

        summaries.append(
            ModuleSummary(
                path=MODULE_PATH_SEPARATOR.join(segments),
                name=module.name,
                items=[i for i in details.items if not _is_module(i)],
                module_references=list(details.module_references),
                span=module.span,
            )
        )
        stack.extend(
            ([*segments, child.name], child)
            for child in reversed(details.items)
            if _is_module(child)
        )

    return summaries


def modules_to_json(summaries: list[ModuleSummary], indent: int | None = None) -> str:
    """Serialize a flattened module list.

    Raises:
        ExtractionError: If any record cannot be encoded.
    """
    return dump_json([s.to_dict() for s in summaries], indent=indent)
