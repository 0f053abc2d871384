"""Visibility classification and the inclusion policy."""

from __future__ import annotations

from typing import Any

from rustsyms.extract.models import PRIVATE, Visibility, VisibilityKind


def classify_visibility(modifier_text: str | None) -> Visibility:
    """Map a rendered visibility modifier to its tag.

    Checks run in order on the text with whitespace removed, so
    ``pub( crate )`` and ``pub(crate)`` agree. ``pub(self)`` has no dedicated
    tag and falls through to ``pub``.
    """
    if not modifier_text:
        return PRIVATE

    compact = "".join(modifier_text.split())
    if "pub(crate)" in compact:
        return Visibility(VisibilityKind.PUBLIC_CRATE)
    if "pub(super)" in compact:
        return Visibility(VisibilityKind.PUBLIC_SUPER)
    if "pub(in" in compact:
        rest = compact[compact.index("pub(in") + len("pub(in") :]
        path = rest.split(")", 1)[0]
        return Visibility(VisibilityKind.PUBLIC_IN, path=path)
    if "pub" in compact:
        return Visibility(VisibilityKind.PUBLIC)
    return PRIVATE


def visibility_of(node: Any) -> Visibility:
    """Visibility of a declaration node, read from its ``visibility_modifier`` child."""
    for child in node.children:
        if child.type == "visibility_modifier":
            text = child.text.decode("utf-8", errors="replace") if child.text else None
            return classify_visibility(text)
    return PRIVATE


def is_included(visibility: Visibility, include_private: bool) -> bool:
    return include_private or not visibility.is_private
