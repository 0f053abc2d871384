"""Extraction entry point: one Rust file in, one ParseResponse out."""

from __future__ import annotations

import time

from rustsyms.core.logging import get_logger
from rustsyms.core.telemetry import traced
from rustsyms.extract._internal.impls import ImplIndex
from rustsyms.extract._internal.modules import AssemblyContext, assemble_scope
from rustsyms.extract._internal.parsing import DEFAULT_EDITION, RustSyntaxParser
from rustsyms.extract.models import FileInfo, ParseResponse

log = get_logger("rustsyms.extract")


@traced("rustsyms.extract_file")
def extract_file(
    text: str,
    include_private: bool = False,
    file_path: str | None = None,
    edition: str = DEFAULT_EDITION,
) -> ParseResponse:
    """Extract the symbol model of one Rust source file.

    Malformed input never raises: syntax problems are reported as
    diagnostics, ``success`` is False, and ``file_info`` holds whatever
    declarations error recovery kept.

    Args:
        text: Complete source text of the file.
        include_private: Keep declarations without a ``pub`` modifier.
        file_path: Where the text came from. Used for logging only.
        edition: Requested Rust edition.

    Returns:
        ParseResponse with diagnostics and the crate-root scope.
    """
    started = time.perf_counter()

    parsed = RustSyntaxParser().parse(text, edition=edition)
    root = parsed.root_node

    ctx = AssemblyContext(
        source=parsed.source,
        include_private=include_private,
        impls=ImplIndex.build(root, parsed.source, include_private),
    )
    items, references = assemble_scope(root.named_children, ctx, [])

    parse_time_ms = round((time.perf_counter() - started) * 1000)

    for diagnostic in parsed.diagnostics:
        span = diagnostic.span
        log.warning(
            "rust_syntax_error",
            file_path=file_path,
            message=diagnostic.message,
            line=span.start_line if span is not None else None,
            column=span.start_column if span is not None else None,
        )

    log.debug(
        "rust_file_extracted",
        file_path=file_path,
        edition=parsed.edition,
        include_private=include_private,
        items=len(items),
        module_references=len(references),
        diagnostics=len(parsed.diagnostics),
        parse_time_ms=parse_time_ms,
    )

    return ParseResponse(
        success=not parsed.diagnostics,
        parse_time_ms=parse_time_ms,
        diagnostics=list(parsed.diagnostics),
        file_info=FileInfo(items=items, module_references=references),
    )
