"""Extract module - Rust declaration symbols from one source file.

This module provides:
- Parsing: tree-sitter with diagnostics from error recovery
- Classification: functions, data types, traits, modules, other declarations
- Impl association: methods attached to the struct/enum/union they extend
- Module assembly: nested inline modules and file-backed module references

Public API is in `rustsyms.extract.ops`:
- extract_file: text -> ParseResponse

Internal implementations are in `rustsyms.extract._internal/`.
"""

from rustsyms.extract.models import (
    AdtDetails,
    Diagnostic,
    FileInfo,
    FunctionDetails,
    ItemDetails,
    ItemInfo,
    ModuleDetails,
    ModuleReference,
    OtherDetails,
    ParseResponse,
    Span,
    TraitDetails,
    TraitMethodInfo,
    Visibility,
    VisibilityKind,
)
from rustsyms.extract.ops import extract_file
from rustsyms.extract.projection import ModuleSummary, flatten_modules, modules_to_json

__all__ = [
    # Operations
    "extract_file",
    "flatten_modules",
    "modules_to_json",
    # Models
    "AdtDetails",
    "Diagnostic",
    "FileInfo",
    "FunctionDetails",
    "ItemDetails",
    "ItemInfo",
    "ModuleDetails",
    "ModuleReference",
    "ModuleSummary",
    "OtherDetails",
    "ParseResponse",
    "Span",
    "TraitDetails",
    "TraitMethodInfo",
    "Visibility",
    "VisibilityKind",
]
