# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for documentation inference components."""

from docinfer.dump import DumpParser, DumpWalker, record_from_dict, record_to_dict
from docinfer.membership import (
    MembershipResolver,
    ModuleContext,
    PendingLends,
    resolve_membership,
)
from docinfer.model import (
    AssignmentTarget,
    CodeContext,
    Declaration,
    DocRecord,
    LendsTarget,
    ObjectProperty,
    ReturnedObjectProperty,
    Unknown,
)
from docinfer.name_resolver import NameResolver, resolve_name
from docinfer.pipeline import DocGenerationError, generate_docs, is_internal_module
from docinfer.sources import DocParser, GraphWalker, SourceError, SourceFile

__all__ = [
    "AssignmentTarget",
    "CodeContext",
    "Declaration",
    "DocGenerationError",
    "DocParser",
    "DocRecord",
    "DumpParser",
    "DumpWalker",
    "GraphWalker",
    "LendsTarget",
    "MembershipResolver",
    "ModuleContext",
    "NameResolver",
    "ObjectProperty",
    "PendingLends",
    "ReturnedObjectProperty",
    "SourceError",
    "SourceFile",
    "Unknown",
    "generate_docs",
    "is_internal_module",
    "record_from_dict",
    "record_to_dict",
    "resolve_membership",
    "resolve_name",
]
