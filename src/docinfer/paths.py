# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Helpers for member-access paths such as ``Foo.prototype.bar``."""

from collections.abc import Sequence
from pathlib import PurePath

from docinfer.model import Scope

PROTOTYPE = "prototype"

# Longest form first so ``module.exports`` is not read as a bare ``module``.
EXPORT_ROOTS: tuple[tuple[str, ...], ...] = (("module", "exports"), ("exports",))


def split_path(dotted: str) -> tuple[str, ...]:
    """Split a dotted path into non-empty segments.

    Args:
        dotted: Path text such as ``Foo.prototype``.

    Returns:
        Path segments.
    """
    return tuple(part.strip() for part in dotted.split(".") if part.strip())


def join_path(segments: Sequence[str]) -> str:
    """Join path segments into dotted form."""
    return ".".join(segments)


def export_root_length(path: Sequence[str]) -> int:
    """Return how many leading segments name the module export surface.

    Only a literal root matches; ``global.module.exports`` does not.

    Args:
        path: Member-access path.

    Returns:
        Length of the matched export root, or ``0`` when there is none.
    """
    for root in EXPORT_ROOTS:
        if tuple(path[: len(root)]) == root:
            return len(root)
    return 0


def substitute_module(path: Sequence[str], module_name: str) -> tuple[str, ...]:
    """Replace a leading export root with the module name.

    Args:
        path: Member-access path.
        module_name: Name of the current module.

    Returns:
        Path rooted at the module name, or the path unchanged when it does
        not start at the export root.
    """
    root_length = export_root_length(path)
    if not root_length:
        return tuple(path)
    return (module_name, *path[root_length:])


def strip_prototype(path: Sequence[str]) -> tuple[tuple[str, ...], Scope]:
    """Drop a trailing ``prototype`` segment and report the implied scope.

    Args:
        path: Owner path, e.g. ``("Foo", "prototype")``.

    Returns:
        The owner path and ``instance`` when ``prototype`` was stripped,
        otherwise the path unchanged and ``static``.
    """
    if path and path[-1] == PROTOTYPE:
        return tuple(path[:-1]), "instance"
    return tuple(path), "static"


def member_owner(path: Sequence[str]) -> tuple[str, Scope] | None:
    """Derive owner and scope for an assigned member path.

    ``A.bar`` is a static member of ``A``, ``A.prototype.bar`` an instance
    member of ``A`` and ``A.b.c`` a static member of ``A.b``.

    Args:
        path: Full member path including the member itself.

    Returns:
        Owner path and scope, or ``None`` when the path has no owner.
    """
    if len(path) < 2:
        return None
    owner, scope = strip_prototype(path[:-1])
    if not owner:
        return None
    return join_path(owner), scope


def module_name_from_file(file: str) -> str:
    """Derive a module name from a file's base name without extension."""
    return PurePath(file).stem
