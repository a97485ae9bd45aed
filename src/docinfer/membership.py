# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Membership inference: ``memberof`` and ``scope`` for documentation records."""

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from docinfer.model import (
    SCOPES,
    AssignmentTarget,
    DocRecord,
    LendsTarget,
    ObjectProperty,
    ReturnedObjectProperty,
    Scope,
)
from docinfer.paths import (
    export_root_length,
    join_path,
    member_owner,
    module_name_from_file,
    strip_prototype,
    substitute_module,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingLends:
    """Lends directive waiting for the object literal that follows it.

    Attributes:
        path: Owner path the literal's properties belong to.
        scope: Scope given to those properties.
    """

    path: str
    scope: Scope


class ModuleContext:
    """Per-file module identity.

    The name is taken from the first ``@module`` tag seen in the file; an
    anonymous tag establishes the file's base name. Lookups before any tag
    answer with the base name without establishing it. Once established the
    name never changes.
    """

    def __init__(self, file: str) -> None:
        self.file = file
        self._name: str | None = None

    @property
    def name(self) -> str:
        """Return the module name, or the file's base name until a tag is seen."""
        if self._name is None:
            return module_name_from_file(self.file)
        return self._name

    def observe(self, record: DocRecord) -> None:
        """Establish the module name from a record's ``@module`` tag.

        Args:
            record: Record of the current file.
        """
        if not record.has_flag("module"):
            return
        if self._name is not None:
            logger.debug(
                f"Ignoring later module tag (file={self.file} module={self._name} tag={record.tag('module')})"
            )
            return
        self._name = record.tag("module") or module_name_from_file(self.file)


def resolve_membership(
    record: DocRecord,
    module: ModuleContext,
    pending: PendingLends | None,
) -> tuple[DocRecord, PendingLends | None]:
    """Resolve ``memberof`` and ``scope`` for one record.

    Args:
        record: Record with its name already resolved.
        module: Module context of the record's file.
        pending: Lends directive armed by the previous record, if any.

    Returns:
        The enriched record and the lends directive for the next record.
        Any incoming directive is consumed or discarded here, so the
        returned one is only ever set by a lends target.
    """
    module.observe(record)
    record = _drop_malformed_scope(record)
    context = record.context
    next_pending = None
    if isinstance(context, LendsTarget):
        next_pending = _arm_lends(context.path)

    record = _fold_scope_flags(record)
    if record.memberof is not None:
        return record, next_pending

    owner: tuple[str, Scope] | None = None
    if isinstance(context, AssignmentTarget):
        owner = member_owner(_module_path(context.path, module))
    elif isinstance(context, ObjectProperty):
        owner = _property_owner(context, module, pending)
    elif isinstance(context, ReturnedObjectProperty):
        if context.enclosing_function:
            owner = (context.enclosing_function, "static")

    if owner is None:
        return record, next_pending
    memberof, scope = owner
    if record.scope is not None:
        return record.with_tags(memberof=memberof), next_pending
    return record.with_tags(memberof=memberof, scope=scope), next_pending


class MembershipResolver:
    """Stream stage assigning membership to records.

    One instance serves one ordered stream, single pass. It carries the
    current file's module context and the pending lends directive.
    """

    def __init__(self) -> None:
        self._module: ModuleContext | None = None
        self._pending: PendingLends | None = None

    def resolve(self, record: DocRecord) -> DocRecord:
        """Resolve one record, advancing the carried state.

        Args:
            record: Next record of the stream.

        Returns:
            Enriched record.
        """
        if self._module is None or self._module.file != record.file:
            self._module = ModuleContext(record.file)
        if self._pending is not None and not isinstance(
            record.context, ObjectProperty
        ):
            logger.debug(
                f"Discarding unused lends directive (file={record.file} lends={self._pending.path})"
            )
        resolved, self._pending = resolve_membership(
            record, self._module, self._pending
        )
        return resolved

    def process(self, records: Iterable[DocRecord]) -> Iterator[DocRecord]:
        """Yield each record with membership resolved, preserving order."""
        for record in records:
            yield self.resolve(record)


def _fold_scope_flags(record: DocRecord) -> DocRecord:
    """Turn ``@static`` and ``@instance`` flags into an explicit scope."""
    if record.scope is not None:
        return record
    if record.has_flag("instance"):
        return record.with_tags(scope="instance")
    if record.has_flag("static"):
        return record.with_tags(scope="static")
    return record


def _drop_malformed_scope(record: DocRecord) -> DocRecord:
    scope = record.scope
    if scope is None or scope in SCOPES:
        return record
    logger.warning(f"Ignoring malformed scope tag (file={record.file} scope={scope})")
    return record.without_tags("scope")


def _module_path(path: Sequence[str], module: ModuleContext) -> tuple[str, ...]:
    if export_root_length(path):
        return substitute_module(path, module.name)
    return tuple(path)


def _property_owner(
    context: ObjectProperty,
    module: ModuleContext,
    pending: PendingLends | None,
) -> tuple[str, Scope] | None:
    if pending is not None:
        return pending.path, pending.scope
    if not context.enclosing_path:
        return None
    owner, scope = strip_prototype(_module_path(context.enclosing_path, module))
    if not owner:
        return None
    return join_path(owner), scope


def _arm_lends(path: Sequence[str]) -> PendingLends | None:
    owner, scope = strip_prototype(path)
    if not owner:
        logger.warning(f"Lends directive names no owner (path={join_path(path)})")
        return None
    return PendingLends(path=join_path(owner), scope=scope)
