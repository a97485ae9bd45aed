# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Name inference for documentation records."""

import logging
from collections.abc import Iterable, Iterator

from docinfer.model import (
    AssignmentTarget,
    Declaration,
    DocRecord,
    ObjectProperty,
    ReturnedObjectProperty,
)

logger = logging.getLogger(__name__)


def resolve_name(record: DocRecord) -> DocRecord:
    """Set ``name`` from the record's code context when it is absent.

    Args:
        record: Raw or partially enriched record.

    Returns:
        The record unchanged when it already has a name or no name can be
        derived, otherwise a copy carrying the inferred name.
    """
    if record.name is not None:
        return record

    context = record.context
    name: str | None = None
    if isinstance(context, Declaration):
        name = context.bound_name
    elif isinstance(context, AssignmentTarget):
        name = context.path[-1] if context.path else None
    elif isinstance(context, (ObjectProperty, ReturnedObjectProperty)):
        name = context.key

    if not name:
        return record
    return record.with_tags(name=name)


class NameResolver:
    """Stream stage assigning names to records."""

    def process(self, records: Iterable[DocRecord]) -> Iterator[DocRecord]:
        """Yield each record with its name resolved, preserving order."""
        for record in records:
            resolved = resolve_name(record)
            if resolved.name is None:
                logger.debug(
                    f"No name derivable (file={record.file} context={type(record.context).__name__})"
                )
            yield resolved
