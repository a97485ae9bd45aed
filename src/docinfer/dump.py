# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""JSON record dumps: a file-based walker and parser for pre-parsed sources.

A dump holds what a source parser extracted from one file::

    {
      "requires": ["./other.json", "lodash"],
      "records": [
        {"tags": {"module": "mod"}, "context": {"kind": "unknown"}},
        {"tags": {}, "context": {"kind": "assignment", "path": ["exports", "foo"]}}
      ]
    }
"""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

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
from docinfer.paths import split_path
from docinfer.sources import ModuleFilter, SourceError, SourceFile

logger = logging.getLogger(__name__)


class DumpWalker:
    """Walk dump files depth-first along their ``requires`` references."""

    def walk(
        self, entries: list[Path], is_internal: ModuleFilter
    ) -> Iterator[SourceFile]:
        """Yield each reachable dump once, entries first in given order.

        Args:
            entries: Absolute entry dump paths.
            is_internal: Predicate selecting the references to follow.

        Raises:
            SourceError: If a dump cannot be read or decoded.
        """
        seen: set[Path] = set()
        stack = list(reversed(entries))
        while stack:
            path = stack.pop()
            if path in seen:
                continue
            seen.add(path)
            source = SourceFile(path=path, text=_read_text(path))
            yield source

            requires = _load_document(source).get("requires", [])
            if not isinstance(requires, list):
                raise SourceError(f"'requires' must be a list in {path}")
            internal: list[Path] = []
            for module_id in requires:
                if not isinstance(module_id, str) or not is_internal(module_id):
                    logger.debug(
                        f"Skipping external module (file={path} module={module_id!r})"
                    )
                    continue
                internal.append((path.parent / module_id).resolve())
            stack.extend(reversed(internal))


class DumpParser:
    """Decode the records stored in a dump file."""

    def parse(self, source: SourceFile) -> list[DocRecord]:
        """Decode all records of one dump.

        Args:
            source: Dump file.

        Returns:
            Records in stored order.

        Raises:
            SourceError: If the dump or one of its records is malformed.
        """
        records = _load_document(source).get("records", [])
        if not isinstance(records, list):
            raise SourceError(f"'records' must be a list in {source.path}")
        return [record_from_dict(item, file=str(source.path)) for item in records]


def record_from_dict(data: Any, file: str) -> DocRecord:
    """Build a record from its dump form.

    Args:
        data: Mapping with ``tags`` and ``context`` entries.
        file: Source file the record belongs to.

    Returns:
        Decoded record.

    Raises:
        SourceError: If the mapping is malformed.
    """
    if not isinstance(data, Mapping):
        raise SourceError(f"Record must be an object in {file}: {data!r}")
    tags = data.get("tags", {})
    if not isinstance(tags, Mapping):
        raise SourceError(f"Record tags must be an object in {file}: {tags!r}")
    return DocRecord(
        tags={
            str(key): "" if value is None else str(value)
            for key, value in tags.items()
        },
        file=file,
        context=context_from_dict(data.get("context"), file=file),
    )


def context_from_dict(data: Any, file: str) -> CodeContext:
    """Decode a code context; a missing context decodes as ``Unknown``.

    Raises:
        SourceError: If the kind is unsupported or a field is malformed.
    """
    if data is None:
        return Unknown()
    if not isinstance(data, Mapping):
        raise SourceError(f"Context must be an object in {file}: {data!r}")
    kind = data.get("kind", "unknown")
    if kind == "declaration":
        return Declaration(
            kind=_string(data, "declaration_kind", file, default="var"),
            bound_name=_string(data, "name", file),
        )
    if kind == "assignment":
        return AssignmentTarget(path=_path(data, "path", file))
    if kind == "property":
        enclosing = data.get("enclosing_path")
        return ObjectProperty(
            key=_string(data, "key", file),
            enclosing_path=(
                None if enclosing is None else _path(data, "enclosing_path", file)
            ),
        )
    if kind == "returned_property":
        return ReturnedObjectProperty(
            key=_string(data, "key", file),
            enclosing_function=_string(data, "function", file),
        )
    if kind == "lends":
        return LendsTarget(path=_path(data, "path", file))
    if kind == "unknown":
        return Unknown()
    raise SourceError(f"Unsupported context kind in {file}: {kind!r}")


def record_to_dict(record: DocRecord) -> dict[str, Any]:
    """Serialize a record for output, inverse of ``record_from_dict``."""
    return {
        "file": record.file,
        "tags": dict(record.tags),
        "context": context_to_dict(record.context),
    }


def context_to_dict(context: CodeContext) -> dict[str, Any]:
    if isinstance(context, Declaration):
        return {
            "kind": "declaration",
            "declaration_kind": context.kind,
            "name": context.bound_name,
        }
    if isinstance(context, AssignmentTarget):
        return {"kind": "assignment", "path": list(context.path)}
    if isinstance(context, ObjectProperty):
        enclosing = context.enclosing_path
        return {
            "kind": "property",
            "key": context.key,
            "enclosing_path": None if enclosing is None else list(enclosing),
        }
    if isinstance(context, ReturnedObjectProperty):
        return {
            "kind": "returned_property",
            "key": context.key,
            "function": context.enclosing_function,
        }
    if isinstance(context, LendsTarget):
        return {"kind": "lends", "path": list(context.path)}
    return {"kind": "unknown"}


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read source (path={path} error={exc})")
        raise SourceError(f"Cannot read {path}: {exc}") from exc


def _load_document(source: SourceFile) -> Mapping[str, Any]:
    try:
        document = json.loads(source.text)
    except json.JSONDecodeError as exc:
        logger.warning(f"Failed to decode dump (path={source.path} error={exc})")
        raise SourceError(f"Invalid JSON in {source.path}: {exc}") from exc
    if not isinstance(document, Mapping):
        raise SourceError(f"Dump must be a JSON object: {source.path}")
    return document


def _string(
    data: Mapping[str, Any], key: str, file: str, default: str | None = None
) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value:
        raise SourceError(f"Context field {key!r} must be a non-empty string in {file}")
    return value


def _path(data: Mapping[str, Any], key: str, file: str) -> tuple[str, ...]:
    value = data.get(key)
    if isinstance(value, str):
        value = list(split_path(value))
    if not isinstance(value, list) or not all(
        isinstance(part, str) and part for part in value
    ):
        raise SourceError(f"Context field {key!r} must be a list of names in {file}")
    return tuple(value)
