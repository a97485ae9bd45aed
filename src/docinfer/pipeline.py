# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Documentation generation pipeline: walk, parse, infer names and membership."""

import logging
import re
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

from docinfer.membership import MembershipResolver
from docinfer.model import DocRecord
from docinfer.name_resolver import NameResolver
from docinfer.sources import DocParser, GraphWalker

logger = logging.getLogger(__name__)

_POSIX_INTERNAL_PATTERN = re.compile(r"^[/.]")
_WINDOWS_INTERNAL_PATTERN = re.compile(r"^(\.|\w:)")


class DocGenerationError(RuntimeError):
    """Represent a fatal failure of the documentation pipeline."""


def is_internal_module(module_id: str, platform: str = sys.platform) -> bool:
    """Check whether a module reference is a filesystem path to crawl.

    Args:
        module_id: Module reference as written in the requiring file.
        platform: Platform identifier selecting the path syntax.

    Returns:
        True for relative or absolute filesystem paths, False for package
        names resolved elsewhere.
    """
    if platform == "win32":
        return _WINDOWS_INTERNAL_PATTERN.match(module_id) is not None
    return _POSIX_INTERNAL_PATTERN.match(module_id) is not None


def generate_docs(
    entry_paths: str | Path | Iterable[str | Path],
    walker: GraphWalker,
    parser: DocParser,
) -> Iterator[DocRecord]:
    """Stream enriched documentation records for the files reachable from entries.

    Records come out in discovery order, source order within a file. The
    first failure of any stage is raised once as ``DocGenerationError``;
    the generator is finished afterwards.

    Args:
        entry_paths: One entry path or several.
        walker: Source graph walker.
        parser: Documentation comment parser.

    Yields:
        Records with name and membership resolved.

    Raises:
        DocGenerationError: If walking, parsing or inference fails.
    """
    count = 0
    try:
        entries = _resolve_entries(entry_paths)
        logger.info(f"Generating docs (entries={[str(entry) for entry in entries]})")
        raw_records = _parse_sources(entries=entries, walker=walker, parser=parser)
        named = NameResolver().process(raw_records)
        enriched = MembershipResolver().process(named)
        for record in enriched:
            count += 1
            yield record
    except Exception as exc:
        logger.warning(
            f"Documentation generation failed (records_emitted={count} error={exc})"
        )
        raise DocGenerationError(str(exc)) from exc
    logger.info(f"Documentation generation completed (records={count})")


def _resolve_entries(entry_paths: str | Path | Iterable[str | Path]) -> list[Path]:
    if isinstance(entry_paths, (str, Path)):
        entry_paths = [entry_paths]
    return [Path(entry).resolve() for entry in entry_paths]


def _parse_sources(
    entries: list[Path], walker: GraphWalker, parser: DocParser
) -> Iterator[DocRecord]:
    for source in walker.walk(entries, is_internal_module):
        logger.debug(f"Parsing source (path={source.path})")
        yield from parser.parse(source)
