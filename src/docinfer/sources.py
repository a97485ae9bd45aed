# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Contracts for the source collaborators feeding the inference pipeline."""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from docinfer.model import DocRecord

ModuleFilter = Callable[[str], bool]


class SourceError(RuntimeError):
    """Represent a graph-walk or parse failure."""


@dataclass(frozen=True)
class SourceFile:
    """One discovered source file.

    Attributes:
        path: Absolute file path.
        text: File contents.
    """

    path: Path
    text: str


class GraphWalker(Protocol):
    """Discover source files reachable from entry paths."""

    def walk(
        self, entries: list[Path], is_internal: ModuleFilter
    ) -> Iterator[SourceFile]:
        """Yield reachable files in discovery order.

        Args:
            entries: Absolute entry file paths.
            is_internal: Predicate deciding whether a module reference is
                crawled.

        Raises:
            SourceError: If a file cannot be read or its references decoded.
        """


class DocParser(Protocol):
    """Turn source text into raw documentation records."""

    def parse(self, source: SourceFile) -> Iterable[DocRecord]:
        """Parse one file into records in source order.

        Args:
            source: File to parse.

        Raises:
            SourceError: If the file cannot be parsed.
        """
