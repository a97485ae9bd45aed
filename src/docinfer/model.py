# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for documentation records and their code context."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Literal

Scope = Literal["static", "instance"]

SCOPES: frozenset[str] = frozenset({"static", "instance"})


@dataclass(frozen=True)
class Declaration:
    """Function or variable declaration following a comment.

    Attributes:
        kind: Declaration keyword, e.g. ``function`` or ``var``.
        bound_name: Declared identifier.
    """

    kind: str
    bound_name: str


@dataclass(frozen=True)
class AssignmentTarget:
    """Left-hand side of an assignment, split into access segments."""

    path: tuple[str, ...]


@dataclass(frozen=True)
class ObjectProperty:
    """Key inside an object literal.

    Attributes:
        key: Property key.
        enclosing_path: Path the literal itself is bound to, if any.
    """

    key: str
    enclosing_path: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ReturnedObjectProperty:
    """Property of an object literal returned from a named function."""

    key: str
    enclosing_function: str


@dataclass(frozen=True)
class LendsTarget:
    """Object literal argument annotated with a lends directive."""

    path: tuple[str, ...]


@dataclass(frozen=True)
class Unknown:
    """Construct with no resolvable shape."""


CodeContext = (
    Declaration
    | AssignmentTarget
    | ObjectProperty
    | ReturnedObjectProperty
    | LendsTarget
    | Unknown
)


@dataclass(frozen=True)
class DocRecord:
    """Represent one documentation comment.

    Attributes:
        tags: Tag name to tag value mapping extracted from the comment body.
            Flag tags such as ``static`` carry an empty value.
        file: Source file the comment was read from.
        context: Syntactic construct immediately following the comment.
    """

    tags: Mapping[str, str]
    file: str
    context: CodeContext = field(default_factory=Unknown)

    def tag(self, key: str) -> str | None:
        """Return a stripped tag value, or ``None`` when missing or blank.

        Args:
            key: Tag name.

        Returns:
            Tag value, or ``None`` when the tag is absent or empty.
        """
        value = self.tags.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def has_flag(self, key: str) -> bool:
        """Check whether a flag tag (value-less) is present."""
        return key in self.tags

    @property
    def name(self) -> str | None:
        return self.tag("name")

    @property
    def memberof(self) -> str | None:
        return self.tag("memberof")

    @property
    def scope(self) -> str | None:
        return self.tag("scope")

    def with_tags(self, **updates: str) -> "DocRecord":
        """Return a copy of the record with tags added or overwritten.

        Args:
            **updates: Tag values to set.

        Returns:
            New record sharing file and context with this one.
        """
        tags = dict(self.tags)
        tags.update(updates)
        return replace(self, tags=tags)

    def without_tags(self, *keys: str) -> "DocRecord":
        """Return a copy of the record with the given tags removed."""
        tags = {key: value for key, value in self.tags.items() if key not in keys}
        return replace(self, tags=tags)
