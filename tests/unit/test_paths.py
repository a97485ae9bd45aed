# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for member-access path helpers."""

from docinfer.paths import (
    export_root_length,
    member_owner,
    module_name_from_file,
    split_path,
    strip_prototype,
    substitute_module,
)


def test_path_001_split_path_ignores_empty_segments() -> None:
    assert split_path("Foo.prototype") == ("Foo", "prototype")
    assert split_path(" Foo..bar ") == ("Foo", "bar")
    assert split_path("") == ()


def test_path_002_export_root_matches_only_literal_root() -> None:
    assert export_root_length(("exports", "foo")) == 1
    assert export_root_length(("module", "exports", "foo")) == 2
    assert export_root_length(("module", "foo")) == 0
    assert export_root_length(("global", "module", "exports")) == 0


def test_path_003_substitute_module_replaces_export_root() -> None:
    assert substitute_module(("module", "exports", "foo"), "mod") == ("mod", "foo")
    assert substitute_module(("exports",), "mod") == ("mod",)
    assert substitute_module(("Foo", "bar"), "mod") == ("Foo", "bar")


def test_path_004_strip_prototype_reports_scope() -> None:
    assert strip_prototype(("Foo", "prototype")) == (("Foo",), "instance")
    assert strip_prototype(("Foo",)) == (("Foo",), "static")


def test_path_005_member_owner_rules() -> None:
    assert member_owner(("Foo", "bar")) == ("Foo", "static")
    assert member_owner(("Foo", "prototype", "bar")) == ("Foo", "instance")
    assert member_owner(("Foo", "bar", "baz")) == ("Foo.bar", "static")
    assert member_owner(("Foo",)) is None
    assert member_owner(("prototype", "bar")) is None


def test_path_006_module_name_from_file_drops_extension() -> None:
    assert module_name_from_file("/path/mod.js") == "mod"
    assert module_name_from_file("lib/parser.min.js") == "parser.min"
