# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the inference verification harness."""

import io
import json
import re
from pathlib import Path

from cli.docinfer_harness import run


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _write_project(root: Path) -> Path:
    index = root / "index.json"
    _write_file(
        index,
        json.dumps(
            {
                "requires": ["./shapes.json", "lodash"],
                "records": [
                    {"tags": {"module": "geometry"}},
                    {
                        "tags": {"description": "Area helper"},
                        "context": {"kind": "assignment", "path": ["module", "exports", "area"]},
                    },
                ],
            }
        ),
    )
    _write_file(
        root / "shapes.json",
        json.dumps(
            {
                "records": [
                    {
                        "tags": {},
                        "context": {"kind": "declaration", "declaration_kind": "function", "name": "Shape"},
                    },
                    {
                        "tags": {},
                        "context": {"kind": "assignment", "path": ["Shape", "prototype", "draw"]},
                    },
                ]
            }
        ),
    )
    return index


def test_cli_001_infer_json_output(tmp_path: Path) -> None:
    index = _write_project(tmp_path / "project")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["infer", "--path", str(index), "--format", "json"],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    payload = json.loads(_strip_ansi(stdout.getvalue()))
    assert payload["error"] is None
    tags = [record["tags"] for record in payload["records"]]
    assert tags[1] == {
        "description": "Area helper",
        "name": "area",
        "memberof": "geometry",
        "scope": "static",
    }
    assert tags[2] == {"name": "Shape"}
    assert tags[3]["memberof"] == "Shape"
    assert tags[3]["scope"] == "instance"


def test_cli_002_infer_table_output(tmp_path: Path) -> None:
    index = _write_project(tmp_path / "project")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["infer", "--path", str(index)],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    compact_text = re.sub(r"[^a-zA-Z0-9_.]+", "", _strip_ansi(stdout.getvalue()))
    assert "memberof" in compact_text
    assert "geometry" in compact_text
    assert "draw" in compact_text


def test_cli_003_infer_json_writes_to_output_file(tmp_path: Path) -> None:
    index = _write_project(tmp_path / "project")
    output_path = tmp_path / "out" / "result.json"
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "infer",
            "--path",
            str(index),
            "--format",
            "json",
            "--output",
            str(output_path),
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert stdout.getvalue() == ""
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert len(payload["records"]) == 4


def test_cli_004_missing_path_is_usage_error(tmp_path: Path) -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["infer", "--path", str(tmp_path / "absent.json")],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Path does not exist" in stderr.getvalue()


def test_cli_005_generation_error_keeps_emitted_records(tmp_path: Path) -> None:
    index = tmp_path / "index.json"
    _write_file(
        index,
        json.dumps(
            {
                "requires": ["./broken.json"],
                "records": [
                    {"tags": {}, "context": {"kind": "assignment", "path": ["Foo", "bar"]}}
                ],
            }
        ),
    )
    _write_file(tmp_path / "broken.json", "{not json")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["infer", "--path", str(index), "--format", "json"],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 1
    payload = json.loads(_strip_ansi(stdout.getvalue()))
    assert payload["error"]
    assert len(payload["records"]) == 1
    assert "generation_error" in stderr.getvalue()


def test_cli_006_argument_errors_return_usage_code() -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    assert run(["infer"], stdout=stdout, stderr=stderr) == 2
