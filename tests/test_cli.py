"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json

import pytest

from codeprose import cli
from codeprose.cli import _build_parser
from codeprose.models import DescribeResult
from codeprose.orchestrator import Orchestrator

from tests._fixtures.project_builder import ProjectBuilder
from tests._fixtures.samples import FOO_SOURCE, foo_tree
from tests._fixtures.stubs import StubParser


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "outline", "a.ts"])
    assert args.verbose is True
    assert args.command == "outline"
    assert args.path == "a.ts"


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["annotate", "a.ts", "--verbose", "--json"])
    assert args.verbose is True
    assert args.json is True


def test_cli_describe_and_serve_options() -> None:
    parser = _build_parser()

    describe = parser.parse_args(["describe", "a.ts", "--project-root", "src"])
    assert describe.project_root == "src"

    serve = parser.parse_args(["serve", "--port", "9000"])
    assert (serve.host, serve.port) == ("127.0.0.1", 9000)


@pytest.fixture
def foo_file(project_builder: ProjectBuilder, monkeypatch: pytest.MonkeyPatch) -> str:
    project_builder.write({"foo.ts": FOO_SOURCE})
    monkeypatch.setattr(cli, "Orchestrator", lambda: Orchestrator(parser=StubParser(foo_tree)))
    return str(project_builder.path("foo.ts"))


def test_outline_command_prints_outline(foo_file: str, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["outline", foo_file])

    assert capsys.readouterr().out.startswith("imports (lines 1-1)\n")


def test_annotate_command_prints_captions(foo_file: str, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["annotate", foo_file])

    out = capsys.readouterr().out
    assert out.startswith("This file defines 1 function (foo) and imports from 1 module.\n")
    assert "Foo is an async function that takes x (number) and returns Promise<void>." in out
    assert "  - Loop through items" in out


def test_annotate_json_output(foo_file: str, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["annotate", foo_file, "--json"])

    data = json.loads(capsys.readouterr().out)
    assert data["outline"][0] == "Imports (1)"
    assert data["nodes"][1]["node"]["name"] == "foo"


def test_concepts_command_groups_by_category(foo_file: str, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["concepts", foo_file])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Import Export (2)"
    assert lines[1] == '  1: import {a} from "m"'


def test_describe_failure_exits_non_zero(
    foo_file: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        Orchestrator,
        "describe",
        lambda self, path, project_root=None: DescribeResult(error="Network error: offline"),
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["describe", foo_file])

    assert excinfo.value.code == 1
    assert "Could not generate description: Network error: offline" in capsys.readouterr().err


def test_describe_prints_truncation_note(
    foo_file: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        Orchestrator,
        "describe",
        lambda self, path, project_root=None: DescribeResult(text="Prose.", truncated=True),
    )

    cli.main(["describe", foo_file])

    out = capsys.readouterr().out
    assert out == f"{cli.TRUNCATION_NOTE}\n\nProse.\n"


def test_missing_file_exits_non_zero(foo_file: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["outline", foo_file + ".missing"])

    assert excinfo.value.code == 1
    assert "Source file not found" in capsys.readouterr().err
