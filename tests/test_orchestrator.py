"""Tests for the per-file pipelines."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from codeprose.orchestrator import Orchestrator

from tests._fixtures.project_builder import ProjectBuilder
from tests._fixtures.samples import FOO_SOURCE, foo_tree
from tests._fixtures.stubs import FakeCompletion, StubParser, fake_describer, fake_runner


@pytest.fixture
def foo_project(project_builder: ProjectBuilder) -> ProjectBuilder:
    project_builder.write({"src/foo.ts": FOO_SOURCE, "src/m.ts": "export const a = 1\n"})
    return project_builder


def test_analyze_detects_language_and_extracts_structure(foo_project: ProjectBuilder) -> None:
    parser = StubParser(foo_tree)
    orchestrator = Orchestrator(parser=parser)

    analyzed = orchestrator.analyze(foo_project.path("src/foo.ts"))

    assert parser.languages == ["typescript"]
    assert [node.name for node in analyzed.structure.declarations] == ["foo"]
    assert analyzed.path.name == "foo.ts"


def test_outline_annotate_and_concepts(foo_project: ProjectBuilder) -> None:
    orchestrator = Orchestrator(parser=StubParser(foo_tree))
    path = foo_project.path("src/foo.ts")

    outline = orchestrator.outline(path)
    assert outline.text.startswith("imports (lines 1-1)")
    assert len(outline.entries) == 3

    annotated = orchestrator.annotate(path)
    assert annotated.file_summary == "This file defines 1 function (foo) and imports from 1 module."

    concepts = orchestrator.concepts(path, start=FOO_SOURCE.index("export"))
    assert [concept.tag for concept in concepts] == ["export_statement"]


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator(parser=StubParser(foo_tree)).outline(tmp_path / "nope.ts")


def test_describe_sends_outline_and_project_files(foo_project: ProjectBuilder) -> None:
    completion = FakeCompletion("Foo loops over its input.")
    orchestrator = Orchestrator(parser=StubParser(foo_tree), describer=fake_describer(completion))

    result = orchestrator.describe(foo_project.path("src/foo.ts"), project_root=foo_project.path())

    assert result.text == "Foo loops over its input."
    (request,) = completion.requests
    assert 'Here is the file "src/foo.ts"' in request.prompt
    assert "imports (lines 1-1)" in request.prompt
    assert request.system is not None
    assert "src/foo.ts\nsrc/m.ts" in request.system


def test_describe_without_grammar_skips_outline(foo_project: ProjectBuilder) -> None:
    completion = FakeCompletion()
    orchestrator = Orchestrator(parser=StubParser(), describer=fake_describer(completion))

    result = orchestrator.describe(foo_project.path("src/foo.ts"))

    assert result.ok
    (request,) = completion.requests
    assert 'Here is the file "foo.ts"' in request.prompt
    assert "structure" not in request.prompt


def test_describe_builds_describer_from_config(foo_project: ProjectBuilder) -> None:
    foo_project.write(
        {".codeprose.yml": "prose:\n  cache_path: .cache/prose.json\n  max_content_chars: 20\n"}
    )
    completion = FakeCompletion("Short.")
    orchestrator = Orchestrator(parser=StubParser(foo_tree), llm_runner=fake_runner(completion))

    result = orchestrator.describe(foo_project.path("src/foo.ts"), project_root=foo_project.path())

    assert result.text == "Short."
    assert result.truncated is True
    cache_file = foo_project.path(".cache/prose.json")
    entries = json.loads(cache_file.read_text(encoding="utf-8"))["entries"]
    assert [entry["text"] for entry in entries.values()] == ["Short."]
