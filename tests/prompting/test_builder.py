"""Tests for the description prompt builder."""

from __future__ import annotations

from pathlib import Path

from codeprose.prompting.builder import PromptBuilder


def test_system_prompt_lists_project_files() -> None:
    request = PromptBuilder().build("src/app.ts", "let x = 1", ["src/app.ts", "src/util.ts"])

    assert "technical book" in request.system
    assert "src/app.ts\nsrc/util.ts" in request.system
    assert "[[phrase||code]]" in request.system
    assert "@filename" in request.system


def test_user_prompt_includes_outline_only_when_present() -> None:
    builder = PromptBuilder()

    without = builder.build("a.py", "x = 1", [])
    assert without.user == 'Here is the file "a.py":\n\nx = 1'
    assert without.metadata["has_outline"] is False

    with_outline = builder.build("a.py", "x = 1", [], outline="assignment x (lines 1-1)")
    assert with_outline.user.endswith(
        "For reference, here is the file's structure:\n\nassignment x (lines 1-1)"
    )
    assert [message.role for message in with_outline.messages] == ["system", "user"]


def test_custom_templates_directory_overrides_defaults(tmp_path: Path) -> None:
    (tmp_path / "user.j2").write_text("FILE {{ filename }}", encoding="utf-8")

    request = PromptBuilder(tmp_path).build("a.py", "x = 1", [])

    assert request.user == "FILE a.py"
    assert "technical book" in request.system
