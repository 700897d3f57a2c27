"""Helper utilities for constructing temporary projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from codeprose.repo_scanner import ProjectScanner


class ProjectBuilder:
    """Utility for writing files into a throwaway project and listing it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self._scanner = ProjectScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def list_files(self) -> List[str]:
        return self._scanner.list_files(self.root)

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root


__all__ = ["ProjectBuilder"]
