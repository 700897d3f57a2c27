"""Project file listing used for @filename references."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Sequence

from .config import CONFIG_FILENAME, ConfigError, load_config
from .logging import get_logger

_EXCLUDED_DIRS = {"node_modules", "__pycache__"}


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .codeprose.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _parse_config_excludes(path: Path) -> List[IgnoreRule]:
    try:
        config = load_config(path)
    except ConfigError:
        return []
    rules = (_build_ignore_rule(pattern) for pattern in config.exclude_paths)
    return [rule for rule in rules if rule is not None]


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class ProjectScanner:
    """Lists project files as sorted POSIX paths relative to the root.

    Hidden entries (leading dot) and dependency folders are never listed.
    """

    def __init__(self) -> None:
        self.logger = get_logger("scanner")

    def list_files(self, root: str | Path) -> List[str]:
        root_path = Path(root).expanduser().resolve()
        if not root_path.is_dir():
            raise FileNotFoundError(f"Project root not found: {root_path}")

        rules = _parse_gitignore(root_path / ".gitignore")
        rules.extend(_parse_config_excludes(root_path / CONFIG_FILENAME))

        files: List[str] = []
        for dirpath, dirnames, filenames in os.walk(root_path):
            current = Path(dirpath)
            rel_dir = current.relative_to(root_path).as_posix() if current != root_path else ""

            kept_dirs = []
            for name in sorted(dirnames):
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if name.startswith(".") or name in _EXCLUDED_DIRS:
                    continue
                if _should_ignore(rel_path, True, rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for name in filenames:
                if name.startswith("."):
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, False, rules):
                    continue
                files.append(rel_path)

        files.sort()
        self.logger.debug("Listed %d project files under %s", len(files), root_path)
        return files


__all__ = ["IgnoreRule", "ProjectScanner"]
