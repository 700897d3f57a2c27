"""Configuration loading for codeprose (.codeprose.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .prompting.constants import MAX_CONTENT_CHARS
from .stores.prose_cache import DEFAULT_MAX_ENTRIES

CONFIG_FILENAME = ".codeprose.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Description service settings from .codeprose.yml."""

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class ProseConfig:
    """Truncation and cache settings for generated descriptions."""

    max_content_chars: int = MAX_CONTENT_CHARS
    cache_path: Optional[Path] = None
    cache_max_entries: int = DEFAULT_MAX_ENTRIES
    templates_dir: Optional[Path] = None


@dataclass
class CodeProseConfig:
    """Represents the high-level settings defined in .codeprose.yml."""

    root: Path
    llm: Optional[LLMConfig] = None
    prose: ProseConfig = field(default_factory=ProseConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> CodeProseConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CodeProseConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    llm = None
    if llm_data:
        llm = LLMConfig(
            model=_as_str(llm_data.get("model")),
            temperature=_as_float(llm_data.get("temperature")),
            max_tokens=_as_int(llm_data.get("max_tokens")),
            base_url=_as_str(llm_data.get("base_url")),
            api_key=_as_str(llm_data.get("api_key")),
            request_timeout=_as_float(llm_data.get("request_timeout")),
        )
        if not any(
            (
                llm.model,
                llm.temperature,
                llm.max_tokens,
                llm.base_url,
                llm.api_key,
                llm.request_timeout,
            )
        ):
            llm = None

    prose = ProseConfig()
    prose_data = _as_dict(data.get("prose"))
    if prose_data:
        max_chars = _as_int(prose_data.get("max_content_chars"))
        if max_chars is not None and max_chars > 0:
            prose.max_content_chars = max_chars
        max_entries = _as_int(prose_data.get("cache_max_entries"))
        if max_entries is not None and max_entries > 0:
            prose.cache_max_entries = max_entries
        cache_path = _as_str(prose_data.get("cache_path"))
        if cache_path:
            prose.cache_path = root / cache_path
        templates_dir = _as_str(prose_data.get("templates_dir"))
        if templates_dir:
            prose.templates_dir = root / templates_dir

    return CodeProseConfig(
        root=root,
        llm=llm,
        prose=prose,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "CodeProseConfig", "ConfigError", "LLMConfig", "ProseConfig", "load_config"]
