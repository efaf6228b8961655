"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


@dataclass(frozen=True)
class ParserConfig:
    keep_preamble: bool = False  # keep paragraphs seen before the first header
    indent_unit: int = 720  # twips per bullet nesting level (0.5 inch)

    def __post_init__(self) -> None:
        if self.indent_unit < 1:
            raise ValueError(f"indent_unit must be >= 1, got {self.indent_unit}")


@dataclass(frozen=True)
class AnalysisConfig:
    present_threshold: int = 3
    fallback_to_frequency: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.present_threshold <= 100:
            raise ValueError(
                f"present_threshold must be between 1 and 100, got {self.present_threshold}"
            )


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 3
    timeout: int = 60

    def __post_init__(self) -> None:
        if self.timeout < 1:
            raise ValueError(f"timeout must be >= 1, got {self.timeout}")
        if not 1 <= self.max_retries <= 10:
            raise ValueError(f"max_retries must be between 1 and 10, got {self.max_retries}")


@dataclass(frozen=True)
class AppConfig:
    parser: ParserConfig = field(default_factory=ParserConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)


def _section(raw: dict, name: str, cls: type):
    values = raw.get(name) or {}
    if not isinstance(values, dict):
        raise ValueError(f"'{name}' config must be a mapping, got {type(values).__name__}")
    unknown = sorted(set(values) - {f.name for f in fields(cls)})
    if unknown:
        raise ValueError(f"Unknown keys in '{name}' config: {', '.join(unknown)}")
    return cls(**values)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            try:
                raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in {p}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Config must be a mapping, got {type(raw).__name__}")

    return AppConfig(
        parser=_section(raw, "parser", ParserConfig),
        analysis=_section(raw, "analysis", AnalysisConfig),
        llm=_section(raw, "llm", LLMConfig),
    )
