"""Load requirement keyword sets from JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from resume_scorer.models.requirements import RequirementSet


def parse_requirements(data: dict) -> RequirementSet:
    """Build a RequirementSet from a ``{"must_have": ..., "nice_to_have": ...}`` dict.

    Either map may also be given as a plain list of keywords, in which case
    descriptions are left empty.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping of requirements, got {type(data).__name__}")

    def _as_map(value: object, key: str) -> dict[str, str]:
        if value is None:
            return {}
        if isinstance(value, list):
            return {str(k).strip(): "" for k in value if str(k).strip()}
        if isinstance(value, dict):
            return {str(k).strip(): "" if v is None else str(v) for k, v in value.items()}
        raise ValueError(f"'{key}' must be a mapping or a list, got {type(value).__name__}")

    return RequirementSet(
        must_have=_as_map(data.get("must_have"), "must_have"),
        nice_to_have=_as_map(data.get("nice_to_have"), "nice_to_have"),
    )


def load_requirements_file(file_path: str | Path) -> RequirementSet:
    """Load requirements from a .json, .yaml or .yml file."""
    path = Path(file_path)
    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".json":
        data = json.loads(raw)
    elif suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path.name}: {exc}") from exc
    else:
        raise ValueError(f"Unsupported requirements format: {path.suffix}")
    return parse_requirements(data)
