"""Requirement keyword set supplied by the job-description side."""

from __future__ import annotations

from pydantic import BaseModel, model_validator


class RequirementSet(BaseModel):
    """Two disjoint keyword -> description maps.

    Descriptions are carried for presentation only and never affect scoring.
    """

    must_have: dict[str, str] = {}
    nice_to_have: dict[str, str] = {}

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_disjoint(self) -> "RequirementSet":
        overlap = sorted(set(self.must_have) & set(self.nice_to_have))
        if overlap:
            raise ValueError(
                f"keywords listed in both must_have and nice_to_have: {', '.join(overlap)}"
            )
        return self

    def all_keywords(self) -> list[str]:
        """Keys of both maps, must_have first, in insertion order."""
        return [*self.must_have, *self.nice_to_have]

    @property
    def total_keywords(self) -> int:
        return len(self.must_have) + len(self.nice_to_have)
