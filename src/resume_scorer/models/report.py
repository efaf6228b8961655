"""Pydantic models for gap and compatibility score reports."""

from __future__ import annotations

from pydantic import BaseModel, Field


class KeywordClassification(BaseModel):
    """Raw present/weak/missing buckets returned by a keyword classifier."""

    present: list[str] = []
    weak: list[str] = []
    missing: list[str] = []

    def covered(self) -> set[str]:
        return set(self.present) | set(self.weak)


class GapCoverage(BaseModel):
    must_have_percent: int = Field(ge=0, le=100, alias="mustHavePercent")
    nice_to_have_percent: int = Field(ge=0, le=100, alias="niceToHavePercent")
    overall: int = Field(ge=0, le=100)

    model_config = {"frozen": True, "populate_by_name": True}


class GapReport(BaseModel):
    present: list[str]
    weak: list[str]
    missing: list[str]
    coverage: GapCoverage

    model_config = {"frozen": True}


class ScoreBreakdown(BaseModel):
    keyword_match: int = Field(ge=0, le=100, alias="keywordMatch")  # weight 40%
    section_coverage: int = Field(ge=0, le=100, alias="sectionCoverage")  # weight 30%
    action_verbs: int = Field(ge=0, le=100, alias="actionVerbs")  # weight 20%
    format_quality: int = Field(ge=0, le=100, alias="formatQuality")  # weight 10%

    model_config = {"frozen": True, "populate_by_name": True}


class ScoreReport(BaseModel):
    after: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    before: int | None = Field(default=None, ge=0, le=100)  # baseline, when compared

    model_config = {"frozen": True}

    @property
    def delta(self) -> int | None:
        if self.before is None:
            return None
        return self.after - self.before
