"""Data models for the resume scoring pipeline."""

from resume_scorer.models.outline import BulletItem, DocumentOutline, OutlineMetadata, Section
from resume_scorer.models.report import (
    GapCoverage,
    GapReport,
    KeywordClassification,
    ScoreBreakdown,
    ScoreReport,
)
from resume_scorer.models.requirements import RequirementSet

__all__ = [
    "BulletItem",
    "DocumentOutline",
    "GapCoverage",
    "GapReport",
    "KeywordClassification",
    "OutlineMetadata",
    "RequirementSet",
    "ScoreBreakdown",
    "ScoreReport",
    "Section",
]
