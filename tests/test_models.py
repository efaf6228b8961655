"""Tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from resume_scorer.models import (
    BulletItem,
    DocumentOutline,
    GapCoverage,
    GapReport,
    KeywordClassification,
    OutlineMetadata,
    RequirementSet,
    ScoreBreakdown,
    ScoreReport,
    Section,
)


class TestDocumentOutline:
    def test_full_text(self, sample_outline):
        text = sample_outline.full_text()
        assert text.startswith("Experience • Developed Python")
        assert "Education B.S. Computer Science" in text
        assert text.endswith("Skills Python, AWS, Docker, Python")

    def test_full_text_empty_section(self):
        outline = DocumentOutline(sections=[Section(title="Skills", position=0)])
        assert outline.full_text() == "Skills "

    def test_counts(self, sample_outline):
        assert sample_outline.section_titles() == ["Experience", "Education", "Skills"]
        assert sample_outline.bullet_count() == 2
        assert sample_outline.content_line_count() == 5

    def test_metadata_aliases(self):
        outline = DocumentOutline(metadata=OutlineMetadata(total_sections=3, word_count=30))
        data = outline.model_dump(by_alias=True)
        assert data["metadata"] == {"totalSections": 3, "wordCount": 30}

    def test_metadata_populate_by_name(self):
        assert OutlineMetadata(totalSections=2, wordCount=7).total_sections == 2
        assert OutlineMetadata(total_sections=2).word_count == 0

    def test_frozen(self, sample_outline):
        with pytest.raises(ValidationError):
            sample_outline.sections[0].title = "Changed"

    def test_serialization(self, sample_outline):
        restored = DocumentOutline.model_validate_json(sample_outline.model_dump_json())
        assert restored == sample_outline

    def test_negative_level_rejected(self):
        with pytest.raises(ValidationError):
            BulletItem(text="- x", level=-1, position=0)


class TestRequirementSet:
    def test_defaults(self):
        reqs = RequirementSet()
        assert reqs.all_keywords() == []
        assert reqs.total_keywords == 0

    def test_order(self, sample_requirements):
        assert sample_requirements.all_keywords() == [
            "Python", "AWS", "Kubernetes", "Docker", "GraphQL",
        ]
        assert sample_requirements.total_keywords == 5

    def test_overlap_rejected(self):
        with pytest.raises(ValidationError, match="both must_have and nice_to_have: Go"):
            RequirementSet(must_have={"Go": ""}, nice_to_have={"Go": "", "Rust": ""})

    def test_case_sensitive_keys_do_not_overlap(self):
        reqs = RequirementSet(must_have={"go": ""}, nice_to_have={"Go": ""})
        assert reqs.total_keywords == 2


class TestReports:
    def test_classification_covered(self):
        cls = KeywordClassification(present=["a"], weak=["b"], missing=["c"])
        assert cls.covered() == {"a", "b"}

    def test_coverage_aliases(self):
        cov = GapCoverage(must_have_percent=50, nice_to_have_percent=100, overall=65)
        assert cov.model_dump(by_alias=True) == {
            "mustHavePercent": 50,
            "niceToHavePercent": 100,
            "overall": 65,
        }

    def test_coverage_bounds(self):
        with pytest.raises(ValidationError):
            GapCoverage(must_have_percent=101, nice_to_have_percent=0, overall=0)

    def test_gap_report(self):
        report = GapReport(
            present=[],
            weak=["a"],
            missing=[],
            coverage=GapCoverage(mustHavePercent=100, niceToHavePercent=100, overall=100),
        )
        assert report.coverage.overall == 100

    def test_score_breakdown_aliases(self):
        breakdown = ScoreBreakdown(
            keyword_match=80, section_coverage=67, action_verbs=50, format_quality=70
        )
        assert breakdown.model_dump(by_alias=True) == {
            "keywordMatch": 80,
            "sectionCoverage": 67,
            "actionVerbs": 50,
            "formatQuality": 70,
        }

    def test_score_delta(self):
        breakdown = ScoreBreakdown(
            keyword_match=0, section_coverage=0, action_verbs=0, format_quality=0
        )
        assert ScoreReport(after=60, breakdown=breakdown).delta is None
        assert ScoreReport(after=60, before=45, breakdown=breakdown).delta == 15
