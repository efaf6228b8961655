"""Keyword gap analysis between a resume outline and job requirements.

Every requirement keyword lands in exactly one of three buckets:
- present: mentioned 3+ times
- weak: mentioned 1-2 times
- missing: not mentioned at all

Classification is pluggable. ``FrequencyClassifier`` is the local, deterministic
default; a delegated classifier (e.g. an LLM) may be passed instead, and its
output is checked against the requirement set before it is used.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Protocol

from resume_scorer.analysis.tokenizer import count_keyword, normalize
from resume_scorer.exceptions import InvalidClassificationError
from resume_scorer.models.outline import DocumentOutline
from resume_scorer.models.report import GapCoverage, GapReport, KeywordClassification
from resume_scorer.models.requirements import RequirementSet

logger = logging.getLogger(__name__)

MUST_HAVE_WEIGHT = 0.7
NICE_TO_HAVE_WEIGHT = 0.3

PROMINENT_SECTIONS: tuple[str, ...] = (
    "experience",
    "skills",
    "technical skills",
    "work experience",
    "projects",
)


class KeywordClassifier(Protocol):
    def classify(self, full_text: str, requirements: RequirementSet) -> KeywordClassification:
        ...


class FrequencyClassifier:
    """Buckets keywords by how often they occur in the resume text."""

    def __init__(self, present_threshold: int = 3):
        self.present_threshold = present_threshold

    def classify_keyword(
        self, full_text: str, keyword: str, normalized_text: str | None = None
    ) -> str:
        frequency = count_keyword(full_text, keyword, normalized_text)
        if frequency == 0:
            return "missing"
        if frequency >= self.present_threshold:
            return "present"
        return "weak"

    def classify(self, full_text: str, requirements: RequirementSet) -> KeywordClassification:
        normalized = normalize(full_text)
        buckets: dict[str, list[str]] = {"present": [], "weak": [], "missing": []}
        for keyword in dict.fromkeys(requirements.all_keywords()):
            buckets[self.classify_keyword(full_text, keyword, normalized)].append(keyword)
        return KeywordClassification(**buckets)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def validate_partition(
    classification: KeywordClassification, keywords: Iterable[str]
) -> None:
    """Check that the three buckets cover ``keywords`` exactly once each.

    Raises:
        InvalidClassificationError: a keyword is unknown, omitted or repeated.
    """
    expected = set(keywords)
    seen: set[str] = set()
    duplicated: list[str] = []
    for keyword in [*classification.present, *classification.weak, *classification.missing]:
        if keyword in seen and keyword not in duplicated:
            duplicated.append(keyword)
        seen.add(keyword)

    unknown = sorted(seen - expected)
    omitted = sorted(expected - seen)
    if unknown or omitted or duplicated:
        raise InvalidClassificationError(
            "Classifier output does not partition the requirement keywords",
            unknown=unknown,
            omitted=omitted,
            duplicated=duplicated,
        )


def _coverage_percent(keywords: dict[str, str], covered: set[str]) -> float:
    if not keywords:
        return 100.0
    found = sum(1 for k in keywords if k in covered)
    return found / len(keywords) * 100


def compute_coverage(
    requirements: RequirementSet, classification: KeywordClassification
) -> GapCoverage:
    covered = classification.covered()
    must_have = _coverage_percent(requirements.must_have, covered)
    nice_to_have = _coverage_percent(requirements.nice_to_have, covered)
    overall = must_have * MUST_HAVE_WEIGHT + nice_to_have * NICE_TO_HAVE_WEIGHT
    return GapCoverage(
        must_have_percent=round_half_up(must_have),
        nice_to_have_percent=round_half_up(nice_to_have),
        overall=round_half_up(overall),
    )


def build_gap_report(
    requirements: RequirementSet, classification: KeywordClassification
) -> GapReport:
    """Check a classification against the requirement set and add coverage."""
    validate_partition(classification, requirements.all_keywords())

    coverage = compute_coverage(requirements, classification)
    logger.info(
        "Gap analysis: %d present, %d weak, %d missing (overall %d%%)",
        len(classification.present),
        len(classification.weak),
        len(classification.missing),
        coverage.overall,
    )
    return GapReport(
        present=list(classification.present),
        weak=list(classification.weak),
        missing=list(classification.missing),
        coverage=coverage,
    )


def analyze_gap(
    outline: DocumentOutline,
    requirements: RequirementSet,
    classifier: KeywordClassifier | None = None,
) -> GapReport:
    """Classify every requirement keyword against the outline text."""
    classifier = classifier or FrequencyClassifier()
    classification = classifier.classify(outline.full_text(), requirements)
    return build_gap_report(requirements, classification)


def is_in_prominent_section(outline: DocumentOutline, keyword: str) -> bool:
    """True when ``keyword`` occurs in an experience/skills/projects section body."""
    needle = keyword.lower()
    for section in outline.sections:
        title = section.title.lower()
        if any(name in title for name in PROMINENT_SECTIONS):
            if needle in " ".join(section.content).lower():
                return True
    return False
