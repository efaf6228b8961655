"""ATS compatibility scoring.

Scoring breakdown:
- Keyword match: 40%
- Section coverage: 30%
- Action verbs: 20%
- Format quality: 10%
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from resume_scorer.analysis.gap_analyzer import round_half_up
from resume_scorer.analysis.tokenizer import count_keyword, normalize
from resume_scorer.models.outline import DocumentOutline
from resume_scorer.models.report import ScoreBreakdown, ScoreReport
from resume_scorer.models.requirements import RequirementSet

logger = logging.getLogger(__name__)

WEIGHTS: dict[str, float] = {
    "keyword_match": 0.40,
    "section_coverage": 0.30,
    "action_verbs": 0.20,
    "format_quality": 0.10,
}

REQUIRED_SECTIONS: tuple[str, ...] = ("experience", "education", "skills")

ACTION_VERBS: frozenset[str] = frozenset({
    "achieved", "administered", "analyzed", "architected", "automated",
    "built", "collaborated", "created", "delivered", "designed",
    "developed", "engineered", "established", "executed", "implemented",
    "improved", "increased", "launched", "led", "managed", "optimized",
    "organized", "pioneered", "reduced", "resolved", "streamlined",
    "transformed", "upgraded",
})

METRIC_RE = re.compile(r"\d+%|\d+\+|\d+x|\$\d+")

IDEAL_WORD_RANGE = (800, 1500)
ACCEPTABLE_WORD_RANGE = (500, 2000)


@dataclass(frozen=True)
class Defined:
    value: float


@dataclass(frozen=True)
class Undefined:
    reason: str = ""


Ratio = Union[Defined, Undefined]


def keyword_match_score(outline: DocumentOutline, requirements: RequirementSet) -> float:
    """Percent of requirement keywords that occur at least once; 0 with no keywords."""
    full_text = outline.full_text()
    normalized = normalize(full_text)
    keywords = [k.lower().strip() for k in requirements.all_keywords()]
    if not keywords:
        return 0.0
    matched = sum(1 for k in keywords if count_keyword(full_text, k, normalized) > 0)
    return matched / len(keywords) * 100


def section_coverage_score(outline: DocumentOutline) -> float:
    titles = " ".join(title.lower() for title in outline.section_titles())
    found = sum(1 for name in REQUIRED_SECTIONS if name in titles)
    return found / len(REQUIRED_SECTIONS) * 100


def count_action_verbs(text: str) -> int:
    return sum(1 for word in text.lower().split() if word in ACTION_VERBS)


def action_verb_ratio(outline: DocumentOutline) -> Ratio:
    """Action verbs per expected verb (one per two content lines), capped at 100.

    Every content line counts toward the expectation, not just flagged bullets.
    Returns ``Undefined`` when the outline has no content lines.
    """
    expected = outline.content_line_count() / 2
    if expected == 0:
        return Undefined("no content lines")
    verbs = count_action_verbs(outline.full_text())
    return Defined(min(verbs / expected * 100, 100.0))


def format_quality_score(outline: DocumentOutline) -> float:
    score = 0.0
    if any(section.bullets for section in outline.sections):
        score += 40

    text = outline.full_text()
    if METRIC_RE.search(text):
        score += 30

    word_count = len(text.split())
    if IDEAL_WORD_RANGE[0] <= word_count <= IDEAL_WORD_RANGE[1]:
        score += 30
    elif ACCEPTABLE_WORD_RANGE[0] <= word_count <= ACCEPTABLE_WORD_RANGE[1]:
        score += 15
    return score


def resolve_ratio(ratio: Ratio, default: float = 0.0) -> float:
    if isinstance(ratio, Defined):
        return ratio.value
    logger.warning("Action verb ratio undefined (%s); using %s", ratio.reason, default)
    return default


def calculate_score(outline: DocumentOutline, requirements: RequirementSet) -> ScoreReport:
    """Compute the 0-100 composite score and its four sub-scores."""
    keyword_match = keyword_match_score(outline, requirements)
    section_coverage = section_coverage_score(outline)
    action_verbs = resolve_ratio(action_verb_ratio(outline))
    format_quality = format_quality_score(outline)

    total = (
        keyword_match * WEIGHTS["keyword_match"]
        + section_coverage * WEIGHTS["section_coverage"]
        + action_verbs * WEIGHTS["action_verbs"]
        + format_quality * WEIGHTS["format_quality"]
    )
    report = ScoreReport(
        after=round_half_up(total),
        breakdown=ScoreBreakdown(
            keyword_match=round_half_up(keyword_match),
            section_coverage=round_half_up(section_coverage),
            action_verbs=round_half_up(action_verbs),
            format_quality=round_half_up(format_quality),
        ),
    )
    logger.info("ATS score: %d", report.after)
    return report


def compare_scores(
    baseline: DocumentOutline, revised: DocumentOutline, requirements: RequirementSet
) -> ScoreReport:
    """Score ``revised`` and record the score of ``baseline`` as ``before``."""
    before = calculate_score(baseline, requirements)
    after = calculate_score(revised, requirements)
    return after.model_copy(update={"before": before.after})
