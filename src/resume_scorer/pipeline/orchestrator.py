"""Main pipeline orchestrator - parse, gap analysis and scoring for one document."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from resume_scorer.analysis.gap_analyzer import (
    FrequencyClassifier,
    KeywordClassifier,
    build_gap_report,
)
from resume_scorer.analysis.scorer import calculate_score
from resume_scorer.config import AppConfig
from resume_scorer.exceptions import InvalidClassificationError
from resume_scorer.models.outline import DocumentOutline
from resume_scorer.models.report import GapReport, KeywordClassification, ScoreReport
from resume_scorer.models.requirements import RequirementSet
from resume_scorer.parsers.resume_parser import parse_resume

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Complete result of analyzing one resume."""

    outline: DocumentOutline
    gap: GapReport
    score: ScoreReport
    elapsed_seconds: float = 0.0
    metadata: dict = field(default_factory=dict)


class AnalysisPipeline:
    """Runs parse -> gap analysis -> scoring for a single document.

    The pipeline holds no per-document state, so one instance may analyze
    several documents concurrently.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        classifier: KeywordClassifier | None = None,
    ):
        self.config = config or AppConfig()
        self.frequency_classifier = FrequencyClassifier(
            present_threshold=self.config.analysis.present_threshold
        )
        self.classifier = classifier

    async def _classify(
        self, classifier: KeywordClassifier, full_text: str, requirements: RequirementSet
    ) -> KeywordClassification:
        classify_async = getattr(classifier, "classify_async", None)
        if classify_async is not None:
            return await classify_async(full_text, requirements)
        return classifier.classify(full_text, requirements)

    async def analyze_gap(
        self, outline: DocumentOutline, requirements: RequirementSet
    ) -> tuple[GapReport, str]:
        """Gap report plus the name of the classifier that produced it."""
        full_text = outline.full_text()
        if self.classifier is None:
            classification = self.frequency_classifier.classify(full_text, requirements)
            return build_gap_report(requirements, classification), "frequency"

        classification = await self._classify(self.classifier, full_text, requirements)
        try:
            return build_gap_report(requirements, classification), "delegated"
        except InvalidClassificationError as exc:
            if not self.config.analysis.fallback_to_frequency:
                raise
            logger.warning("Delegated classifier rejected (%s); using frequency counts", exc)
            classification = self.frequency_classifier.classify(full_text, requirements)
            return build_gap_report(requirements, classification), "frequency"

    async def run(
        self,
        resume_path: str | Path,
        requirements: RequirementSet,
        *,
        timeout: float | None = None,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> AnalysisResult:
        """Parse ``resume_path`` and score it against ``requirements``.

        Args:
            resume_path: Path to the .docx resume.
            requirements: Must-have / nice-to-have keyword maps.
            timeout: Seconds allowed for reading and parsing the document.
            on_phase: Optional callback(phase_name, detail) for progress.

        Raises:
            TimeoutError: parsing did not finish within ``timeout``.
        """
        start = time.monotonic()

        def _notify(phase: str, detail: str) -> None:
            if on_phase:
                on_phase(phase, detail)

        _notify("parse", "Reading document...")
        outline = await asyncio.wait_for(
            asyncio.to_thread(parse_resume, resume_path, self.config.parser),
            timeout=timeout,
        )

        _notify("gap", "Analyzing keyword gaps...")
        gap, classifier_name = await self.analyze_gap(outline, requirements)

        _notify("score", "Scoring compatibility...")
        score = calculate_score(outline, requirements)

        elapsed = time.monotonic() - start
        _notify("done", f"Done ({elapsed:.1f}s)")
        return AnalysisResult(
            outline=outline,
            gap=gap,
            score=score,
            elapsed_seconds=elapsed,
            metadata={"classifier": classifier_name, "file": Path(resume_path).name},
        )

    def run_sync(
        self,
        resume_path: str | Path,
        requirements: RequirementSet,
        *,
        timeout: float | None = None,
    ) -> AnalysisResult:
        """Synchronous wrapper for run."""
        return asyncio.run(self.run(resume_path, requirements, timeout=timeout))
