"""LLM-backed keyword classifier - buckets requirement keywords by meaning."""

from __future__ import annotations

import asyncio
import json
import logging

from resume_scorer.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_scorer.exceptions import InvalidClassificationError
from resume_scorer.models.report import KeywordClassification
from resume_scorer.models.requirements import RequirementSet

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert technical recruiter reviewing a resume against job requirements.

For every skill keyword you are given, decide how well the resume demonstrates it:
- present: clearly and repeatedly demonstrated with concrete work
- weak: mentioned or implied, but thinly supported
- missing: not demonstrated anywhere in the resume

Respond ONLY with JSON in exactly this format:
{
  "present": ["keyword", ...],
  "weak": ["keyword", ...],
  "missing": ["keyword", ...]
}

Rules:
- Use each keyword string exactly as given; do not rename, merge or add keywords
- Every keyword must appear in exactly one list
- Judge only from the resume text; do not assume unstated experience"""


class LLMKeywordClassifier:
    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL):
        self.llm = llm
        self.model = model

    async def classify_async(
        self, full_text: str, requirements: RequirementSet
    ) -> KeywordClassification:
        """Ask the LLM to bucket every requirement keyword."""
        prompt = f"""Must-have skills (keyword: role description):
{json.dumps(requirements.must_have, indent=2, ensure_ascii=False)}

Nice-to-have skills (keyword: role description):
{json.dumps(requirements.nice_to_have, indent=2, ensure_ascii=False)}

Resume:
---
{full_text}
---

Respond with JSON only."""

        data = await self.llm.generate_json(
            prompt=prompt,
            system=SYSTEM_PROMPT,
            model=self.model,
        )
        if not isinstance(data, dict):
            raise InvalidClassificationError(
                f"Expected a JSON object from LLM, got {type(data).__name__}"
            )

        buckets: dict[str, list[str]] = {}
        for bucket in ("present", "weak", "missing"):
            values = data.get(bucket, [])
            if not isinstance(values, list):
                raise InvalidClassificationError(
                    f"'{bucket}' must be a list, got {type(values).__name__}"
                )
            buckets[bucket] = [str(v) for v in values]

        logger.debug(
            "LLM classification: %s",
            {name: len(values) for name, values in buckets.items()},
        )
        return KeywordClassification(**buckets)

    def classify(self, full_text: str, requirements: RequirementSet) -> KeywordClassification:
        """Synchronous wrapper for classify_async."""
        return asyncio.run(self.classify_async(full_text, requirements))
