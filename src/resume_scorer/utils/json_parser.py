"""Pull a JSON value out of free-form LLM output."""

from __future__ import annotations

import json
import re

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```\s*$", re.DOTALL)


def extract_json(text: str) -> dict | list:
    """Parse JSON from an LLM reply.

    Accepts a bare JSON document, one wrapped in a ```json fence, or one
    surrounded by prose (the outermost {...} or [...] span is tried).
    """
    text = text.strip()
    candidates = [text]

    fenced = _FENCE_RE.match(text)
    if fenced:
        candidates.append(fenced.group(1).strip())

    for source in list(candidates):
        for opener, closer in (("{", "}"), ("[", "]")):
            start, end = source.find(opener), source.rfind(closer)
            if start != -1 and end > start:
                candidates.append(source[start : end + 1])

    for candidate in candidates:
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(value, (dict, list)):
            return value

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")
