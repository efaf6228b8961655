"""Text normalization, keyword counting and technical keyword extraction.

Everything here is a pure function over strings; the lexical tables are
module-level constants.
"""

from __future__ import annotations

import re

STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
    "to", "was", "will", "with", "i", "we", "you", "this", "have", "had",
})

# Ordered pattern families: languages, frameworks, databases, cloud/devops, tools
TECH_KEYWORD_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(
        r"\b(javascript|typescript|python|java|c\+\+|c#|ruby|go|rust|php|swift|kotlin)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(react|angular|vue|node\.?js|express|django|flask|spring|\.net|rails)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(postgresql|mysql|mongodb|redis|elasticsearch|dynamodb|sql|nosql)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(aws|azure|gcp|docker|kubernetes|ci/cd|jenkins|github\s*actions)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(git|jira|figma|postman|webpack|vite|prisma)\b", re.IGNORECASE),
)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_TOKEN_SPLIT_RE = re.compile(r"[^a-z0-9#+.]+")
_NON_WORD_RE = re.compile(r"[^a-z0-9]")


def normalize(text: str) -> str:
    """Lowercase, turn punctuation into spaces and collapse whitespace."""
    text = _NON_ALNUM_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def keyword_frequency(text: str, keyword: str) -> int:
    """Count non-overlapping, case-insensitive substring occurrences.

    This is a substring count, not a whole-word count: "java" is found
    inside "javascript".
    """
    needle = keyword.lower()
    if not needle:
        return 0
    return text.lower().count(needle)


def count_keyword(text: str, keyword: str, normalized_text: str | None = None) -> int:
    """Occurrences of a requirement keyword in raw resume text.

    Punctuated names such as "Node.js" or "CI/CD" are matched in normalized
    form ("node js") so they line up with normalized text. Keywords whose
    normalized form would lose characters or collapse into a different token
    ("C++" -> "c", ".NET" -> "net") are counted verbatim against the
    lower-cased text instead.
    """
    raw = keyword.strip().lower()
    folded = normalize(raw)
    if " " in folded and folded.replace(" ", "") == _NON_WORD_RE.sub("", raw):
        if normalized_text is None:
            normalized_text = normalize(text)
        return keyword_frequency(normalized_text, folded)
    return keyword_frequency(text, raw)


def tokenize(text: str) -> list[str]:
    """Split into lowercase word tokens, dropping stop words and 1-char tokens."""
    return [
        word
        for word in _TOKEN_SPLIT_RE.split(text.lower())
        if len(word) > 1 and word not in STOP_WORDS
    ]


def extract_ngrams(text: str, n: int = 2) -> list[str]:
    """Whitespace n-grams, skipping those made only of stop words."""
    words = text.lower().split()
    ngrams: list[str] = []
    for i in range(len(words) - n + 1):
        window = words[i : i + n]
        if not all(w in STOP_WORDS for w in window):
            ngrams.append(" ".join(window))
    return ngrams


def extract_technical_keywords(text: str) -> set[str]:
    """Collect every distinct technology name matched by the pattern families."""
    keywords: set[str] = set()
    for pattern in TECH_KEYWORD_PATTERNS:
        for match in pattern.finditer(text):
            keywords.add(match.group(0).lower())
    return keywords
