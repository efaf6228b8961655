"""Error taxonomy for container reading, markup parsing and keyword analysis."""

from __future__ import annotations

from pathlib import Path


class ResumeScorerError(Exception):
    """Base class for all errors raised by resume_scorer."""


# ---------------------------------------------------------------------------
# Container
# ---------------------------------------------------------------------------


class ContainerError(ResumeScorerError):
    """The document container could not be read.

    Attributes:
        path: Path of the container that failed
        entry: Archive member that was requested, if any
    """

    def __init__(self, message: str, path: str | Path | None = None, entry: str | None = None):
        self.message = message
        self.path = Path(path) if path is not None else None
        self.entry = entry

        parts = [message]
        if self.path is not None:
            parts.append(f"file: {self.path}")
        if entry:
            parts.append(f"entry: {entry}")
        super().__init__(" | ".join(parts))


class ContainerNotFoundError(ContainerError):
    """The archive opened fine but the body markup entry is absent."""


class ContainerCorruptError(ContainerError):
    """The file is missing or is not a valid ZIP archive."""


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


class MarkupError(ResumeScorerError):
    """Base class for markup parsing failures."""


class MarkupMalformedError(MarkupError):
    """The markup stream could not be parsed into a tree.

    Attributes:
        line: 1-based line of the failure when the parser reports one
        snippet: Leading part of the offending markup
    """

    def __init__(self, message: str, line: int | None = None, snippet: str | None = None):
        self.message = message
        self.line = line
        self.snippet = snippet

        parts = [message]
        if line is not None:
            parts.append(f"(line {line})")
        if snippet:
            short = snippet[:120] + "..." if len(snippet) > 120 else snippet
            parts.append(f"\nMarkup: {short}")
        super().__init__(" ".join(parts))


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


class AnalysisError(ResumeScorerError):
    """Base class for keyword analysis failures."""


class InvalidClassificationError(AnalysisError):
    """A keyword classifier broke the present/weak/missing partition.

    Attributes:
        unknown: Keywords returned that are not in the requirement set
        omitted: Requirement keywords the classifier did not return
        duplicated: Keywords placed in more than one bucket
    """

    def __init__(
        self,
        message: str,
        unknown: list[str] | None = None,
        omitted: list[str] | None = None,
        duplicated: list[str] | None = None,
    ):
        self.message = message
        self.unknown = unknown or []
        self.omitted = omitted or []
        self.duplicated = duplicated or []

        parts = [message]
        if self.unknown:
            parts.append(f"unknown: {', '.join(self.unknown)}")
        if self.omitted:
            parts.append(f"omitted: {', '.join(self.omitted)}")
        if self.duplicated:
            parts.append(f"duplicated: {', '.join(self.duplicated)}")
        super().__init__("; ".join(parts))
