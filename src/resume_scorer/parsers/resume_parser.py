from __future__ import annotations

import logging
from pathlib import Path

from resume_scorer.config import ParserConfig
from resume_scorer.models.outline import DocumentOutline
from resume_scorer.parsers.container import read_document_xml
from resume_scorer.parsers.markup import parse_markup
from resume_scorer.parsers.outline import OutlineBuilder

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".docx",)


def parse_resume(file_path: str | Path, config: ParserConfig | None = None) -> DocumentOutline:
    """Parse a DOCX resume into its section outline.

    Either the complete outline is returned or an error propagates; container
    and markup errors are never swallowed.
    """
    path = Path(file_path)
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file format: {path.suffix}")

    config = config or ParserConfig()
    logger.info("Parsing resume: %s", path.name)

    markup = read_document_xml(path)
    tree = parse_markup(markup)
    builder = OutlineBuilder(
        keep_preamble=config.keep_preamble,
        indent_unit=config.indent_unit,
    )
    return builder.build(tree)
