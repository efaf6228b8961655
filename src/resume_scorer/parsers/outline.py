"""Build a section outline from a parsed WordprocessingML tree.

Each body paragraph is classified by hand-written rules as a section header,
a bulleted item (with nesting level from its left indentation), or plain
content. Headers open sections; everything after a header up to the next one
belongs to it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Union

from resume_scorer.models.outline import BulletItem, DocumentOutline, OutlineMetadata, Section
from resume_scorer.parsers.markup import MarkupNode

logger = logging.getLogger(__name__)

# WordprocessingML tags
DOCUMENT = "w:document"
BODY = "w:body"
PARAGRAPH = "w:p"
PARAGRAPH_PROPS = "w:pPr"
INDENT = "w:ind"
RUN = "w:r"
TEXT = "w:t"
HYPERLINK = "w:hyperlink"

TWIPS_PER_LEVEL = 720  # 0.5 inch

SECTION_NAMES: tuple[str, ...] = (
    "experience",
    "education",
    "skills",
    "projects",
    "summary",
    "objective",
    "certifications",
    "awards",
    "work experience",
    "technical skills",
    "professional experience",
)

BULLET_GLYPHS: frozenset[str] = frozenset({"•", "·", "○", "■", "▪", "−", "-"})

NUMBERED_ITEM_RE = re.compile(r"^\d+\.")

HEADER_MIN_LENGTH = 3
HEADER_MAX_LENGTH = 50


# ---------------------------------------------------------------------------
# Paragraph classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Header:
    pass


@dataclass(frozen=True)
class Bullet:
    level: int = 0


@dataclass(frozen=True)
class PlainContent:
    pass


ParagraphKind = Union[Header, Bullet, PlainContent]


def is_section_header(text: str) -> bool:
    """Short line naming a known section, or a short all-caps line."""
    stripped = text.strip()
    if not HEADER_MIN_LENGTH <= len(stripped) <= HEADER_MAX_LENGTH:
        return False

    lower = stripped.lower()
    if any(lower == name or name in lower for name in SECTION_NAMES):
        return True

    return stripped == stripped.upper() and len(stripped) > 3


def is_bullet(text: str) -> bool:
    stripped = text.strip()
    if not stripped:
        return False
    return stripped[0] in BULLET_GLYPHS or NUMBERED_ITEM_RE.match(stripped) is not None


def classify_paragraph(text: str, level: int = 0) -> ParagraphKind:
    """Decide whether a paragraph is a header, a bullet or plain content.

    ``level`` is the paragraph's nesting depth and is only carried into the
    result for bullets.
    """
    if is_section_header(text):
        return Header()
    if is_bullet(text):
        return Bullet(level=max(level, 0))
    return PlainContent()


# ---------------------------------------------------------------------------
# Paragraph extraction
# ---------------------------------------------------------------------------


def _body_paragraphs(tree: MarkupNode) -> list[MarkupNode]:
    document = tree if tree.tag == DOCUMENT else tree.find_child(DOCUMENT)
    if document is None:
        logger.debug("No <%s> root, found <%s>", DOCUMENT, tree.tag)
        return []
    body = document.find_child(BODY)
    if body is None:
        logger.debug("No <%s> in document", BODY)
        return []
    return body.find_children(PARAGRAPH)


def _run_text(run: MarkupNode) -> str:
    return "".join(text_node.text() for text_node in run.find_children(TEXT))


def paragraph_text(paragraph: MarkupNode) -> str:
    """Concatenate the text of every run in the paragraph, untrimmed."""
    parts: list[str] = []
    for child in paragraph.elements():
        if child.tag == RUN:
            parts.append(_run_text(child))
        elif child.tag == HYPERLINK:
            parts.extend(_run_text(run) for run in child.find_children(RUN))
    return "".join(parts)


def indent_level(paragraph: MarkupNode, unit: int = TWIPS_PER_LEVEL) -> int:
    """Nesting depth from ``w:pPr/w:ind`` left indentation, 0 when unknown."""
    props = paragraph.find_child(PARAGRAPH_PROPS)
    indent = props.find_child(INDENT) if props is not None else None
    if indent is None:
        return 0

    raw = indent.get("w:left") or indent.get("w:start")
    if raw is None:
        return 0
    try:
        twips = int(raw.strip())
    except ValueError:
        logger.debug("Unparseable indentation %r, using level 0", raw)
        return 0
    return max(twips // unit, 0)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


@dataclass
class _SectionDraft:
    title: str
    content: list[str] = field(default_factory=list)
    bullets: list[BulletItem] = field(default_factory=list)

    def add(self, text: str, kind: ParagraphKind) -> None:
        self.content.append(text)
        if isinstance(kind, Bullet):
            self.bullets.append(
                BulletItem(text=text, level=kind.level, position=len(self.bullets))
            )

    def freeze(self, position: int) -> Section:
        return Section(
            title=self.title,
            content=self.content,
            bullets=self.bullets,
            position=position,
        )


class OutlineBuilder:
    """Walks body paragraphs in document order and assembles the outline.

    Args:
        keep_preamble: Collect paragraphs that appear before the first header
            into a leading section with an empty title instead of dropping them.
        indent_unit: Twips of left indentation per bullet nesting level.
    """

    def __init__(self, keep_preamble: bool = False, indent_unit: int = TWIPS_PER_LEVEL):
        self.keep_preamble = keep_preamble
        self.indent_unit = indent_unit

    def build(self, tree: MarkupNode) -> DocumentOutline:
        drafts: list[_SectionDraft] = []
        current: _SectionDraft | None = None
        word_count = 0
        dropped = 0

        for paragraph in _body_paragraphs(tree):
            text = paragraph_text(paragraph)
            if not text.strip():
                continue
            word_count += len(text.split())
            stripped = text.strip()

            kind = classify_paragraph(stripped, indent_level(paragraph, self.indent_unit))

            if isinstance(kind, Header):
                logger.debug("Section header: %r", stripped)
                current = _SectionDraft(title=stripped)
                drafts.append(current)
                continue

            if current is None:
                if not self.keep_preamble:
                    dropped += 1
                    continue
                current = _SectionDraft(title="")
                drafts.append(current)

            current.add(stripped, kind)

        if dropped:
            logger.debug("Dropped %d paragraph(s) before the first header", dropped)

        sections = [draft.freeze(position) for position, draft in enumerate(drafts)]
        outline = DocumentOutline(
            sections=sections,
            metadata=OutlineMetadata(total_sections=len(sections), word_count=word_count),
        )
        logger.info(
            "Outline built: %d sections (%s)",
            len(sections),
            ", ".join(s.title or "<preamble>" for s in sections),
        )
        return outline


def build_outline(
    tree: MarkupNode, *, keep_preamble: bool = False, indent_unit: int = TWIPS_PER_LEVEL
) -> DocumentOutline:
    return OutlineBuilder(keep_preamble=keep_preamble, indent_unit=indent_unit).build(tree)
