"""Pydantic models for the document outline produced by the parser."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BulletItem(BaseModel):
    text: str  # full normalized line, glyph included
    level: int = Field(default=0, ge=0)
    position: int = Field(ge=0)  # ordinal within the section's bullet list

    model_config = {"frozen": True}


class Section(BaseModel):
    title: str
    content: list[str] = []
    bullets: list[BulletItem] = []
    position: int = Field(ge=0)

    model_config = {"frozen": True}


class OutlineMetadata(BaseModel):
    total_sections: int = Field(default=0, alias="totalSections")
    word_count: int = Field(default=0, alias="wordCount")  # every non-empty paragraph

    model_config = {"frozen": True, "populate_by_name": True}


class DocumentOutline(BaseModel):
    sections: list[Section] = []
    metadata: OutlineMetadata = Field(default_factory=OutlineMetadata)

    model_config = {"frozen": True}

    def full_text(self) -> str:
        """Section titles and content flattened into one space-joined string."""
        return " ".join(
            f"{section.title} {' '.join(section.content)}" for section in self.sections
        )

    def section_titles(self) -> list[str]:
        return [section.title for section in self.sections]

    def bullet_count(self) -> int:
        return sum(len(section.bullets) for section in self.sections)

    def content_line_count(self) -> int:
        return sum(len(section.content) for section in self.sections)
