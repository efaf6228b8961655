"""Shared test fixtures."""

from __future__ import annotations

import zipfile
from pathlib import Path
from unittest.mock import AsyncMock
from xml.sax.saxutils import escape

import pytest

from resume_scorer.clients.llm_client import LLMClient, LLMResponse
from resume_scorer.models.outline import BulletItem, DocumentOutline, Section
from resume_scorer.models.requirements import RequirementSet

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def _paragraph_xml(item: str | tuple[str, object] | list[str]) -> str:
    """Render one test paragraph.

    - "text": a single run
    - ("text", indent): a single run with w:ind w:left=indent
    - ["run1", "run2"]: several runs, no indentation
    """
    props = ""
    if isinstance(item, tuple):
        text, indent = item
        runs = [text]
        props = f'<w:pPr><w:ind w:left="{indent}"/></w:pPr>'
    elif isinstance(item, list):
        runs = item
    else:
        runs = [item]
    body = "".join(
        f'<w:r><w:t xml:space="preserve">{escape(run)}</w:t></w:r>' for run in runs
    )
    return f"<w:p>{props}{body}</w:p>"


def build_document_xml(paragraphs: list) -> str:
    body = "".join(_paragraph_xml(p) for p in paragraphs)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}<w:sectPr/></w:body></w:document>'
    )


def write_container(path: Path, entries: dict[str, str]) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


@pytest.fixture
def docx_factory(tmp_path):
    """Write a minimal .docx built from paragraph specs and return its path."""
    counter = iter(range(1000))

    def _make(paragraphs: list, name: str | None = None) -> Path:
        path = tmp_path / (name or f"resume_{next(counter)}.docx")
        return write_container(path, {"word/document.xml": build_document_xml(paragraphs)})

    return _make


@pytest.fixture
def sample_paragraphs() -> list:
    return [
        "Jane Doe",
        "jane@example.com | github.com/janedoe",
        "Summary",
        "Backend engineer with 6+ years building Python services.",
        "WORK EXPERIENCE",
        "Acme Corp - Senior Engineer",
        ("• Built REST APIs in Python and Django serving 2M requests/day", 720),
        ("• Reduced p99 latency by 40% with Redis caching", 720),
        ("- Mentored two junior engineers", 1440),
        "Education",
        "B.S. Computer Science, State University",
        "Technical Skills",
        "Python, Django, PostgreSQL, Docker, AWS",
    ]


@pytest.fixture
def sample_docx(docx_factory, sample_paragraphs) -> Path:
    return docx_factory(sample_paragraphs, name="sample.docx")


@pytest.fixture
def sample_outline() -> DocumentOutline:
    return DocumentOutline(
        sections=[
            Section(
                title="Experience",
                content=[
                    "• Developed Python microservices on AWS",
                    "• Improved throughput by 3x",
                    "Maintained legacy Java code",
                ],
                bullets=[
                    BulletItem(text="• Developed Python microservices on AWS", level=0, position=0),
                    BulletItem(text="• Improved throughput by 3x", level=0, position=1),
                ],
                position=0,
            ),
            Section(title="Education", content=["B.S. Computer Science"], position=1),
            Section(title="Skills", content=["Python, AWS, Docker, Python"], position=2),
        ]
    )


@pytest.fixture
def sample_requirements() -> RequirementSet:
    return RequirementSet(
        must_have={
            "Python": "Build backend services",
            "AWS": "Deploy to the cloud",
            "Kubernetes": "Operate clusters",
        },
        nice_to_have={
            "Docker": "Containerize services",
            "GraphQL": "",
        },
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client
