"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from resume_scorer.analysis.tokenizer import extract_technical_keywords
from resume_scorer.clients.llm_client import LLMClient
from resume_scorer.config import AppConfig, ParserConfig, load_config
from resume_scorer.exceptions import ResumeScorerError
from resume_scorer.parsers.container import DOCUMENT_ENTRY, list_entries
from resume_scorer.parsers.requirements_parser import load_requirements_file
from resume_scorer.parsers.resume_parser import parse_resume
from resume_scorer.pipeline.orchestrator import AnalysisPipeline
from resume_scorer.pipeline.semantic_classifier import LLMKeywordClassifier

app = typer.Typer(
    name="resume-scorer",
    help="DOCX resume outline extraction, keyword gap analysis and ATS scoring",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _require_file(path: Path, what: str) -> None:
    if not path.exists():
        console.print(f"[red]{what} not found: {path}[/red]")
        raise typer.Exit(1)


def _load_config() -> AppConfig:
    try:
        return load_config()
    except ValueError as e:
        console.print(f"[red]Invalid config: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def outline(
    file: Path = typer.Argument(help="Resume .docx file"),
    as_json: bool = typer.Option(False, "--json", help="Print the outline as JSON"),
    keep_preamble: bool = typer.Option(
        None, "--keep-preamble/--drop-preamble", help="Keep text before the first header"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Print the section outline of a resume."""
    _setup_logging(verbose)
    _require_file(file, "Resume file")

    config = _load_config()
    parser_config = config.parser
    if keep_preamble is not None:
        parser_config = ParserConfig(
            keep_preamble=keep_preamble, indent_unit=parser_config.indent_unit
        )

    try:
        result = parse_resume(file, parser_config)
    except (ResumeScorerError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(result.model_dump_json(by_alias=True))
        return

    if not result.sections:
        console.print("[yellow]No sections detected.[/yellow]")
        return

    for section in result.sections:
        lines = []
        bullet_iter = iter(section.bullets)
        next_bullet = next(bullet_iter, None)
        for line in section.content:
            if next_bullet is not None and next_bullet.text == line:
                lines.append("  " * next_bullet.level + f"[cyan]{escape(line)}[/cyan]")
                next_bullet = next(bullet_iter, None)
            else:
                lines.append(escape(line))
        console.print(
            Panel(
                "\n".join(lines) or "[dim](empty)[/dim]",
                title=f"{section.position}. {escape(section.title) or '(preamble)'}",
                subtitle=f"{len(section.content)} lines, {len(section.bullets)} bullets",
            )
        )
    console.print(
        f"[dim]{result.metadata.total_sections} sections, "
        f"{result.metadata.word_count} words[/dim]"
    )


@app.command()
def keywords(
    file: Path = typer.Argument(help="Resume .docx file"),
) -> None:
    """List the technical keywords found in a resume."""
    _setup_logging(False)
    _require_file(file, "Resume file")
    try:
        result = parse_resume(file, _load_config().parser)
    except (ResumeScorerError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    found = sorted(extract_technical_keywords(result.full_text()))
    if not found:
        console.print("[yellow]No technical keywords found.[/yellow]")
        return
    console.print(f"[bold]Technical keywords ({len(found)}):[/bold]")
    for kw in found:
        console.print(f"  {kw}")


@app.command()
def analyze(
    file: Path = typer.Argument(help="Resume .docx file"),
    requirements: Path = typer.Option(
        ..., "--requirements", "-r", help="Requirements file (.json/.yaml)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the reports as JSON"),
    llm: bool = typer.Option(False, "--llm", help="Classify keywords with Claude"),
    timeout: float = typer.Option(None, "--timeout", help="Seconds allowed for parsing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run gap analysis and ATS scoring for a resume."""
    _setup_logging(verbose)
    _require_file(file, "Resume file")
    _require_file(requirements, "Requirements file")

    config = _load_config()
    try:
        reqs = load_requirements_file(requirements)
    except ValueError as e:
        console.print(f"[red]Invalid requirements: {e}[/red]")
        raise typer.Exit(1)

    client = None
    classifier = None
    if llm:
        client = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
        classifier = LLMKeywordClassifier(client, model=config.llm.model)
    pipeline = AnalysisPipeline(config, classifier=classifier)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Analyzing...", total=None)

        def on_phase(phase: str, detail: str) -> None:
            progress.update(task, description=detail)

        try:
            result = asyncio.run(
                pipeline.run(file, reqs, timeout=timeout, on_phase=on_phase)
            )
        except TimeoutError:
            console.print(f"[red]Parsing timed out after {timeout}s[/red]")
            raise typer.Exit(1)
        except (ResumeScorerError, ValueError) as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    usage = client.get_token_summary() if client is not None else None

    if as_json:
        payload = {
            "gapAnalysis": result.gap.model_dump(by_alias=True),
            "atsScore": result.score.model_dump(by_alias=True),
            "parsedResume": result.outline.model_dump(by_alias=True),
        }
        if usage is not None:
            payload["tokenUsage"] = {"input": usage["input"], "output": usage["output"]}
        console.print_json(json.dumps(payload, default=str))
        return

    gap = result.gap
    table = Table(title="Keyword gaps")
    table.add_column("Keyword")
    table.add_column("Requirement")
    table.add_column("Status")
    styles = {"present": "green", "weak": "yellow", "missing": "red"}
    status = {k: "present" for k in gap.present}
    status.update({k: "weak" for k in gap.weak})
    status.update({k: "missing" for k in gap.missing})
    for kw in reqs.all_keywords():
        kind = "must-have" if kw in reqs.must_have else "nice-to-have"
        s = status[kw]
        table.add_row(kw, kind, f"[{styles[s]}]{s}[/{styles[s]}]")
    console.print(table)

    cov = gap.coverage
    console.print(
        Panel(
            f"Must-have: {cov.must_have_percent}% | Nice-to-have: {cov.nice_to_have_percent}% | "
            f"[bold]Overall: {cov.overall}%[/bold]",
            title="Coverage",
        )
    )

    score = result.score
    b = score.breakdown
    score_color = "green" if score.after >= 70 else "yellow"
    console.print(
        Panel(
            f"Keywords: {b.keyword_match} | Sections: {b.section_coverage} | "
            f"Action verbs: {b.action_verbs} | Format: {b.format_quality} | "
            f"[bold {score_color}]Total: {score.after}[/bold {score_color}]"
            + f"\nClassifier: {result.metadata['classifier']}"
            + f"\nElapsed: {result.elapsed_seconds:.1f}s",
            title="ATS score",
        )
    )
    if usage is not None:
        console.print(
            f"[dim]Tokens: {usage['input']:,} in / {usage['output']:,} out "
            f"({len(usage['calls'])} calls)[/dim]"
        )


@app.command()
def inspect(
    file: Path = typer.Argument(help="Document container to inspect"),
) -> None:
    """List the entries of a .docx container."""
    _require_file(file, "File")
    try:
        entries = list_entries(file)
    except ResumeScorerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Entries ({len(entries)}):[/bold]")
    for name in entries:
        marker = " [green]<- body[/green]" if name == DOCUMENT_ENTRY else ""
        console.print(f"  {name}{marker}")
    if DOCUMENT_ENTRY not in entries:
        console.print(f"[yellow]{DOCUMENT_ENTRY} is missing; this is not a Word document.[/yellow]")


if __name__ == "__main__":
    app()
