"""CLI commands."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pagescan import __version__
from pagescan.config.settings import settings
from pagescan.models.content import SemanticCategory
from pagescan.parser.extractor import filter_by_search
from pagescan.parser.tree_parser import LayoutError
from pagescan.report.formatter import OutputFormat, build_report, format_report
from pagescan.scanner.content_scanner import scan_page_content
from pagescan.seo.pipeline import extract_items
from pagescan.seo.scorer import compute_seo_score, get_seo_grade

app = typer.Typer(
    add_completion=False,
    help="pagescan - SEO content scanner for headless CMS page trees",
)
console = Console()

_GRADE_COLORS = {"A+": "green", "A": "green", "B": "blue", "C": "yellow", "D": "red", "F": "red"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e.msg} (line {e.lineno})") from e


def _load_datasources(path: Path | None) -> dict | None:
    if path is None:
        return None
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain an object keyed by datasource reference")
    return data


@app.command()
def scan(
    source: Path = typer.Argument(..., help="JSON page context or item response"),
    output: str = typer.Option(
        "cli",
        "--output",
        "-o",
        help="Output format: cli, json, markdown",
    ),
    save: str | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Save report to file",
    ),
    datasources: Path | None = typer.Option(
        None,
        "--datasources",
        help="JSON object of fetched datasource items keyed by reference",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed scan information",
    ),
) -> None:
    """Scan a page for SEO issues.

    Examples:
        pagescan scan page.json
        pagescan scan page.json -o json
        pagescan scan page.json --datasources ds.json -o markdown -s report.md
    """
    if output not in ("cli", "json", "markdown"):
        console.print(f"[red]Error:[/red] Invalid output format '{escape(output)}'. Use cli, json, or markdown.")
        raise typer.Exit(1)

    output_format: OutputFormat = output  # type: ignore
    _configure_logging(verbose)

    if output_format == "cli":
        console.print(Panel.fit(
            f"[bold cyan]pagescan[/bold cyan]\n[dim]Scanning:[/dim] {escape(str(source))}",
            border_style="cyan",
        ))

    try:
        with console.status("[bold blue]Building component tree...", spinner="dots"):
            page, items = extract_items(_read_json(source), _load_datasources(datasources))

        if verbose:
            console.print(f"[dim]{len(items)} semantic items from {escape(page.name)}[/dim]")

        with console.status("[bold blue]Scanning content...", spinner="dots"):
            result = compute_seo_score(scan_page_content(page, items))

        report = format_report(build_report(page, result), output_format)
    except (ValueError, LayoutError) as e:
        console.print(f"\n[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if save:
        save_path = Path(save)
        save_path.write_text(report, encoding="utf-8")
        console.print(f"\n[green]Report saved to:[/green] {escape(str(save_path))}")
    elif output_format == "cli":
        console.print("")
        console.print(report)
    else:
        # JSON/Markdown - print raw
        console.print(report, markup=False, highlight=False, soft_wrap=True)


@app.command()
def check(
    source: Path = typer.Argument(..., help="JSON page context or item response"),
) -> None:
    """Quick check - prints only the score and grade.

    Exits with status 1 for grade D or F.
    """
    _configure_logging(False)
    try:
        page, items = extract_items(_read_json(source))
        result = compute_seo_score(scan_page_content(page, items))
    except (ValueError, LayoutError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    grade = get_seo_grade(result.seo_score)
    color = _GRADE_COLORS.get(grade, "white")
    console.print(f"[{color}]{grade}[/{color}] ({result.seo_score}/100) - {escape(page.name)}")

    if grade in ("D", "F"):
        raise typer.Exit(1)


@app.command()
def items(
    source: Path = typer.Argument(..., help="JSON page context or item response"),
    category: str | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Only show items of this category (e.g. Heading, Link)",
    ),
    search: str | None = typer.Option(
        None,
        "--search",
        "-q",
        help="Case-insensitive text, component, field or category match",
    ),
) -> None:
    """List the semantic text items of a page in document order."""
    wanted = None
    if category:
        wanted = SemanticCategory.from_name(category)
        if wanted is None:
            choices = ", ".join(c.value for c in SemanticCategory)
            console.print(f"[red]Error:[/red] Unknown category '{escape(category)}'. Use one of: {choices}")
            raise typer.Exit(1)

    _configure_logging(False)
    try:
        page, found = extract_items(_read_json(source))
    except (ValueError, LayoutError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    found = filter_by_search(found, search)
    if wanted is not None:
        found = [item for item in found if item.category is wanted]

    table = Table(title=Text(f"{page.name} ({len(found)} items)"))
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Field")
    table.add_column("Text")
    table.add_column("Path", style="dim")
    for item in found:
        text = item.text if len(item.text) <= 80 else item.text[:77] + "..."
        table.add_row(
            item.category.value,
            Text(item.metadata.field_name),
            Text(text),
            Text(" > ".join(item.path)),
        )

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]pagescan[/bold] v{__version__}")
    console.print("[dim]SEO content scanner for headless CMS pages[/dim]")


if __name__ == "__main__":
    app()
