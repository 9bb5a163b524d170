"""Report formatting utilities."""
from __future__ import annotations

import json
from typing import Literal

from rich.markup import escape

from pagescan.models.content import PageContent
from pagescan.models.seo import ScanResult
from pagescan.seo.scorer import get_score_label, get_seo_grade

OutputFormat = Literal["cli", "json", "markdown"]

# Issue key to human-readable message mapping
_ISSUE_MESSAGES = {
    "missing_meta_description": "Page has no meta description",
    "title_too_long": "Title is longer than 60 characters",
    "description_too_long": "Meta description is longer than 165 characters",
    "missing_h1": "Page has no H1 heading",
    "short_content": "Body text is shorter than 250 words",
    "low_readability": "Content readability is low",
    "weak_alt_text": "Images with missing or weak alt text",
    "missing_images": "Page has no images",
    "placeholder_links": "Placeholder links",
    "broken_links": "Broken or suspicious links",
    "too_many_links": "Page has more than 100 links",
    "no_internal_links": "No internal links found",
}

# Issues that are advisory rather than a problem with existing content
_WARNING_ISSUES = frozenset({"missing_images", "no_internal_links", "low_readability", "short_content"})

_BREAKDOWN_LABELS = {
    "metadata": "Metadata",
    "content": "Content",
    "accessibility": "Accessibility",
    "links": "Links",
}

_LABEL_COLORS = {"good": "green", "moderate": "yellow", "poor": "red"}

_SEVERITY_RANK = {"critical": 0, "warning": 1, "info": 2}
_SEVERITY_COLORS = {"critical": "red", "warning": "yellow", "info": "blue"}


def build_report(page: PageContent, result: ScanResult) -> dict:
    """Combine page identity and a scan result into one serializable dict."""
    return {
        "page": {
            "item_id": page.item_id,
            "name": page.name,
            "language": page.language,
            "path": page.path,
        },
        "grade": get_seo_grade(result.seo_score),
        **result.to_dict(),
    }


def format_report(results: dict, output: OutputFormat = "cli") -> str:
    """Format scan results for output.

    Args:
        results: Report dict from ``build_report``
        output: Output format - 'cli', 'json', or 'markdown'

    Returns:
        Formatted string representation of results
    """
    if output == "json":
        return _format_json(results)
    elif output == "markdown":
        return _format_markdown(results)
    else:
        return _format_cli(results)


def _format_json(results: dict) -> str:
    return json.dumps(results, ensure_ascii=False, indent=2)


def _recommended_fixes(results: dict) -> list[dict]:
    """Audits that carry a recommendation, most severe first."""
    fixes = [a for a in results.get("audits", []) if a.get("recommendation")]
    return sorted(fixes, key=lambda a: _SEVERITY_RANK.get(a.get("severity"), len(_SEVERITY_RANK)))


def _issue_lines(issues: dict, quote=str) -> tuple[list[str], list[str]]:
    """Split issues into (problems, warnings) message lines.

    ``quote`` is applied to listed hrefs and ids before they are joined.
    """
    problems, warnings = [], []
    for key, value in issues.items():
        msg = _ISSUE_MESSAGES.get(key, key)
        if isinstance(value, list):
            msg = f"{msg}: {', '.join(quote(str(v)) for v in value)}"
        (warnings if key in _WARNING_ISSUES else problems).append(msg)
    return problems, warnings


def _format_cli(results: dict) -> str:
    """Format results for terminal display with Rich-compatible markup."""
    lines = []
    page = results.get("page", {})
    page_data = results.get("page_data", {})
    metadata = page_data.get("metadata", {})

    # Header
    title = metadata.get("title") or page.get("name", "Unknown Page")
    if len(title) > 60:
        title = title[:57] + "..."
    lines.append("[bold cyan]SEO Scan Report[/bold cyan]")
    lines.append(f"[dim]Page:[/dim] {escape(title)}")
    if page.get("path"):
        lines.append(f"[dim]Path:[/dim] {escape(page['path'])}")
    lines.append("")

    total = results.get("seo_score", 0)
    grade = results.get("grade") or get_seo_grade(total)
    color = _LABEL_COLORS[get_score_label(total)]
    lines.append(f"[bold]SEO Score:[/bold] [{color}]{total}/100 ({grade})[/{color}]")
    lines.append("")

    lines.append("[bold]Score Breakdown:[/bold]")
    for key, label in _BREAKDOWN_LABELS.items():
        dim_score = results.get("breakdown", {}).get(key, 0)
        percentage = round(dim_score / 25 * 100)

        bar_width = 20
        filled = int(bar_width * percentage / 100)
        bar = "█" * filled + "░" * (bar_width - filled)

        if percentage >= 75:
            bar_color = "green"
        elif percentage >= 50:
            bar_color = "yellow"
        else:
            bar_color = "red"

        lines.append(f"  {label:15} [{bar_color}]{bar}[/{bar_color}] {dim_score}/25")
    lines.append("")

    metrics = page_data.get("metrics", {})
    readability = metrics.get("readability", {})
    lines.append("[bold]Content:[/bold]")
    lines.append(f"  Words: {metrics.get('word_count', 0)}  Headings: {metrics.get('heading_count', 0)}"
                 f"  Links: {metrics.get('link_count', 0)}  Images: {metrics.get('image_count', 0)}")
    lines.append(f"  Readability: {readability.get('score', 0)} ({readability.get('grade', 'N/A')})")
    lines.append("")

    problems, warnings = _issue_lines(results.get("issues", {}), quote=escape)
    if problems:
        lines.append("[bold red]Issues:[/bold red]")
        lines.extend(f"  [red]✗[/red] {msg}" for msg in problems)
        lines.append("")
    if warnings:
        lines.append("[bold yellow]Warnings:[/bold yellow]")
        lines.extend(f"  [yellow]![/yellow] {msg}" for msg in warnings)
        lines.append("")

    broken = results.get("broken_links_details", [])
    if broken:
        lines.append("[bold]Link Diagnostics:[/bold]")
        for info in broken:
            where = escape(info.get("component_name") or "unknown component")
            text = f' "{escape(info["text"])}"' if info.get("text") else ""
            href = escape(str(info.get("href", "")))
            lines.append(f"  [red]{info.get('reason')}[/red] {href}{text} [dim]({where})[/dim]")
        lines.append("")

    fixes = _recommended_fixes(results)
    if fixes:
        lines.append("[bold]Recommended Fixes:[/bold]")
        for i, audit in enumerate(fixes, 1):
            severity = audit.get("severity", "info")
            color = _SEVERITY_COLORS.get(severity, "white")
            tag = escape(f"[{severity}]")
            lines.append(
                f"  {i}. [{color}]{tag}[/{color}] {escape(audit.get('name', ''))}: "
                f"{escape(audit['recommendation'])} [dim]({escape(audit.get('message', ''))})[/dim]"
            )
        lines.append("")

    if not problems and not warnings:
        lines.append("[green]✓ No issues found[/green]")

    return "\n".join(lines).rstrip()


def _format_markdown(results: dict) -> str:
    lines = []
    page = results.get("page", {})
    page_data = results.get("page_data", {})
    metadata = page_data.get("metadata", {})

    lines.append("# SEO Scan Report")
    lines.append("")
    lines.append(f"**Page:** {metadata.get('title') or page.get('name', 'Unknown Page')}")
    if page.get("path"):
        lines.append(f"**Path:** {page['path']}")
    lines.append("")

    total = results.get("seo_score", 0)
    grade = results.get("grade") or get_seo_grade(total)
    lines.append("## SEO Score")
    lines.append("")
    lines.append(f"**{total}/100** ({grade})")
    lines.append("")

    lines.append("### Score Breakdown")
    lines.append("")
    lines.append("| Dimension | Score | Max |")
    lines.append("|-----------|-------|-----|")
    for key, label in _BREAKDOWN_LABELS.items():
        lines.append(f"| {label} | {results.get('breakdown', {}).get(key, 0)} | 25 |")
    lines.append("")

    metrics = page_data.get("metrics", {})
    readability = metrics.get("readability", {})
    lines.append("## Content Metrics")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    for label, value in (
        ("Words", metrics.get("word_count", 0)),
        ("Characters", metrics.get("character_count", 0)),
        ("Headings", metrics.get("heading_count", 0)),
        ("Links", metrics.get("link_count", 0)),
        ("Images", metrics.get("image_count", 0)),
        ("Readability", f"{readability.get('score', 0)} ({readability.get('grade', 'N/A')})"),
    ):
        lines.append(f"| {label} | {value} |")
    lines.append("")

    problems, warnings = _issue_lines(results.get("issues", {}))
    if problems or warnings:
        lines.append("## Issues & Findings")
        lines.append("")
    if problems:
        lines.append("### Issues")
        lines.append("")
        lines.extend(f"- ❌ {msg}" for msg in problems)
        lines.append("")
    if warnings:
        lines.append("### Warnings")
        lines.append("")
        lines.extend(f"- ⚠️ {msg}" for msg in warnings)
        lines.append("")

    broken = results.get("broken_links_details", [])
    if broken:
        lines.append("## Link Diagnostics")
        lines.append("")
        lines.append("| Reason | Href | Text | Component |")
        lines.append("|--------|------|------|-----------|")
        for info in broken:
            lines.append(
                f"| {info.get('reason')} | `{info.get('href')}` | {info.get('text') or ''} "
                f"| {info.get('component_name') or ''} |"
            )
        lines.append("")

    fixes = _recommended_fixes(results)
    if fixes:
        lines.append("## Recommended Fixes")
        lines.append("")
        for i, audit in enumerate(fixes, 1):
            lines.append(
                f"{i}. **[{audit.get('severity', 'info').upper()}]** {audit.get('name', '')}: "
                f"{audit['recommendation']} _({audit.get('message', '')})_"
            )
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
