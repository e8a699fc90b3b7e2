"""Markdown text reports returned by the indicator tools."""

from typing import List, Sequence

from pinesage.analysis.models import AnalysisReport, Category, FunctionSpan, SearchMatch

PLOT_DISPLAY_WIDTH = 100
INPUT_DISPLAY_WIDTH = 80
NONE_FOUND = "None found"


def truncate(text: str, width: int) -> str:
    """First ``width`` characters of ``text`` followed by an ellipsis marker."""
    return f"{text[:width]}..."


def _bullets(items: Sequence[str]) -> str:
    if not items:
        return NONE_FOUND
    return "\n".join(f"- {item}" for item in items)


def render_indicator_list(names: Sequence[str]) -> str:
    numbered = "\n".join(f"{i}. {name}" for i, name in enumerate(names, 1))
    return f"Found {len(names)} indicator files:\n\n{numbered}"


def render_analysis(name: str, report: AnalysisReport) -> str:
    """Render an AnalysisReport as a markdown document."""
    counts: List[str] = [
        f"- **{label}**: {len(report.items(category))} found"
        for label, category in (
            ("Functions", Category.FUNCTION),
            ("Variables", Category.VARIABLE),
            ("Plots", Category.PLOT),
            ("Inputs", Category.INPUT),
            ("Alerts", Category.ALERT),
        )
    ]
    plots = [truncate(p, PLOT_DISPLAY_WIDTH) for p in report.plots]
    inputs = [truncate(i, INPUT_DISPLAY_WIDTH) for i in report.inputs]

    sections = [
        f"# Analysis of {name}",
        "",
        "## Overview",
        f"- **Lines of Code**: {report.line_count}",
        f"- **Complexity**: {report.complexity.value}",
        "",
        "## Components Found",
        *counts,
        "",
        "## Key Functions",
        _bullets(report.functions),
        "",
        "## Plot Commands",
        _bullets(plots),
        "",
        "## Input Parameters",
        _bullets(inputs),
        "",
    ]
    return "\n".join(sections)


def render_search(term: str, matches: Sequence[SearchMatch]) -> str:
    if not matches:
        return f'No matches found for "{term}"'

    blocks = []
    for match in matches:
        lines = "\n".join(f"  Line {l.number}: {l.text}" for l in match.lines)
        blocks.append(f"**{match.file}**:\n{lines}")
    return f'Found "{term}" in {len(matches)} files:\n\n' + "\n\n".join(blocks)


def render_functions(name: str, spans: Sequence[FunctionSpan]) -> str:
    """Render extracted functions with line ranges and fenced code."""
    parts = [
        f"## {span.name}\n"
        f"**Lines**: {span.start_line}-{span.end_line}\n\n"
        f"```pinescript\n{span.code}\n```\n\n"
        f"---"
        for span in spans
    ]
    return (
        f"# Functions extracted from {name}\n\n"
        f"Found {len(spans)} functions:\n\n" + "\n".join(parts)
    )


def render_error(message: str) -> str:
    return f"Error: {message}"
