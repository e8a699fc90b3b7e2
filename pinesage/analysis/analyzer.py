"""Whole-file analysis of indicator scripts.

Runs the line classifier over every line, keeps the first few matches per
category for display and derives a complexity tier from the raw counts.
"""

from typing import Dict, List

from pinesage.analysis.classifier import classify_line
from pinesage.analysis.models import (
    AnalysisReport,
    Category,
    ClassifiedElement,
    ComplexityTier,
)

# Maximum elements kept per category in a report
OUTPUT_CAPS: Dict[Category, int] = {
    Category.FUNCTION: 10,
    Category.VARIABLE: 15,
    Category.PLOT: 10,
    Category.INPUT: 10,
    Category.ALERT: 5,
}

# Complexity thresholds (strictly greater than)
MEDIUM_LINES = 100
MEDIUM_FUNCTIONS = 10
HIGH_LINES = 300
HIGH_FUNCTIONS = 20
HIGH_PLOTS = 5


def split_lines(content: str) -> List[str]:
    """Split on newlines exactly, keeping a trailing empty segment."""
    return content.split("\n")


def complexity_tier(line_count: int, function_count: int, plot_count: int) -> ComplexityTier:
    """Escalate Low -> Medium -> High; later thresholds override earlier ones."""
    tier = ComplexityTier.LOW
    if line_count > MEDIUM_LINES or function_count > MEDIUM_FUNCTIONS:
        tier = ComplexityTier.MEDIUM
    if line_count > HIGH_LINES or function_count > HIGH_FUNCTIONS or plot_count > HIGH_PLOTS:
        tier = ComplexityTier.HIGH
    return tier


def analyze(content: str) -> AnalysisReport:
    """Analyze indicator source text.

    Args:
        content: Full text of the file.

    Returns:
        AnalysisReport with capped element lists, raw counts and tier.
    """
    lines = split_lines(content)
    found: Dict[Category, List[ClassifiedElement]] = {c: [] for c in Category}

    for number, line in enumerate(lines, 1):
        for element in classify_line(line, number):
            found[element.category].append(element)

    counts = {category: len(items) for category, items in found.items()}
    tier = complexity_tier(
        len(lines),
        counts[Category.FUNCTION],
        counts[Category.PLOT],
    )

    return AnalysisReport(
        line_count=len(lines),
        complexity=tier,
        elements={c: tuple(items[: OUTPUT_CAPS[c]]) for c, items in found.items()},
        counts=counts,
    )
