"""Line-oriented text analysis of indicator scripts.

Usage::

    from pinesage.analysis import analyze, extract_functions

    report = analyze(content)
    print(report.complexity, report.functions)
"""

from pinesage.analysis.analyzer import OUTPUT_CAPS, analyze, complexity_tier
from pinesage.analysis.classifier import classify, classify_line
from pinesage.analysis.extractor import extract_functions
from pinesage.analysis.models import (
    AnalysisReport,
    Category,
    ClassifiedElement,
    ComplexityTier,
    FunctionSpan,
    SearchMatch,
    SourceLine,
)
from pinesage.analysis.search import search

__all__ = [
    "AnalysisReport",
    "Category",
    "ClassifiedElement",
    "ComplexityTier",
    "FunctionSpan",
    "OUTPUT_CAPS",
    "SearchMatch",
    "SourceLine",
    "analyze",
    "classify",
    "classify_line",
    "complexity_tier",
    "extract_functions",
    "search",
]
