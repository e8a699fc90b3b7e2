"""Lexical line classification for indicator scripts.

Decides which semantic categories a single line belongs to using plain
pattern matching over the trimmed line. This is deliberately shallow: no
multi-line constructs, string literals or comments are recognized.

Rules:
- function : identifier immediately followed by ``(`` at line start
- variable : optional ``var`` keyword, identifier, then ``=``
- plot     : ``plot(``, ``plotshape(`` or ``plotchar(`` anywhere
- input    : ``input(`` or ``input.`` anywhere
- alert    : ``alert(`` or ``alertcondition(`` anywhere
"""

import re
from typing import List, Set

from pinesage.analysis.models import Category, ClassifiedElement

FUNCTION_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*\s*\(")
VARIABLE_RE = re.compile(r"^(var\s+)?[a-zA-Z_][a-zA-Z0-9_]*\s*=")
_VAR_KEYWORD_RE = re.compile(r"^var\s+")

PLOT_MARKERS = ("plot(", "plotshape(", "plotchar(")
INPUT_MARKERS = ("input(", "input.")
ALERT_MARKERS = ("alert(", "alertcondition(")


def is_function_start(line: str) -> bool:
    """Whether the trimmed line looks like a call or definition head."""
    return FUNCTION_RE.match(line.strip()) is not None


def function_name(line: str) -> str:
    """Text of the trimmed line before its first ``(``."""
    return line.strip().split("(", 1)[0]


def variable_name(line: str) -> str:
    """Bound identifier of a variable line, without the ``var`` keyword."""
    return _VAR_KEYWORD_RE.sub("", line.strip()).split("=", 1)[0].strip()


def _contains_any(text: str, markers) -> bool:
    return any(marker in text for marker in markers)


def classify(line: str) -> Set[Category]:
    """Return every category the line matches (possibly none)."""
    trimmed = line.strip()
    if not trimmed:
        return set()

    categories: Set[Category] = set()
    if FUNCTION_RE.match(trimmed):
        categories.add(Category.FUNCTION)
    if VARIABLE_RE.match(trimmed):
        categories.add(Category.VARIABLE)
    if _contains_any(trimmed, PLOT_MARKERS):
        categories.add(Category.PLOT)
    if _contains_any(trimmed, INPUT_MARKERS):
        categories.add(Category.INPUT)
    if _contains_any(trimmed, ALERT_MARKERS):
        categories.add(Category.ALERT)
    return categories


def classify_line(line: str, line_number: int = 1) -> List[ClassifiedElement]:
    """Classify a line and extract the display text for each match.

    Elements are returned in category declaration order.
    """
    categories = classify(line)
    if not categories:
        return []

    trimmed = line.strip()
    elements: List[ClassifiedElement] = []
    for category in Category:
        if category not in categories:
            continue
        if category is Category.FUNCTION:
            text = function_name(trimmed)
        elif category is Category.VARIABLE:
            text = variable_name(trimmed)
        else:
            text = trimmed
        elements.append(ClassifiedElement(category=category, text=text, line=line_number))
    return elements
