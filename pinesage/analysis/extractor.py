"""Brace-matching function body extraction."""

from typing import List

from pinesage.analysis.analyzer import split_lines
from pinesage.analysis.classifier import function_name, is_function_start
from pinesage.analysis.models import FunctionSpan

DEFAULT_LOOKAHEAD = 50


def _find_span_end(lines: List[str], start: int, lookahead: int) -> int:
    """Index of the line closing the body opened at or after ``start``.

    Falls back to ``start`` when the depth never returns to zero inside
    the window ``[start, start + lookahead)``.
    """
    depth = 0
    entered = False
    for index in range(start, min(start + lookahead, len(lines))):
        line = lines[index]
        opens = line.count("{")
        closes = line.count("}")
        if opens:
            entered = True
        depth += opens - closes
        if closes and entered and depth == 0:
            return index
    return start


def extract_functions(content: str, lookahead: int = DEFAULT_LOOKAHEAD) -> List[FunctionSpan]:
    """Extract every function candidate with its brace-balanced body.

    Nested candidates are scanned independently, so spans may overlap.

    Args:
        content: Full text of the file.
        lookahead: Number of lines, starting at the candidate, searched for
            the closing brace.

    Returns:
        Spans in file order.
    """
    if lookahead < 1:
        raise ValueError("lookahead must be positive")

    lines = split_lines(content)
    spans: List[FunctionSpan] = []

    for index, line in enumerate(lines):
        if not is_function_start(line):
            continue
        end = _find_span_end(lines, index, lookahead)
        spans.append(
            FunctionSpan(
                name=function_name(line),
                start_line=index + 1,
                end_line=end + 1,
                code="\n".join(lines[index : end + 1]),
            )
        )

    return spans
