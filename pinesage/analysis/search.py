"""Literal term search across indicator files."""

from typing import Callable, Iterable, List, Optional

from pinesage.analysis.models import SearchMatch, SourceLine
from pinesage.errors import FileReadError
from pinesage.utils.logging import get_logger

logger = get_logger("analysis.search")

MAX_MATCHES_PER_FILE = 3


def search(
    files: Iterable[str],
    term: str,
    case_insensitive: bool = True,
    reader: Optional[Callable[[str], str]] = None,
    max_matches: int = MAX_MATCHES_PER_FILE,
) -> List[SearchMatch]:
    """Find lines containing ``term`` in each file.

    Files that cannot be read are skipped. Files without a match are left
    out of the result, which keeps the order of ``files``.

    Args:
        files: File names in enumeration order.
        term: Literal substring to look for.
        case_insensitive: Lowercase content and term before comparing.
        reader: Callable returning a file's text, raising FileReadError.
        max_matches: Matching lines kept per file.

    Returns:
        One SearchMatch per file with at least one matching line.
    """
    if reader is None:
        raise ValueError("reader is required")

    needle = term.lower() if case_insensitive else term
    results: List[SearchMatch] = []

    for name in files:
        try:
            content = reader(name)
        except FileReadError as e:
            logger.debug(f"Skipping {name}: {e.reason}")
            continue

        haystack = content.lower() if case_insensitive else content
        if needle not in haystack:
            continue

        matched: List[SourceLine] = []
        for number, line in enumerate(content.split("\n"), 1):
            trimmed = line.strip()
            candidate = trimmed.lower() if case_insensitive else trimmed
            if needle in candidate:
                matched.append(SourceLine(number=number, text=trimmed))
                if len(matched) >= max_matches:
                    break

        if matched:
            results.append(SearchMatch(file=name, lines=tuple(matched)))

    return results
