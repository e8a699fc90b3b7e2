"""Indicator file enumeration and reading."""

from pathlib import Path
from typing import List, Optional

from pinesage.errors import FileReadError, IndicatorDirectoryError
from pinesage.utils.config import ExcludeConfig
from pinesage.utils.logging import get_logger

logger = get_logger("core.indicators")


def is_indicator_name(name: str, exclude: ExcludeConfig) -> bool:
    """Whether a file name passes the non-indicator exclusion rules."""
    if any(name.startswith(prefix) for prefix in exclude.prefixes):
        return False
    if any(part in name for part in exclude.name_substrings):
        return False
    if any(name.endswith(ext) for ext in exclude.extensions):
        return False
    return True


class IndicatorStore:
    """Indicator files living in a single directory.

    Every call hits the filesystem again; nothing is cached between tool
    invocations.
    """

    def __init__(self, root: Path, exclude: Optional[ExcludeConfig] = None):
        self.root = Path(root).resolve()
        self.exclude = exclude or ExcludeConfig()

    def list(self, pattern: Optional[str] = None) -> List[str]:
        """List indicator file names, sorted.

        Args:
            pattern: Keep only names containing this, case-insensitively.

        Raises:
            IndicatorDirectoryError: If the directory cannot be read.
        """
        try:
            entries = sorted(self.root.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise IndicatorDirectoryError(self.root, e) from e

        needle = pattern.lower() if pattern else None
        names = []
        for entry in entries:
            if not entry.is_file() or not is_indicator_name(entry.name, self.exclude):
                continue
            if needle and needle not in entry.name.lower():
                continue
            names.append(entry.name)

        logger.debug(f"Listed {len(names)} indicators in {self.root}")
        return names

    def read(self, name: str) -> str:
        """Read an indicator file as UTF-8 text.

        Raises:
            FileReadError: If the file is missing, unreadable, not UTF-8,
                or resolves outside the indicators directory.
        """
        path = (self.root / name).resolve()
        if not path.is_relative_to(self.root):
            raise FileReadError(name, "outside the indicators directory")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(name, e) from e
