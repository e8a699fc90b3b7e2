"""Analysis data models.

Contains the value types produced by the line classifier, file analyzer,
function extractor and corpus search. All of them are built fresh for a
single tool call and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


class Category(str, Enum):
    """Semantic category a source line can belong to."""

    FUNCTION = "function"
    VARIABLE = "variable"
    PLOT = "plot"
    INPUT = "input"
    ALERT = "alert"


class ComplexityTier(str, Enum):
    """Coarse complexity classification of an indicator file."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __lt__(self, other: "ComplexityTier") -> bool:
        order = [ComplexityTier.LOW, ComplexityTier.MEDIUM, ComplexityTier.HIGH]
        return order.index(self) < order.index(other)

    def __le__(self, other: "ComplexityTier") -> bool:
        return self == other or self < other

    def __gt__(self, other: "ComplexityTier") -> bool:
        return not self <= other

    def __ge__(self, other: "ComplexityTier") -> bool:
        return not self < other


@dataclass(frozen=True)
class SourceLine:
    """A single line of file text with its 1-based line number."""

    number: int
    text: str


@dataclass(frozen=True)
class ClassifiedElement:
    """A line matched to one category, with the text shown in reports."""

    category: Category
    text: str
    line: int

    def to_dict(self) -> Dict:
        return {"category": self.category.value, "text": self.text, "line": self.line}


@dataclass(frozen=True)
class AnalysisReport:
    """Aggregate result of analyzing one indicator file.

    ``elements`` holds the capped, display-ready sequences while ``counts``
    keeps the raw number of matches seen before capping. The complexity
    tier is derived from the raw counts.
    """

    line_count: int
    complexity: ComplexityTier
    elements: Dict[Category, Tuple[ClassifiedElement, ...]] = field(default_factory=dict)
    counts: Dict[Category, int] = field(default_factory=dict)

    def items(self, category: Category) -> Tuple[ClassifiedElement, ...]:
        """Capped elements for a category, in file order."""
        return self.elements.get(category, ())

    def texts(self, category: Category) -> List[str]:
        return [e.text for e in self.items(category)]

    @property
    def functions(self) -> List[str]:
        return self.texts(Category.FUNCTION)

    @property
    def variables(self) -> List[str]:
        return self.texts(Category.VARIABLE)

    @property
    def plots(self) -> List[str]:
        return self.texts(Category.PLOT)

    @property
    def inputs(self) -> List[str]:
        return self.texts(Category.INPUT)

    @property
    def alerts(self) -> List[str]:
        return self.texts(Category.ALERT)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "line_count": self.line_count,
            "complexity": self.complexity.value,
            "counts": {c.value: self.counts.get(c, 0) for c in Category},
            "elements": {
                c.value: [e.to_dict() for e in self.items(c)] for c in Category
            },
        }


@dataclass(frozen=True)
class FunctionSpan:
    """A function candidate and the brace-balanced lines that follow it."""

    name: str
    start_line: int
    end_line: int
    code: str

    def __post_init__(self) -> None:
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line {self.end_line} precedes start_line {self.start_line}"
            )

    @property
    def is_degenerate(self) -> bool:
        """True when no body was captured and the span is only the start line."""
        return self.start_line == self.end_line

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "code": self.code,
        }


@dataclass(frozen=True)
class SearchMatch:
    """Lines of one file that contain the search term."""

    file: str
    lines: Tuple[SourceLine, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "file": self.file,
            "matches": [{"line": l.number, "text": l.text} for l in self.lines],
        }
