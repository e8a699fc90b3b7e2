"""Shared formatting utilities for PineSage CLI output."""

from pinesage.analysis.models import ComplexityTier

_TIER_STYLES = {
    ComplexityTier.LOW: "green",
    ComplexityTier.MEDIUM: "yellow",
    ComplexityTier.HIGH: "red bold",
}


def format_complexity(tier: ComplexityTier) -> str:
    """Format a complexity tier with its color.

    Args:
        tier: Complexity tier of an analyzed file.

    Returns:
        Rich-formatted tier string (e.g., "[green]Low[/green]").
    """
    style = _TIER_STYLES.get(tier, "dim")
    return f"[{style}]{tier.value}[/{style}]"


def format_line_range(start: int, end: int) -> str:
    """Format an inclusive 1-based line range."""
    if start == end:
        return f"L{start}"
    return f"L{start}-{end}"
