"""Formatting utilities."""

from __future__ import annotations


def format_time(seconds: float) -> str:
    """Format seconds into human-readable string.

    Args:
        seconds: Time in seconds.

    Returns:
        Formatted time string.
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        return f"{seconds / 60:.1f}m"


def format_number(n: int) -> str:
    """Format large counts with K/M suffix, e.g. 2598960 -> '2.6M'."""
    if n < 1000:
        return str(n)
    elif n < 1_000_000:
        return f"{n / 1000:.1f}K"
    else:
        return f"{n / 1_000_000:.1f}M"
