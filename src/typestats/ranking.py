from __future__ import annotations

from collections.abc import Mapping

from .errors import InvalidArgumentError


def validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError(f"limit must be an integer, got {limit!r}")
    if limit < 0:
        raise InvalidArgumentError(f"limit must not be negative, got {limit}")
    return limit


def rank(counts: Mapping[str, int], limit: int) -> list[tuple[str, int]]:
    """
    Returns the ``limit`` highest entries, descending by count.

    Equal counts are ordered by ascending name so the result does not depend
    on mapping iteration order.
    """
    validate_limit(limit)
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return ordered[:limit]


def format_ranking(entries: list[tuple[str, int]]) -> str:
    return ", ".join(f"{name} ({count} occurrences)" for name, count in entries)


def top_n(counts: Mapping[str, int], limit: int) -> str:
    return format_ranking(rank(counts, limit))
