"""
Boundary validation for question counts and revision patterns.

Runs before any scheduler operation; the scheduler itself assumes
validated numbers.
"""

from __future__ import annotations

from core.exceptions import InvalidCountsError


def validate_counts(total: int, correct: int) -> None:
    """
    Reject impossible question counts.

    Raises:
        InvalidCountsError: If either count is negative or correct > total
    """
    if total < 0 or correct < 0:
        raise InvalidCountsError(
            "Question counts cannot be negative.",
            context={"total": total, "correct": correct},
        )
    if correct > total:
        raise InvalidCountsError(
            "Correct answers cannot exceed the total number of questions.",
            context={"total": total, "correct": correct},
        )


def parse_revision_pattern(pattern: str) -> list[int]:
    """
    Parse a comma-separated offset list such as "7, 14, 30".

    Blank, non-numeric and non-positive entries are dropped, as are
    repeated offsets. An empty result is valid and schedules nothing.
    """
    offsets: list[int] = []
    for part in pattern.split(","):
        part = part.strip()
        try:
            days = int(part)
        except ValueError:
            continue
        if days > 0 and days not in offsets:
            offsets.append(days)
    return offsets
