"""
Topic revision scheduling.

Quick start:
    from core import revisions

    revisions.validate_counts(10, 7)
    topic, session = revisions.register_session(topic, 10, 7, [7, 14], True)
"""

from core.revisions.scheduler import (
    DAY_ZERO_LABEL,
    complete_revision,
    delete_revision,
    is_day_zero,
    is_topic_finished,
    normalize_offsets,
    register_session,
    revision_label,
    topic_accuracy,
)
from core.revisions.validation import parse_revision_pattern, validate_counts

__all__ = [
    "DAY_ZERO_LABEL",
    "complete_revision",
    "delete_revision",
    "is_day_zero",
    "is_topic_finished",
    "normalize_offsets",
    "register_session",
    "revision_label",
    "topic_accuracy",
    "parse_revision_pattern",
    "validate_counts",
]
