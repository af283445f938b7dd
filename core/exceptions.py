"""Exception hierarchy for the study planner.

Errors fall into four groups:
- Validation errors are raised at the input boundary and shown to the user.
- Not-found and conflict errors are recoverable no-ops; the plan service
  logs them and reports failure to the caller.
- Storage errors are logged and never roll back the in-memory plan.
- Configuration errors stop startup.
"""

from __future__ import annotations


class StudyPlanError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, *, context: dict[str, object] | None = None) -> None:
        """Initialize error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Additional key-value pairs for structured logging.
        """
        super().__init__(message)
        self.context = context or {}


class ValidationError(StudyPlanError):
    """User input rejected before reaching the scheduler."""


class InvalidCountsError(ValidationError):
    """Question counts are negative or correct exceeds total."""


class MediaTooLargeError(ValidationError):
    """Uploaded card image exceeds the size limit."""


class UnsupportedMediaError(ValidationError):
    """Uploaded card media is not an image."""


class NotFoundError(StudyPlanError):
    """Requested entity does not exist (anymore)."""


class PlanNotFoundError(NotFoundError):
    """No plan with the given id."""


class SubjectNotFoundError(NotFoundError):
    """No subject with the given id in the plan."""


class TopicNotFoundError(NotFoundError):
    """No topic with the given id in the subject."""


class RevisionNotFoundError(NotFoundError):
    """No revision with the given id on the topic."""


class DeckNotFoundError(NotFoundError):
    """No deck or sub-deck with the given id."""


class CardNotFoundError(NotFoundError):
    """No flashcard with the given id."""


class ConflictError(StudyPlanError):
    """Operation conflicts with the current state of the entity."""


class RevisionAlreadyCompletedError(ConflictError):
    """Revision was already completed; completion happens exactly once."""


class CardNotInFocusError(ConflictError):
    """Card is part of the review session but not at the head of the queue."""


class SessionFinishedError(ConflictError):
    """Review session has no cards left."""


class StorageError(StudyPlanError):
    """Base class for storage collaborator errors."""


class StorageConnectionError(StorageError):
    """Storage backend is unreachable."""


class ConfigurationError(StudyPlanError):
    """Invalid or missing configuration."""
