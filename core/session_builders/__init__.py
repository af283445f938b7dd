"""Due-set selection and revision listings for review sessions."""

from core.session_builders.due import (
    DueRevision,
    DueSet,
    cards_in_scope,
    error_deck_cards,
    is_card_due,
    select_due_cards,
    select_due_revisions,
    select_error_deck,
)
from core.session_builders.revision_board import (
    RevisionBoard,
    build_revision_board,
    classify_revision,
    revisions_by_day,
)

__all__ = [
    "DueRevision",
    "DueSet",
    "cards_in_scope",
    "error_deck_cards",
    "is_card_due",
    "select_due_cards",
    "select_due_revisions",
    "select_error_deck",
    "RevisionBoard",
    "build_revision_board",
    "classify_revision",
    "revisions_by_day",
]
