"""
Review Engine Constants and Parameters

All tunable numbers of the flashcard review policies in one place.
"""

from enum import Enum, IntEnum

from core.schemas import DEFAULT_EASE_FACTOR, EASE_FACTOR_FLOOR


# ---- Ratings ----

class Rating(IntEnum):
    """Self-assessment after revealing the answer (graduated policy)."""
    AGAIN = 1   # Not remembered; retry this session
    HARD = 2    # Remembered with high effort
    GOOD = 3    # Remembered normally
    EASY = 4    # Remembered fluently


class BinaryOutcome(IntEnum):
    """Answer outcome in correct/wrong mode (binary policy)."""
    WRONG = 0
    CORRECT = 1


class ReviewPolicy(str, Enum):
    """How a review session updates cards."""
    GRADUATED = "graduated"  # SM-2-like interval growth
    BINARY = "binary"        # correct/wrong with error-deck routing
    BROWSE = "browse"        # flip through cards, no scheduling change


# ---- Ease factor ----

EASE_MIN = EASE_FACTOR_FLOOR
DEFAULT_EASE = DEFAULT_EASE_FACTOR
HARD_EASE_PENALTY = 0.15
EASY_EASE_BONUS = 0.15


# ---- Intervals (days) ----

FIRST_GOOD_INTERVAL = 1
SECOND_GOOD_INTERVAL = 6
FIRST_EASY_INTERVAL = 4
HARD_INTERVAL_FACTOR = 1.2
EASY_BONUS = 1.3
BINARY_RETRY_DAYS = 1

# Products are rounded to this many decimals before ceil/floor so that
# float noise (6 * 2.5 * 1.3 = 19.500000000000004) does not add a day.
INTERVAL_PRECISION = 9
