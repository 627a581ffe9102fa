"""
SM-2 Constants and Parameters

All tunable values of the retention algorithm in one place.
Changing any of these changes interval growth for existing learners.
"""

from enum import IntEnum


# ---- Recall Quality ----

class RecallQuality(IntEnum):
    """How well the learner recalled an item during one review."""
    AGAIN = 0   # Complete blackout
    HARD = 2    # Wrong, but recognised once the answer was shown
    GOOD = 3    # Correct with some hesitation
    EASY = 5    # Perfect recall


# Levels 1 and 4 exist on the SM-2 scale but are never emitted by callers.
# They still go through the generic formulas below.


# ---- Ease Factor ----

MIN_EASE = 1.3              # Floor, keeps intervals from collapsing
DEFAULT_EASE = 2.5          # Starting ease for new items
FAILURE_EASE_PENALTY = 0.2  # Subtracted on AGAIN / HARD


# ---- Intervals (days) ----

FIRST_INTERVAL = 1          # After the first successful review
SECOND_INTERVAL = 6         # After the second successful review
MASTERY_THRESHOLD = 21      # Interval at which an item counts as mastered


# ---- Safety cap for simulations ----

MAX_SIMULATED_REVIEWS = 100
