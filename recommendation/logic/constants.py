"""
Scoring Engine Constants

Defines rule weights, bonus tiers, difficulty ordering and normalization
settings used by the material scoring engine.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List, Tuple


class DifficultyLevel(str, Enum):
    """Difficulty levels shared by preference profiles and materials."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# Ordered from easiest to hardest; "adjacent" means exactly one step up
DIFFICULTY_ORDER: List[str] = [
    DifficultyLevel.BEGINNER.value,
    DifficultyLevel.INTERMEDIATE.value,
    DifficultyLevel.ADVANCED.value,
]

# =============================================================================
# RULE WEIGHTS (100-point system)
# =============================================================================

RULE_POINTS: Dict[str, int] = {
    "difficulty_exact": 30,
    "difficulty_adjacent": 15,
    "category": 25,
    "tag": 10,              # per matching preferred tag
    "preferred_material": 15,
    "format": 10,
}

TAG_POINTS_CAP = 20

# =============================================================================
# QUALITY BONUS TIERS
# =============================================================================

# (minimum avg_rating, points, emits reason) - checked top down, first hit wins
RATING_BONUS_TIERS: List[Tuple[float, int, bool]] = [
    (4.5, 5, True),
    (4.0, 3, False),
]

# (view_count strictly greater than, points, emits reason)
POPULARITY_BONUS_TIERS: List[Tuple[int, int, bool]] = [
    (500, 3, True),
    (100, 2, False),
]

# =============================================================================
# NORMALIZATION
# =============================================================================

SIMILARITY_DIVISOR = 100
SIMILARITY_CAP = 0.99

MAX_TAGS_IN_REASON = 2

# Characters stripped from category names before substring matching
CATEGORY_STRIP_CHARS = (" ", "-", "_")

ENGINE_VERSION = "1.0.0"
