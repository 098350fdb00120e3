"""
Rule Scorers

Individual scoring functions for each matching rule.
Each scorer returns a RuleContribution when the rule fires, otherwise None.
All string comparisons are case-insensitive.
"""

from typing import Optional
from .contracts import PreferenceProfile, Material, RuleContribution
from .constants import (
    DIFFICULTY_ORDER,
    RULE_POINTS,
    TAG_POINTS_CAP,
    RATING_BONUS_TIERS,
    POPULARITY_BONUS_TIERS,
    MAX_TAGS_IN_REASON,
    CATEGORY_STRIP_CHARS,
)


def score_difficulty(
    profile: PreferenceProfile,
    material: Material
) -> Optional[RuleContribution]:
    """
    Exact difficulty match, or the material sits one step above the
    student's level (beginner -> intermediate, intermediate -> advanced).
    """
    user_level = (profile.difficulty_level or "").lower()
    material_level = material.difficulty.strip().lower()

    if not user_level or not material_level:
        return None

    if material_level == user_level:
        return RuleContribution(
            rule="difficulty_exact",
            points=RULE_POINTS["difficulty_exact"],
            reason=f"Matches your level: {material.difficulty.strip()}"
        )

    if user_level in DIFFICULTY_ORDER and material_level in DIFFICULTY_ORDER:
        step = DIFFICULTY_ORDER.index(material_level) - DIFFICULTY_ORDER.index(user_level)
        if step == 1:
            return RuleContribution(
                rule="difficulty_adjacent",
                points=RULE_POINTS["difficulty_adjacent"],
                reason=f"Next level up: {material.difficulty.strip()}"
            )

    return None


def score_category(
    profile: PreferenceProfile,
    material: Material
) -> Optional[RuleContribution]:
    """
    Category match after stripping spaces, hyphens and underscores.
    Either side may contain the other.
    """
    material_category = _normalize_category(material.category_name)
    if not material_category:
        return None

    for preferred in profile.preferred_categories:
        user_category = _normalize_category(preferred)
        if not user_category:
            continue
        if user_category in material_category or material_category in user_category:
            return RuleContribution(
                rule="category",
                points=RULE_POINTS["category"],
                reason=f"Category: {material.category_name.strip()}"
            )

    return None


def score_tags(
    profile: PreferenceProfile,
    material: Material
) -> Optional[RuleContribution]:
    """
    Tag overlap between the material's comma-separated tags and the
    student's preferred tags. Points are counted per preferred tag that
    matches at least one material tag, capped at TAG_POINTS_CAP.
    """
    material_tags = material.tag_list()
    user_tags = [t.lower() for t in profile.preferred_tags]
    if not material_tags or not user_tags:
        return None

    matched_user_tags = [
        user_tag for user_tag in user_tags
        if any(_fuzzy_match(user_tag, tag) for tag in material_tags)
    ]
    if not matched_user_tags:
        return None

    matched_material_tags = [
        tag for tag in material_tags
        if any(_fuzzy_match(user_tag, tag) for user_tag in user_tags)
    ]

    points = min(len(matched_user_tags) * RULE_POINTS["tag"], TAG_POINTS_CAP)
    shown = ", ".join(matched_material_tags[:MAX_TAGS_IN_REASON])

    return RuleContribution(
        rule="tag",
        points=points,
        reason=f"Tags: {shown}"
    )


def score_preferred_material(
    profile: PreferenceProfile,
    material: Material
) -> Optional[RuleContribution]:
    """Title or description mentions one of the student's topics of interest."""
    title = material.title.lower()
    description = material.description.lower()

    for preferred in profile.preferred_materials:
        topic = preferred.lower()
        if topic in title or topic in description:
            return RuleContribution(
                rule="preferred_material",
                points=RULE_POINTS["preferred_material"],
                reason=f"Topic: {topic}"
            )

    return None


def score_format(
    profile: PreferenceProfile,
    material: Material
) -> Optional[RuleContribution]:
    file_type = material.file_type.strip().lower()
    if not file_type:
        return None

    if file_type in {f.lower() for f in profile.preferred_formats}:
        return RuleContribution(
            rule="format",
            points=RULE_POINTS["format"],
            reason=f"Format: {file_type.upper()}"
        )

    return None


def score_rating_bonus(
    profile: PreferenceProfile,
    material: Material
) -> Optional[RuleContribution]:
    """Quality bonus from the average rating. Only the top tier emits a reason."""
    for min_rating, points, emits_reason in RATING_BONUS_TIERS:
        if material.avg_rating >= min_rating:
            return RuleContribution(
                rule="rating_bonus",
                points=points,
                reason=f"Rated {min_rating}+" if emits_reason else None
            )
    return None


def score_popularity_bonus(
    profile: PreferenceProfile,
    material: Material
) -> Optional[RuleContribution]:
    """Popularity bonus from view count. Only the top tier emits a reason."""
    for min_views, points, emits_reason in POPULARITY_BONUS_TIERS:
        if material.view_count > min_views:
            return RuleContribution(
                rule="popularity_bonus",
                points=points,
                reason="Popular" if emits_reason else None
            )
    return None


# Evaluation order; match reasons follow this order
RULE_SCORERS = [
    score_difficulty,
    score_category,
    score_tags,
    score_preferred_material,
    score_format,
    score_rating_bonus,
    score_popularity_bonus,
]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _normalize_category(name: str) -> str:
    text = (name or "").lower()
    for ch in CATEGORY_STRIP_CHARS:
        text = text.replace(ch, "")
    return text


def _fuzzy_match(term1: str, term2: str) -> bool:
    """Simple fuzzy matching - checks if either term contains the other."""
    t1 = term1.lower().strip()
    t2 = term2.lower().strip()
    if not t1 or not t2:
        return False
    return t1 in t2 or t2 in t1
