"""
Score Aggregator

Combines individual rule contributions into a raw score and a normalized
similarity score, collecting match reasons in rule-evaluation order.
"""

from typing import List
from .contracts import (
    PreferenceProfile,
    Material,
    RuleContribution,
    ScoredMaterial,
)
from .rule_scorers import RULE_SCORERS
from .constants import SIMILARITY_DIVISOR, SIMILARITY_CAP


def aggregate_scores(
    profile: PreferenceProfile,
    material: Material
) -> ScoredMaterial:
    """
    Evaluate every rule and aggregate into a ScoredMaterial.

    Args:
        profile: Student's preference profile
        material: Candidate material to score

    Returns:
        ScoredMaterial with raw score, similarity score and match reasons
    """
    contributions: List[RuleContribution] = []

    for scorer in RULE_SCORERS:
        contribution = scorer(profile, material)
        if contribution is not None and contribution.points > 0:
            contributions.append(contribution)

    raw_score = sum(c.points for c in contributions)

    return ScoredMaterial(
        material=material,
        raw_score=raw_score,
        similarity_score=similarity_from_raw(raw_score),
        match_reasons=[c.reason for c in contributions if c.reason],
        contributions=contributions,
    )


def similarity_from_raw(raw_score: int) -> float:
    """Normalize a raw score into [0, SIMILARITY_CAP]."""
    return max(0.0, min(raw_score / SIMILARITY_DIVISOR, SIMILARITY_CAP))


def batch_aggregate(
    profile: PreferenceProfile,
    materials: List[Material]
) -> List[ScoredMaterial]:
    """Score multiple candidates, preserving input order."""
    return [aggregate_scores(profile, m) for m in materials]
