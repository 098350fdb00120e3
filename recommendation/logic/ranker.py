"""
Ranker

Ranks scored materials and applies the caller's threshold and result cap.
"""

from typing import List, Optional
from .contracts import ScoredMaterial


def rank_scored(
    scored_materials: List[ScoredMaterial]
) -> List[ScoredMaterial]:
    """
    Rank materials by raw score (descending).

    sorted() is stable, so ties keep the input order. Candidates arrive
    pre-sorted by the catalog query (rating, then views), which becomes the
    secondary order.

    Args:
        scored_materials: List of scored materials

    Returns:
        Sorted list by raw score
    """
    return sorted(
        scored_materials,
        key=lambda x: x.raw_score,
        reverse=True
    )


def filter_by_threshold(
    ranked: List[ScoredMaterial],
    min_raw_score: int = 0
) -> List[ScoredMaterial]:
    """Drop materials whose raw score is below min_raw_score."""
    return [s for s in ranked if s.raw_score >= min_raw_score]


def truncate(
    ranked: List[ScoredMaterial],
    max_results: Optional[int] = None
) -> List[ScoredMaterial]:
    """Keep at most max_results items. None means no cap."""
    if max_results is None:
        return list(ranked)
    return ranked[:max_results]
