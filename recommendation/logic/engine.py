"""
Scoring Engine

Main entry point that combines rule scoring, ranking and filtering into a
single pure pipeline. No I/O, no shared state.
"""

import logging
from typing import Any, Dict, List, Optional

from .contracts import PreferenceProfile, Material, ScoredMaterial, ScoringOptions
from .aggregator import aggregate_scores, batch_aggregate
from .ranker import rank_scored, filter_by_threshold, truncate
from .constants import ENGINE_VERSION

logger = logging.getLogger(__name__)


class ScoringEngine:
    """
    Content-based material scoring engine.

    Pipeline flow:
    1. Rule Scoring - evaluate every rule per candidate
    2. Aggregation - sum points, normalize, collect match reasons
    3. Ranking - stable sort by raw score
    4. Filtering - apply min_raw_score and max_results
    """

    def __init__(self):
        self.version = ENGINE_VERSION

    def score(
        self,
        profile: PreferenceProfile,
        candidates: List[Material],
        options: Optional[ScoringOptions] = None
    ) -> List[ScoredMaterial]:
        """
        Score, rank and filter candidate materials for a preference profile.

        Args:
            profile: Student's preference profile
            candidates: Candidate materials, pre-sorted by the catalog query
            options: Threshold and result cap chosen by the caller

        Returns:
            Ranked list of ScoredMaterial, possibly empty
        """
        options = options or ScoringOptions()

        if not candidates:
            return []

        scored = batch_aggregate(profile, candidates)
        ranked = rank_scored(scored)
        filtered = filter_by_threshold(ranked, options.min_raw_score)
        results = truncate(filtered, options.max_results)

        logger.debug(
            "Scored %d candidates: %d at or above %d, returning %d",
            len(candidates), len(filtered), options.min_raw_score, len(results)
        )
        return results

    def score_from_dict(
        self,
        profile_data: Dict[str, Any],
        candidates_data: List[Dict[str, Any]],
        **options
    ) -> List[ScoredMaterial]:
        """
        Score from plain dictionaries.

        Convenience method for API integration.

        Args:
            profile_data: Dictionary matching PreferenceProfile fields
            candidates_data: Dictionaries matching Material fields
            **options: min_raw_score / max_results

        Returns:
            Ranked list of ScoredMaterial
        """
        profile = PreferenceProfile(**(profile_data or {}))
        candidates = [Material(**row) for row in candidates_data]
        return self.score(profile, candidates, ScoringOptions(**options))

    def score_single_material(
        self,
        profile: PreferenceProfile,
        material: Material
    ) -> dict:
        """
        Score a single material for a student.

        Useful for showing why a specific material was (or was not)
        recommended.
        """
        scored = aggregate_scores(profile, material)

        return {
            "material_id": material.material_id,
            "raw_score": scored.raw_score,
            "similarity_score": scored.similarity_score,
            "match_reasons": list(scored.match_reasons),
            "contributions": {
                c.rule: c.points for c in scored.contributions
            },
        }


# Convenience function for simple usage
def score_materials(
    profile: PreferenceProfile,
    candidates: List[Material],
    options: Optional[ScoringOptions] = None
) -> List[ScoredMaterial]:
    """
    Score and rank candidates with a default engine.

    Args:
        profile: Student's preference profile
        candidates: Candidate materials
        options: Threshold and result cap

    Returns:
        Ranked list of ScoredMaterial
    """
    return ScoringEngine().score(profile, candidates, options)
