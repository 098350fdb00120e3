"""
Output Assembler

Transforms ranked scoring results into the RecommendationOutput contract
consumed by the presentation layer, and generates warnings.
"""

import logging
import uuid
from typing import List, Optional, Dict, Any

from .contracts import (
    PreferenceProfile,
    ScoredMaterial,
    RecommendationOutput,
)
from .constants import ENGINE_VERSION

logger = logging.getLogger(__name__)


# Display bands for similarity scores, checked top down
MATCH_LEVELS = [
    (0.7, "strong"),
    (0.5, "good"),
    (0.3, "fair"),
]


def match_level(similarity_score: float) -> str:
    """Map a similarity score to a display band."""
    for threshold, label in MATCH_LEVELS:
        if similarity_score >= threshold:
            return label
    return "weak"


def assemble_output(
    profile: Optional[PreferenceProfile],
    screen: str,
    recommendations: List[ScoredMaterial],
    total_evaluated: int,
    total_matched: int,
    min_raw_score: int = 0,
    processing_time_ms: Optional[float] = None,
    extra_warnings: Optional[List[str]] = None
) -> RecommendationOutput:
    """
    Assemble the final RecommendationOutput.

    Args:
        profile: Preference profile that was scored against (None if missing)
        screen: Screen policy name the results were produced for
        recommendations: Ranked, filtered and truncated results
        total_evaluated: Candidates scored
        total_matched: Candidates at or above the threshold, before truncation
        min_raw_score: Threshold that was applied
        processing_time_ms: Processing time in milliseconds
        extra_warnings: Warnings raised upstream (e.g. missing profile)

    Returns:
        Complete RecommendationOutput
    """
    warnings = list(extra_warnings or [])
    warnings.extend(_generate_warnings(profile, total_evaluated, total_matched, min_raw_score))

    for warning in warnings:
        logger.warning(f"⚠️ {warning}")

    return RecommendationOutput(
        request_id=str(uuid.uuid4()),
        user_id=profile.user_id if profile is not None else None,
        screen=screen,

        recommendations=recommendations,

        total_candidates_evaluated=total_evaluated,
        total_matched=total_matched,
        total_recommended=len(recommendations),
        profile_complete=profile.is_complete() if profile is not None else False,

        processing_time_ms=processing_time_ms,
        engine_version=ENGINE_VERSION,

        warnings=warnings,
    )


def serialize_scored(scored: ScoredMaterial, rank: int) -> Dict[str, Any]:
    """Convert a ScoredMaterial to a flat JSON-serializable dict."""
    material = scored.material
    return {
        "rank": rank,
        "material_id": material.material_id,
        "title": material.title,
        "category_name": material.category_name,
        "difficulty": material.difficulty,
        "file_type": material.file_type,
        "avg_rating": material.avg_rating,
        "view_count": material.view_count,
        "raw_score": scored.raw_score,
        "similarity_score": round(scored.similarity_score, 2),
        "match_percent": round(scored.similarity_score * 100),
        "match_level": match_level(scored.similarity_score),
        "match_reasons": list(scored.match_reasons),
    }


def _generate_warnings(
    profile: Optional[PreferenceProfile],
    total_evaluated: int,
    total_matched: int,
    min_raw_score: int
) -> List[str]:
    """Generate any warnings for the output."""
    warnings = []

    if profile is not None and not profile.is_complete():
        warnings.append("Preference profile is incomplete. Recommendations may be less accurate.")

    if profile is not None and total_evaluated == 0:
        warnings.append("No materials available to recommend.")
    elif total_evaluated > 0 and total_matched == 0:
        warnings.append(f"No materials scored {min_raw_score} or higher.")

    return warnings
