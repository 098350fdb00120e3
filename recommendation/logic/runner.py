"""
Engine Runner

Orchestrates the recommendation pipeline for a screen:
1. Accepts a user id (or an already-resolved profile)
2. Fetches the preference profile and candidates via adapter
3. Runs the scoring pipeline with the screen's threshold and result cap
4. Returns an assembled RecommendationOutput

Screen policy (candidate pool, threshold, cap) lives here, never in the engine.
"""

import logging
import time
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session

from .adapter import fetch_preference_profile, fetch_candidate_materials
from .contracts import PreferenceProfile, Material, ScoringOptions, RecommendationOutput
from .output_assembler import assemble_output, serialize_scored
from .engine import ScoringEngine
from .ranker import truncate

logger = logging.getLogger(__name__)

engine = ScoringEngine()


# Dashboard preview is stricter and shorter than the full recommendations page
SCREEN_POLICIES: Dict[str, Dict[str, int]] = {
    "dashboard": {
        "candidate_pool": 30,
        "min_raw_score": 30,
        "max_results": 6,
    },
    "recommendations": {
        "candidate_pool": 50,
        "min_raw_score": 20,
        "max_results": 20,
    },
}

DEFAULT_SCREEN = "recommendations"


def get_screen_policy(screen: str) -> Dict[str, int]:
    """Look up a screen policy. Raises ValueError for unknown screens."""
    policy = SCREEN_POLICIES.get(screen)
    if policy is None:
        raise ValueError(
            f"Unknown screen '{screen}'. Expected one of: {', '.join(sorted(SCREEN_POLICIES))}"
        )
    return policy


def run_scoring(
    profile: PreferenceProfile,
    candidates: List[Material],
    screen: str = DEFAULT_SCREEN,
    options: Optional[ScoringOptions] = None,
    extra_warnings: Optional[List[str]] = None
) -> RecommendationOutput:
    """
    Score already-fetched candidates under a screen policy.

    Args:
        profile: Student's preference profile
        candidates: Candidate materials, pre-sorted by the catalog query
        screen: Screen policy name
        options: Overrides the screen's threshold and cap when given
        extra_warnings: Warnings to carry into the output

    Returns:
        RecommendationOutput
    """
    policy = get_screen_policy(screen)
    if options is None:
        options = ScoringOptions(
            min_raw_score=policy["min_raw_score"],
            max_results=policy["max_results"],
        )

    start_time = time.perf_counter()

    logger.info(f"🎲 Scoring {len(candidates)} candidates for screen '{screen}'...")
    # Uncapped first, so the output can report how many cleared the threshold
    matched = engine.score(
        profile, candidates, ScoringOptions(min_raw_score=options.min_raw_score)
    )
    results = truncate(matched, options.max_results)
    logger.info(f"🏆 Matched {len(matched)}, returning {len(results)}")

    processing_time = (time.perf_counter() - start_time) * 1000

    return assemble_output(
        profile=profile,
        screen=screen,
        recommendations=results,
        total_evaluated=len(candidates),
        total_matched=len(matched),
        min_raw_score=options.min_raw_score,
        processing_time_ms=round(processing_time, 2),
        extra_warnings=extra_warnings,
    )


def run_recommendations(
    db: Session,
    user_id: str,
    screen: str = DEFAULT_SCREEN,
    category_id: Optional[int] = None,
    difficulty: Optional[str] = None,
    file_type: Optional[str] = None,
    search: Optional[str] = None
) -> RecommendationOutput:
    """
    Main entry point: run the full recommendation pipeline for a user.

    Args:
        db: Database session
        user_id: Student whose preferences drive scoring
        screen: Screen policy name ("dashboard" or "recommendations")
        category_id: Optional catalog filter applied before scoring
        difficulty: Optional catalog filter applied before scoring
        file_type: Optional format filter applied before scoring
        search: Optional title search applied before scoring

    Returns:
        RecommendationOutput with ranked recommendations
    """
    policy = get_screen_policy(screen)

    logger.info(f"🚀 Starting recommendation pipeline for user: {user_id} (screen={screen})")

    profile = fetch_preference_profile(db, user_id)
    if profile is None:
        logger.warning(f"⚠️ No preference profile for user {user_id}")
        return RecommendationOutput(
            user_id=user_id,
            screen=screen,
            warnings=["No preference profile found. Complete your profile to get recommendations."],
        )

    candidates = fetch_candidate_materials(
        db,
        limit=policy["candidate_pool"],
        category_id=category_id,
        difficulty=difficulty,
        file_type=file_type,
        search=search,
    )

    output = run_scoring(profile, candidates, screen=screen)

    logger.info(
        f"✨ Recommendation pipeline complete ({output.processing_time_ms:.2f}ms, "
        f"{output.total_recommended} recommended)"
    )
    return output


def get_recommendations_simple(
    db: Session,
    user_id: str,
    screen: str = DEFAULT_SCREEN,
    **filters
) -> List[Dict[str, Any]]:
    """
    Simplified output format for easier consumption.

    Returns list of dicts instead of full RecommendationOutput.
    """
    output = run_recommendations(db, user_id, screen=screen, **filters)
    return [
        serialize_scored(scored, rank)
        for rank, scored in enumerate(output.recommendations, 1)
    ]
