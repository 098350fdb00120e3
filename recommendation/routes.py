"""
Recommendation API Routes

Exposes the material scoring engine via REST API.
"""

import logging
from typing import Optional, List, Dict, Any
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.orm import Session

from db import get_db
from .logic.constants import ENGINE_VERSION
from .logic.contracts import PreferenceProfile, Material, ScoringOptions
from .logic.engine import ScoringEngine
from .logic.adapter import fetch_material, fetch_related_materials
from .logic.output_assembler import serialize_scored
from .logic.runner import run_recommendations, get_recommendations_simple, DEFAULT_SCREEN


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])

engine = ScoringEngine()


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================

class ScoreRequest(BaseModel):
    """Request body for the stateless scoring endpoint."""
    preference_profile: Dict[str, Any] = Field(
        default_factory=dict,
        description="Student preference profile",
        examples=[{
            "difficulty_level": "beginner",
            "preferred_formats": ["pdf"],
            "preferred_materials": ["Basis Data"],
            "preferred_categories": ["database"],
            "preferred_tags": ["MySQL"]
        }]
    )
    materials: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Candidate materials, in catalog order"
    )
    min_raw_score: int = Field(default=0, ge=0, description="Minimum raw score to keep")
    max_results: Optional[int] = Field(default=None, ge=0, description="Maximum results to return")


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/score", summary="Score candidate materials against a preference profile")
def score_materials(request: ScoreRequest):
    """
    Score, rank and filter the supplied materials. No database access.

    **Request Body:**
    - `preference_profile`: difficulty level and preferred formats/materials/categories/tags
    - `materials`: candidate catalog entries
    - `min_raw_score` / `max_results`: presentation policy for this call
    """
    try:
        profile = PreferenceProfile(**request.preference_profile)
        candidates = [Material(**row) for row in request.materials]
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid scoring input: {str(e)}"
        )

    options = ScoringOptions(
        min_raw_score=request.min_raw_score,
        max_results=request.max_results,
    )
    results = engine.score(profile, candidates, options)

    return {
        "count": len(results),
        "total_evaluated": len(candidates),
        "recommendations": [
            serialize_scored(scored, rank) for rank, scored in enumerate(results, 1)
        ],
        "engine_version": ENGINE_VERSION,
    }


@router.get("/users/{user_id}", summary="Get material recommendations for a student")
def get_user_recommendations(
    user_id: str,
    screen: str = Query(default=DEFAULT_SCREEN, description="'dashboard' or 'recommendations'"),
    category_id: Optional[int] = Query(default=None),
    difficulty: Optional[str] = Query(default=None),
    file_type: Optional[str] = Query(default=None, description="Material format, e.g. 'pdf'"),
    search: Optional[str] = Query(default=None, description="Title substring"),
    format: str = Query(default="full", description="'full' or 'simple'"),
    db_session=Depends(get_db)
):
    """
    Generate recommendations from the student's stored preferences.

    **Response:**
    - Ranked materials with similarity scores and match reasons
    - Summary counts and warnings (incomplete profile, nothing matched)
    """
    filters = {
        "category_id": category_id,
        "difficulty": difficulty,
        "file_type": file_type,
        "search": search,
    }

    try:
        db: Session
        with db_session as db:
            if format == "simple":
                recommendations = get_recommendations_simple(db, user_id, screen=screen, **filters)
                return {
                    "recommendations": recommendations,
                    "count": len(recommendations)
                }

            output = run_recommendations(db, user_id, screen=screen, **filters)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Recommendation pipeline failed for user {user_id}")
        return JSONResponse(
            status_code=500,
            content={"error": str(e)}
        )

    recommendations = [
        serialize_scored(scored, rank)
        for rank, scored in enumerate(output.recommendations, 1)
    ]

    return {
        "request_id": output.request_id,
        "user_id": output.user_id,
        "screen": output.screen,
        "summary": {
            "total_evaluated": output.total_candidates_evaluated,
            "total_matched": output.total_matched,
            "total_recommended": output.total_recommended,
            "profile_complete": output.profile_complete,
            "processing_time_ms": output.processing_time_ms,
        },
        "recommendations": recommendations,
        "warnings": output.warnings,
        "engine_version": output.engine_version,
    }


@router.get("/materials/{material_id}/related", summary="Materials in the same category")
def get_related_materials(
    material_id: int,
    limit: int = Query(default=3, ge=1, le=20),
    db_session=Depends(get_db)
):
    db: Session
    with db_session as db:
        if fetch_material(db, material_id) is None:
            raise HTTPException(status_code=404, detail="Material not found")
        related = fetch_related_materials(db, material_id, limit=limit)

    return {
        "material_id": material_id,
        "related": [
            {
                "material_id": m.material_id,
                "title": m.title,
                "difficulty": m.difficulty,
                "avg_rating": m.avg_rating,
            }
            for m in related
        ],
        "count": len(related),
    }


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Recommendation engine health check")
def health_check():
    """Check if recommendation engine is operational."""
    return {"status": "ok", "engine": "material_scoring", "version": ENGINE_VERSION}
