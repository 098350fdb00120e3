"""
Data Adapter for the Scoring Engine

Reads student profiles and the material catalog from the database and
transforms rows into the engine's input contracts.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking/filtering by score
- NO DB writes
"""

import json
import logging
from typing import List, Dict, Any, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from pydantic import ValidationError

from .contracts import PreferenceProfile, Material
from ..models import RecMaterial, RecStudentProfile

logger = logging.getLogger(__name__)


PREFERENCE_KEYS = (
    "difficulty_level",
    "preferred_formats",
    "preferred_materials",
    "preferred_categories",
    "preferred_tags",
)


def normalize_preferences(
    raw: Any,
    user_id: Optional[str] = None
) -> PreferenceProfile:
    """
    Normalize a stored preferences blob into a PreferenceProfile.

    Tolerates None, JSON text, and missing or null keys; unknown keys are
    ignored.

    Args:
        raw: Preferences dict (or JSON string) as stored on the profile
        user_id: Owner of the preferences

    Returns:
        PreferenceProfile with every collection defaulted to empty
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            logger.warning(f"Unparseable preferences for user {user_id}, treating as empty")
            raw = {}

    if not isinstance(raw, dict):
        raw = {}

    data = {key: raw.get(key) for key in PREFERENCE_KEYS}
    return PreferenceProfile(user_id=user_id, **data)


def transform_material(row: RecMaterial) -> Dict[str, Any]:
    """
    Transform a single material record into a normalized dict.

    Args:
        row: RecMaterial ORM object (category joined)

    Returns:
        Dict matching Material fields
    """
    category = row.category
    return {
        "material_id": row.material_id,
        "title": row.title,
        "description": row.description,
        "category_id": row.category_id,
        "category_name": category.category_name if category is not None else "",
        "difficulty": row.difficulty,
        "file_type": row.file_type,
        "tags": row.tags,
        "avg_rating": row.avg_rating,
        "view_count": row.view_count,
        "download_count": row.download_count,
        "created_at": row.created_at,
    }


def normalize_material_row(row: Any) -> Material:
    """Build a Material from an ORM row or a plain dict."""
    if isinstance(row, RecMaterial):
        return Material(**transform_material(row))
    return Material(**dict(row))


def fetch_preference_profile(
    db: Session,
    user_id: str
) -> Optional[PreferenceProfile]:
    """
    Fetch a student's preference profile.

    Returns:
        PreferenceProfile, or None if the student has no profile record
    """
    record = db.query(RecStudentProfile).filter(
        RecStudentProfile.user_id == user_id
    ).first()
    if record is None:
        return None

    return normalize_preferences(record.preferences, user_id=user_id)


def fetch_candidate_materials(
    db: Session,
    limit: int = 30,
    category_id: Optional[int] = None,
    difficulty: Optional[str] = None,
    file_type: Optional[str] = None,
    search: Optional[str] = None
) -> List[Material]:
    """
    Fetch active catalog materials as scoring candidates.

    Ordered by average rating, then view count (both descending). The engine's
    stable ranking keeps this order among equal scores.

    Args:
        db: Database session
        limit: Max records to return
        category_id: Optional category filter
        difficulty: Optional difficulty filter (case-insensitive)
        file_type: Optional format filter (case-insensitive)
        search: Optional case-insensitive title substring

    Returns:
        List of Material ready for scoring
    """
    logger.info(f"🔍 Fetching candidate materials (limit={limit})")

    query = db.query(RecMaterial).filter(RecMaterial.is_active.is_(True))

    if category_id is not None:
        query = query.filter(RecMaterial.category_id == category_id)

    if difficulty:
        query = query.filter(func.lower(RecMaterial.difficulty) == difficulty.strip().lower())

    if file_type:
        query = query.filter(func.lower(RecMaterial.file_type) == file_type.strip().lower())

    if search:
        query = query.filter(RecMaterial.title.ilike(f"%{search.strip()}%"))

    rows = query.order_by(
        func.coalesce(RecMaterial.avg_rating, 0).desc(),
        func.coalesce(RecMaterial.view_count, 0).desc(),
        RecMaterial.material_id.asc(),
    ).limit(limit).all()

    return _to_materials(rows)


def fetch_material(db: Session, material_id: int) -> Optional[Material]:
    """Fetch and transform a single material by ID."""
    row = db.query(RecMaterial).filter(RecMaterial.material_id == material_id).first()
    if row is None:
        return None
    return normalize_material_row(row)


def fetch_related_materials(
    db: Session,
    material_id: int,
    limit: int = 3
) -> List[Material]:
    """
    Other active materials in the same category as material_id.

    Returns an empty list when the material is unknown or uncategorized.
    """
    current = db.query(RecMaterial).filter(RecMaterial.material_id == material_id).first()
    if current is None or current.category_id is None:
        return []

    rows = db.query(RecMaterial).filter(
        RecMaterial.category_id == current.category_id,
        RecMaterial.material_id != material_id,
        RecMaterial.is_active.is_(True),
    ).order_by(
        func.coalesce(RecMaterial.avg_rating, 0).desc(),
        RecMaterial.material_id.asc(),
    ).limit(limit).all()

    return _to_materials(rows)


def _to_materials(rows: List[RecMaterial]) -> List[Material]:
    materials = []
    for row in rows:
        try:
            materials.append(normalize_material_row(row))
        except ValidationError as e:
            # Skip rows that fail conversion
            logger.warning(f"Failed to transform material {row.material_id}: {e}")
            continue

    logger.info(f"📊 Materials fetched: {len(materials)}")
    return materials
