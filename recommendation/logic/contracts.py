"""
Data Contracts for the Material Scoring Engine

Defines Pydantic models for PreferenceProfile and Material (input) and
ScoredMaterial / RecommendationOutput (output).
These contracts are the API boundary for the scoring engine.

Upstream data is not guaranteed clean, so every field that may arrive as
null is defaulted here (empty string, zero or empty list) before any rule
sees it.
"""

from datetime import datetime
from typing import List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DifficultyLevel, ENGINE_VERSION


def _clean_str_list(value: Any) -> List[str]:
    """Trim entries, drop blanks and case-insensitive duplicates (first wins)."""
    if value is None:
        return []
    # A lone scalar counts as a one-item list
    if not isinstance(value, (list, tuple, set)):
        value = [value]
    cleaned: List[str] = []
    seen = set()
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if not text or text.lower() in seen:
            continue
        seen.add(text.lower())
        cleaned.append(text)
    return cleaned


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class PreferenceProfile(BaseModel):
    """
    A student's stored learning preferences.
    All four preference collections may be empty (incomplete profile).
    """
    model_config = ConfigDict(use_enum_values=True)

    # Identity (optional, for tracking)
    user_id: Optional[str] = None

    difficulty_level: Optional[DifficultyLevel] = None
    preferred_formats: List[str] = Field(default_factory=list)
    preferred_materials: List[str] = Field(default_factory=list)
    preferred_categories: List[str] = Field(default_factory=list)
    preferred_tags: List[str] = Field(default_factory=list)

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value):
        if value is None:
            return None
        if isinstance(value, DifficultyLevel):
            return value
        text = str(value).strip().lower()
        if text not in {level.value for level in DifficultyLevel}:
            return None
        return text

    @field_validator(
        "preferred_formats",
        "preferred_materials",
        "preferred_categories",
        "preferred_tags",
        mode="before",
    )
    @classmethod
    def _normalize_collections(cls, value):
        return _clean_str_list(value)

    def is_complete(self) -> bool:
        """Difficulty, formats, materials and categories are all filled in."""
        return bool(
            self.difficulty_level
            and self.preferred_formats
            and self.preferred_materials
            and self.preferred_categories
        )


class Material(BaseModel):
    """
    One catalog entry as supplied by the catalog source.
    Read-only to the scorer.
    """
    material_id: int
    title: str = ""
    description: str = ""
    category_id: Optional[int] = None
    category_name: str = ""
    difficulty: str = ""  # Beginner/Intermediate/Advanced, any case
    file_type: str = ""   # pdf/video/audio/...
    tags: str = ""        # comma-separated

    avg_rating: float = 0.0
    view_count: int = 0
    download_count: int = 0

    # Display ordering only, never scored
    created_at: Optional[datetime] = None

    @field_validator(
        "title", "description", "category_name", "difficulty", "file_type", "tags",
        mode="before",
    )
    @classmethod
    def _default_text(cls, value):
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value if v is not None)
        return str(value)

    @field_validator("avg_rating", mode="before")
    @classmethod
    def _default_rating(cls, value):
        return value if value is not None else 0.0

    @field_validator("view_count", "download_count", mode="before")
    @classmethod
    def _default_count(cls, value):
        if value is None:
            return 0
        return max(0, int(value))

    def tag_list(self) -> List[str]:
        """Tags split on comma, trimmed and lower-cased."""
        return [t.strip().lower() for t in self.tags.split(",") if t.strip()]


class ScoringOptions(BaseModel):
    """Caller-supplied presentation policy for one scoring invocation."""
    min_raw_score: int = Field(default=0, ge=0)
    max_results: Optional[int] = Field(default=None, ge=0)


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class RuleContribution(BaseModel):
    """A single fired rule and the points it contributed."""
    rule: str
    points: int = Field(ge=0)
    reason: Optional[str] = None


class ScoredMaterial(BaseModel):
    """
    A candidate material with its computed score.
    Created per scoring invocation, never persisted.
    """
    material: Material
    raw_score: int = Field(default=0, ge=0)
    similarity_score: float = Field(default=0.0, ge=0.0, le=0.99)
    match_reasons: List[str] = Field(default_factory=list)
    contributions: List[RuleContribution] = Field(default_factory=list)


class RecommendationOutput(BaseModel):
    """
    Envelope returned by the runner.
    Contains ranked recommendations with summary statistics.
    """
    # Request tracking
    request_id: Optional[str] = None
    user_id: Optional[str] = None
    screen: str = "recommendations"

    # Ranked results
    recommendations: List[ScoredMaterial] = Field(default_factory=list)

    # Summary Statistics
    total_candidates_evaluated: int = 0
    total_matched: int = 0
    total_recommended: int = 0
    profile_complete: bool = False

    # Processing metadata
    processing_time_ms: Optional[float] = None
    engine_version: str = ENGINE_VERSION

    # Warnings/Notes
    warnings: List[str] = Field(default_factory=list)
