"""
Recommendation Logic Module

Provides the deterministic, rule-based scoring engine for learning materials.
"""

from .contracts import (
    PreferenceProfile,
    Material,
    ScoringOptions,
    RuleContribution,
    ScoredMaterial,
    RecommendationOutput,
)
from .engine import ScoringEngine, score_materials
from .constants import DifficultyLevel

__all__ = [
    # Main engine
    "ScoringEngine",
    "score_materials",

    # Contracts
    "PreferenceProfile",
    "Material",
    "ScoringOptions",
    "RuleContribution",
    "ScoredMaterial",
    "RecommendationOutput",

    # Enums
    "DifficultyLevel",
]
