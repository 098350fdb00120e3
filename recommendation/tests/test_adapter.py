"""
Tests for the catalog/profile adapter against an in-memory SQLite database.
"""

from recommendation.logic.adapter import (
    normalize_preferences,
    normalize_material_row,
    fetch_preference_profile,
    fetch_candidate_materials,
    fetch_material,
    fetch_related_materials,
)


def test_normalize_preferences_tolerates_bad_input():
    assert normalize_preferences(None).preferred_tags == []
    assert normalize_preferences("").difficulty_level is None
    assert normalize_preferences("{not json").preferred_formats == []

    profile = normalize_preferences(
        '{"difficulty_level": "Advanced", "preferred_tags": ["Go"], "theme": "dark"}',
        user_id="u1",
    )
    assert profile.user_id == "u1"
    assert profile.difficulty_level == "advanced"
    assert profile.preferred_tags == ["Go"]

    scalar = normalize_preferences({"difficulty_level": "beginner", "preferred_tags": 5})
    assert scalar.preferred_tags == ["5"]


def test_normalize_material_row_from_dict():
    material = normalize_material_row({"material_id": 3, "title": "Git", "view_count": None})
    assert material.material_id == 3
    assert material.view_count == 0


def test_fetch_preference_profile(db_session):
    profile = fetch_preference_profile(db_session, "student-1")
    assert profile.difficulty_level == "beginner"
    assert profile.preferred_tags == ["MySQL"]

    empty = fetch_preference_profile(db_session, "student-empty")
    assert empty is not None
    assert not empty.is_complete()

    assert fetch_preference_profile(db_session, "nobody") is None


def test_fetch_candidates_orders_by_rating_then_views(db_session):
    materials = fetch_candidate_materials(db_session, limit=10)

    # inactive material 5 is excluded; unrated material 4 sorts last
    assert [m.material_id for m in materials] == [2, 1, 3, 4]
    assert materials[1].category_name == "Database & Data"
    assert materials[3].avg_rating == 0.0
    assert materials[3].tags == ""


def test_fetch_candidates_filters(db_session):
    by_category = fetch_candidate_materials(db_session, category_id=1)
    assert [m.material_id for m in by_category] == [2, 1]

    by_difficulty = fetch_candidate_materials(db_session, difficulty="BEGINNER")
    assert [m.material_id for m in by_difficulty] == [1, 3]

    by_format = fetch_candidate_materials(db_session, file_type="pdf")
    assert [m.material_id for m in by_format] == [1, 3]

    by_search = fetch_candidate_materials(db_session, search="basis")
    assert [m.material_id for m in by_search] == [1]

    assert len(fetch_candidate_materials(db_session, limit=2)) == 2


def test_fetch_material(db_session):
    assert fetch_material(db_session, 3).title == "HTML & CSS Dasar"
    assert fetch_material(db_session, 999) is None


def test_fetch_related_materials(db_session):
    related = fetch_related_materials(db_session, 1)
    assert [m.material_id for m in related] == [2]

    assert fetch_related_materials(db_session, 3) == []
    assert fetch_related_materials(db_session, 999) == []
