"""
Shared fixtures: a sample preference profile, material factory and an
in-memory SQLite catalog.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base
from recommendation.models import RecCategory, RecMaterial, RecStudentProfile
from recommendation.logic import PreferenceProfile, Material


SAMPLE_PREFERENCES = {
    "difficulty_level": "beginner",
    "preferred_formats": ["pdf"],
    "preferred_materials": ["Basis Data"],
    "preferred_categories": ["database"],
    "preferred_tags": ["MySQL"],
}


@pytest.fixture
def profile():
    return PreferenceProfile(user_id="student-1", **SAMPLE_PREFERENCES)


@pytest.fixture
def empty_profile():
    return PreferenceProfile(user_id="student-empty")


@pytest.fixture
def make_material():
    """Factory for materials; every field not given is left at its default."""
    def _make(material_id=1, **fields):
        return Material(material_id=material_id, **fields)
    return _make


@pytest.fixture
def database_material(make_material):
    return make_material(
        material_id=1,
        title="Pengantar Basis Data",
        description="Konsep dasar relasi, tabel dan query.",
        category_name="Database & Data",
        difficulty="Beginner",
        file_type="pdf",
        tags="MySQL, SQL",
        avg_rating=4.6,
        view_count=600,
    )


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = Session()
    try:
        _seed(session)
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def _seed(session):
    session.add_all([
        RecCategory(category_id=1, category_name="Database & Data"),
        RecCategory(category_id=2, category_name="Web Development"),
        RecCategory(category_id=3, category_name="Machine-Learning"),
    ])
    session.add_all([
        RecMaterial(
            material_id=1,
            title="Pengantar Basis Data",
            description="Konsep dasar relasi, tabel dan query.",
            category_id=1,
            difficulty="Beginner",
            file_type="pdf",
            tags="MySQL, SQL",
            avg_rating=4.6,
            view_count=600,
            download_count=120,
            created_at=datetime(2025, 1, 10),
        ),
        RecMaterial(
            material_id=2,
            title="Advanced SQL Tuning",
            description="Query optimization and indexing strategies.",
            category_id=1,
            difficulty="Advanced",
            file_type="video",
            tags="PostgreSQL",
            avg_rating=4.8,
            view_count=50,
            download_count=10,
            created_at=datetime(2025, 2, 1),
        ),
        RecMaterial(
            material_id=3,
            title="HTML & CSS Dasar",
            description="Belajar membuat halaman web pertama.",
            category_id=2,
            difficulty="beginner",
            file_type="PDF",
            tags="HTML, CSS",
            avg_rating=4.2,
            view_count=150,
            download_count=30,
            created_at=datetime(2025, 3, 5),
        ),
        RecMaterial(
            material_id=4,
            title="Neural Networks",
            description=None,
            category_id=3,
            difficulty="Intermediate",
            file_type="video",
            tags=None,
            avg_rating=None,
            view_count=None,
            download_count=None,
        ),
        RecMaterial(
            material_id=5,
            title="Archived Basis Data Notes",
            category_id=1,
            difficulty="Beginner",
            file_type="pdf",
            tags="MySQL",
            avg_rating=5.0,
            view_count=900,
            is_active=False,
        ),
    ])
    session.add_all([
        RecStudentProfile(
            user_id="student-1",
            full_name="Siti Aminah",
            nim="2101001",
            angkatan=2021,
            preferences=dict(SAMPLE_PREFERENCES),
        ),
        RecStudentProfile(
            user_id="student-empty",
            full_name="Budi Santoso",
            nim="2101002",
            angkatan=2021,
            preferences=None,
        ),
    ])
    session.commit()
