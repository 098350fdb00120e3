from sqlalchemy import Column, Integer, String, Text, JSON

from .base import Base


class RecStudentProfile(Base):
    __tablename__ = "rec_student_profiles"

    user_id = Column(String, primary_key=True)
    full_name = Column(String)
    nim = Column(String)
    angkatan = Column(Integer)
    bio = Column(Text)

    # {difficulty_level, preferred_formats, preferred_materials,
    #  preferred_categories, preferred_tags}
    preferences = Column(JSON)
