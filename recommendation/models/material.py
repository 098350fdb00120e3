from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base


class RecMaterial(Base):
    __tablename__ = "rec_materials"

    material_id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    category_id = Column(Integer, ForeignKey("rec_categories.category_id"))

    # Catalog attributes
    difficulty = Column(String)  # Beginner/Intermediate/Advanced
    file_type = Column(String)
    tags = Column(Text)          # comma-separated

    # Aggregated stats
    avg_rating = Column(Float)
    view_count = Column(Integer, default=0)
    download_count = Column(Integer, default=0)

    # Meta
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime)

    category = relationship("RecCategory", lazy="joined")
