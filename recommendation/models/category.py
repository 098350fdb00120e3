from sqlalchemy import Column, Integer, String, Boolean

from .base import Base


class RecCategory(Base):
    __tablename__ = "rec_categories"

    category_id = Column(Integer, primary_key=True)
    category_name = Column(String, nullable=False)
    icon = Column(String)
    is_active = Column(Boolean, default=True)
