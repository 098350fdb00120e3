# Export all recommendation models for easy imports
from .base import Base
from .category import RecCategory
from .material import RecMaterial
from .student_profile import RecStudentProfile

__all__ = [
    "Base",
    "RecCategory",
    "RecMaterial",
    "RecStudentProfile",
]
