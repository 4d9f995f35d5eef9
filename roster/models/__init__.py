# Import all models here so Base.metadata is complete for Alembic
from roster.models.enrollment import user_courses
from roster.models.user import User
from roster.models.course import Course

__all__ = [
    "User",
    "Course",
    "user_courses",
]
