from sqlalchemy import Column, ForeignKey, Integer, Table
from roster.core.database import Base


# Plain association table: an enrollment is only the (user, course) pair.
# The composite primary key keeps each pair unique.
user_courses = Table(
    "user_courses",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("course_id", Integer, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True, index=True),
)
