from sqlalchemy import Column, Integer, String, Text, DateTime, func, select
from sqlalchemy.orm import column_property, relationship
from roster.core.database import Base
from roster.models.enrollment import user_courses
from roster.models.user import utcnow


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Number of enrolled users, loaded with every course row
    enrollment_count = column_property(
        select(func.count(user_courses.c.user_id))
        .where(user_courses.c.course_id == id)
        .correlate_except(user_courses)
        .scalar_subquery()
    )

    # Relationships
    users = relationship(
        "User",
        secondary=user_courses,
        back_populates="courses",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Course {self.id} {self.title!r}>"
