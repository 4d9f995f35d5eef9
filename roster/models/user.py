from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from roster.core.database import Base
from roster.models.enrollment import user_courses


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    courses = relationship(
        "Course",
        secondary=user_courses,
        back_populates="users",
        order_by="Course.title",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User {self.id} {self.email}>"
