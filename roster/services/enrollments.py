"""
Enrollment operations over the user <-> course association.

Each function takes the session it should use and holds no state between
calls. Writes go straight to the association table so a duplicate pair is
reported by the store's primary key constraint rather than by a pre-check.
"""
import logging
from typing import List, Optional

from sqlalchemy import delete, insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from roster.core.errors import Conflict, NotFound, StoreError, ValidationError
from roster.models.course import Course
from roster.models.enrollment import user_courses
from roster.models.user import User

logger = logging.getLogger(__name__)

IDS_REQUIRED = "User ID and Course ID are required"
ALREADY_ENROLLED = "User is already enrolled in this course"


def _require_ids(user_id: Optional[int], course_id: Optional[int]) -> None:
    if user_id is None or course_id is None:
        raise ValidationError(IDS_REQUIRED)


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def _get_course(db: Session, course_id: int) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFound("Course not found")
    return course


def list_user_courses(db: Session, user_id: int) -> List[Course]:
    """Courses the user is enrolled in, by title ascending."""
    try:
        user = _get_user(db, user_id)
        return list(user.courses)
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch courses for user %s", user_id)
        raise StoreError(str(e) or "Failed to fetch user courses")


def list_users_with_courses(db: Session) -> List[User]:
    """Every user with their courses, newest user first."""
    try:
        return (
            db.query(User)
            .options(selectinload(User.courses))
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch users with courses")
        raise StoreError(str(e) or "Failed to fetch user courses")


def assign_course(db: Session, user_id: Optional[int], course_id: Optional[int]) -> User:
    """Connect the pair and return the user with the full course list."""
    _require_ids(user_id, course_id)
    user = _get_user(db, user_id)
    _get_course(db, course_id)

    try:
        db.execute(insert(user_courses).values(user_id=user_id, course_id=course_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(ALREADY_ENROLLED)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to assign course %s to user %s", course_id, user_id)
        raise StoreError(str(e) or "Failed to assign course")

    logger.info("Assigned course %s to user %s", course_id, user_id)
    db.refresh(user)
    return user


def unassign_course(db: Session, user_id: Optional[int], course_id: Optional[int]) -> User:
    """Disconnect the pair. Removing a pair that does not exist is a no-op."""
    _require_ids(user_id, course_id)
    user = _get_user(db, user_id)

    try:
        result = db.execute(
            delete(user_courses).where(
                user_courses.c.user_id == user_id,
                user_courses.c.course_id == course_id,
            )
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to remove course %s from user %s", course_id, user_id)
        raise StoreError(str(e) or "Failed to remove course assignment")

    if result.rowcount:
        logger.info("Removed course %s from user %s", course_id, user_id)
    db.refresh(user)
    return user
