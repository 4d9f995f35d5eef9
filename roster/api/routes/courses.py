import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roster.core.database import get_db
from roster.core.errors import NotFound, StoreError, ValidationError
from roster.models.course import Course
from roster.schemas.base import SuccessResponse
from roster.schemas.course import CourseCreate, CourseDelete, CourseResponse, CourseUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_course(db: Session, course_id: int) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFound("Course not found")
    return course


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip() or None


@router.get("", response_model=List[CourseResponse])
def list_courses(db: Session = Depends(get_db)):
    """List all courses with their enrollment counts, newest first."""
    try:
        return db.query(Course).order_by(Course.created_at.desc(), Course.id.desc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch courses")
        raise StoreError(str(e) or "Failed to fetch courses")


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(course: CourseCreate, db: Session = Depends(get_db)):
    """Create a new course."""
    if not course.title or not course.title.strip():
        raise ValidationError("Title is required")

    try:
        db_course = Course(title=course.title.strip(), description=_clean_description(course.description))
        db.add(db_course)
        db.commit()
        db.refresh(db_course)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create course %r", course.title)
        raise StoreError(str(e) or "Failed to create course")

    logger.info("Created course %s", db_course.id)
    return db_course


@router.patch("", response_model=CourseResponse)
def update_course(course_update: CourseUpdate, db: Session = Depends(get_db)):
    """Update a course's title and description."""
    if course_update.id is None:
        raise ValidationError("Course id is required")
    if not course_update.title or not course_update.title.strip():
        raise ValidationError("Title is required")

    course = _get_course(db, course_update.id)
    try:
        course.title = course_update.title.strip()
        if "description" in course_update.model_fields_set:
            course.description = _clean_description(course_update.description)
        db.commit()
        db.refresh(course)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update course %s", course_update.id)
        raise StoreError(str(e) or "Failed to update course")

    logger.info("Updated course %s", course.id)
    return course


@router.delete("", response_model=SuccessResponse)
def delete_course(body: CourseDelete, db: Session = Depends(get_db)):
    """Delete a course. Enrollments in it are removed by the store."""
    if body.id is None:
        raise ValidationError("Course id is required")

    course = _get_course(db, body.id)
    try:
        db.delete(course)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to delete course %s", body.id)
        raise StoreError(str(e) or "Failed to delete course")

    logger.info("Deleted course %s", body.id)
    return SuccessResponse()
