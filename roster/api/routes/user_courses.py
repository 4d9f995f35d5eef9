from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from roster.core.database import get_db
from roster.schemas.course import CourseResponse
from roster.schemas.enrollment import EnrollmentRequest
from roster.schemas.user import UserWithCoursesResponse
from roster.services import enrollments

router = APIRouter()


@router.get("", response_model=None)
def get_user_courses(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    """
    Courses of one user (``?userId=``), or every user with their courses.

    Courses are ordered by title; users by creation time, newest first.
    """
    if user_id is not None:
        courses = enrollments.list_user_courses(db, user_id)
        return [CourseResponse.model_validate(c) for c in courses]

    users = enrollments.list_users_with_courses(db)
    return [UserWithCoursesResponse.model_validate(u) for u in users]


@router.post("", response_model=UserWithCoursesResponse)
def assign_course(body: EnrollmentRequest, db: Session = Depends(get_db)):
    """Enroll a user in a course."""
    return enrollments.assign_course(db, body.user_id, body.course_id)


@router.delete("", response_model=UserWithCoursesResponse)
def remove_course(body: EnrollmentRequest, db: Session = Depends(get_db)):
    """Remove a user from a course."""
    return enrollments.unassign_course(db, body.user_id, body.course_id)
