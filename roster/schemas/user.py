from typing import List, Optional
from datetime import datetime
from roster.schemas.base import BaseSchema, RequestSchema
from roster.schemas.course import CourseResponse


# Request schemas
class UserCreate(RequestSchema):
    name: Optional[str] = None
    email: Optional[str] = None


class UserUpdate(RequestSchema):
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None


class UserDelete(RequestSchema):
    id: Optional[int] = None


# Response schemas
class UserResponse(BaseSchema):
    id: int
    name: Optional[str] = None
    email: str
    created_at: datetime
    updated_at: datetime


class UserWithCoursesResponse(UserResponse):
    courses: List[CourseResponse] = []
