from typing import Optional
from datetime import datetime
from roster.schemas.base import BaseSchema, RequestSchema


# Request schemas. Required fields are optional here so the handlers can
# answer with {"error": "..."} instead of a schema error.
class CourseCreate(RequestSchema):
    title: Optional[str] = None
    description: Optional[str] = None


class CourseUpdate(RequestSchema):
    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None


class CourseDelete(RequestSchema):
    id: Optional[int] = None


# Response schemas
class CourseResponse(BaseSchema):
    id: int
    title: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    enrollment_count: int = 0
