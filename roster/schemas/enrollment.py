from typing import Optional
from roster.schemas.base import RequestSchema


class EnrollmentRequest(RequestSchema):
    """Body of POST/DELETE /user-courses."""
    user_id: Optional[int] = None
    course_id: Optional[int] = None
