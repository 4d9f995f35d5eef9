from fastapi import APIRouter
from roster.api.routes import users, courses, user_courses

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(courses.router, prefix="/courses", tags=["courses"])
api_router.include_router(user_courses.router, prefix="/user-courses", tags=["enrollments"])
