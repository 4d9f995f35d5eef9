"""Async HTTP client for the roster API, used by the UI controllers."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from roster.core.config import get_settings

logger = logging.getLogger(__name__)


class RosterAPIError(Exception):
    """A non-2xx answer from the API, carrying the server's error text."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_text(response: httpx.Response, fallback: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return fallback


class RosterClient:
    """
    Thin wrapper over the JSON routes.

    Either give it a base URL or an already configured ``httpx.AsyncClient``
    (tests hand in one bound to ``httpx.ASGITransport``).
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if http_client is None:
            settings = get_settings()
            http_client = httpx.AsyncClient(
                base_url=base_url or settings.api_url,
                timeout=timeout if timeout is not None else settings.client_timeout,
            )
        self._http = http_client

    async def __aenter__(self) -> RosterClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        response = await self._http.request(method, f"/api{path}", json=json, params=params)
        if response.is_success:
            return response.json()
        message = _error_text(response, fallback)
        logger.debug("%s %s -> %s: %s", method, path, response.status_code, message)
        raise RosterAPIError(message, response.status_code)

    # ---------- users ----------

    async def list_users(self) -> list[dict]:
        return await self._request("GET", "/users", fallback="Failed to fetch users")

    async def create_user(self, email: str, name: str | None = None) -> dict:
        return await self._request(
            "POST", "/users", json={"name": name, "email": email}, fallback="Failed to save user"
        )

    async def update_user(self, user_id: int, email: str, name: str | None = None) -> dict:
        return await self._request(
            "PATCH",
            "/users",
            json={"id": user_id, "name": name, "email": email},
            fallback="Failed to save user",
        )

    async def delete_user(self, user_id: int) -> dict:
        return await self._request("DELETE", "/users", json={"id": user_id}, fallback="Failed to delete user")

    # ---------- courses ----------

    async def list_courses(self) -> list[dict]:
        return await self._request("GET", "/courses", fallback="Failed to fetch courses")

    async def create_course(self, title: str, description: str | None = None) -> dict:
        return await self._request(
            "POST",
            "/courses",
            json={"title": title, "description": description},
            fallback="Failed to create course",
        )

    async def update_course(self, course_id: int, title: str, description: str | None = None) -> dict:
        return await self._request(
            "PATCH",
            "/courses",
            json={"id": course_id, "title": title, "description": description},
            fallback="Failed to update course",
        )

    async def delete_course(self, course_id: int) -> dict:
        return await self._request(
            "DELETE", "/courses", json={"id": course_id}, fallback="Failed to delete course"
        )

    # ---------- enrollments ----------

    async def list_user_courses(self, user_id: int) -> list[dict]:
        return await self._request(
            "GET", "/user-courses", params={"userId": user_id}, fallback="Failed to fetch user courses"
        )

    async def list_users_with_courses(self) -> list[dict]:
        return await self._request("GET", "/user-courses", fallback="Failed to fetch user courses")

    async def assign_course(self, user_id: int, course_id: int) -> dict:
        return await self._request(
            "POST",
            "/user-courses",
            json={"userId": user_id, "courseId": course_id},
            fallback="Failed to assign course",
        )

    async def remove_course(self, user_id: int, course_id: int) -> dict:
        return await self._request(
            "DELETE",
            "/user-courses",
            json={"userId": user_id, "courseId": course_id},
            fallback="Failed to remove course",
        )
