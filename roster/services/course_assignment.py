"""
State and commands behind the "Manage Courses" dialog.

The controller keeps two lists for the focused user: the full catalog and the
user's current courses. Every successful assign/remove is followed by a full
re-fetch of both lists and then by the ``on_assignment_change`` hook, so views
that show enrollments elsewhere can refresh themselves.

Each fetch is tagged with the user it was issued for and the dialog
activation it belongs to. A completion whose tag is no longer current (the
dialog closed, or moved to another user) is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import httpx

from roster.services.hooks import call_hook
from roster.services.roster_client import RosterAPIError, RosterClient

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch data"
ASSIGN_FAILED = "Failed to assign course"
REMOVE_FAILED = "Failed to remove course"


def _user_id(user: dict | None) -> Any:
    return user["id"] if user else None


class CourseAssignmentController:
    def __init__(
        self,
        client: RosterClient,
        on_assignment_change: Callable[[], Any] | None = None,
    ):
        self.client = client
        self.on_assignment_change = on_assignment_change

        self.user: dict | None = None
        self.open = False

        self.all_courses: list[dict] = []
        self.user_courses: list[dict] = []
        self.selected_course_id: int | None = None
        self.loading = False
        self.action_loading = False
        self.error: str | None = None

        self._activation = 0

    @property
    def user_id(self) -> Any:
        return _user_id(self.user)

    @property
    def available_courses(self) -> list[dict]:
        """Catalog courses the user is not enrolled in."""
        enrolled = {course["id"] for course in self.user_courses}
        return [course for course in self.all_courses if course["id"] not in enrolled]

    def _tag(self) -> tuple[Any, int]:
        return (self.user_id, self._activation)

    def _is_current(self, tag: tuple[Any, int]) -> bool:
        return tag == self._tag()

    async def sync(self, user: dict | None, open: bool) -> None:
        """
        Feed the dialog's current user and open flag.

        Data is fetched when the dialog is open with a user and either of the
        two changed. Closing keeps the old lists around, untouched.
        """
        if open == self.open and _user_id(user) == self.user_id:
            self.user = user
            return

        self.user = user
        self.open = open
        self._activation += 1
        if open and user is not None:
            await self.fetch_data()
        else:
            # Anything still in flight now belongs to a stale activation
            self.loading = False

    async def fetch_data(self) -> bool:
        """Reload the catalog and the user's courses together."""
        if self.user is None or not self.open:
            return False

        tag = self._tag()
        self.loading = True
        self.error = None
        try:
            all_courses, user_courses = await asyncio.gather(
                self.client.list_courses(),
                self.client.list_user_courses(tag[0]),
            )
        except (RosterAPIError, httpx.HTTPError) as e:
            if self._is_current(tag):
                logger.warning("Fetching courses for user %s failed: %s", tag[0], e)
                self.error = FETCH_FAILED
            return False
        finally:
            if self._is_current(tag):
                self.loading = False

        if not self._is_current(tag):
            logger.debug("Dropping stale course data for user %s", tag[0])
            return False

        self.all_courses = all_courses
        self.user_courses = user_courses
        return True

    async def assign_course(self) -> None:
        """Enroll the focused user in the selected course."""
        if not self.selected_course_id or self.user is None:
            return
        await self._run_command(
            self.client.assign_course, self.selected_course_id, ASSIGN_FAILED, clear_selection=True
        )

    async def remove_course(self, course_id: int) -> None:
        """Drop one of the focused user's courses."""
        if self.user is None:
            return
        await self._run_command(self.client.remove_course, course_id, REMOVE_FAILED)

    async def _run_command(
        self,
        command: Callable[[Any, Any], Any],
        course_id: Any,
        fallback: str,
        clear_selection: bool = False,
    ) -> None:
        tag = self._tag()
        self.action_loading = True
        self.error = None
        try:
            await command(tag[0], course_id)
        except RosterAPIError as e:
            if self._is_current(tag):
                self.error = e.message or fallback
        except httpx.HTTPError as e:
            logger.warning("%s for user %s: %s", fallback, tag[0], e)
            if self._is_current(tag):
                self.error = fallback
        else:
            if clear_selection and self._is_current(tag):
                self.selected_course_id = None
            await self.fetch_data()
            await call_hook(self.on_assignment_change)
        finally:
            self.action_loading = False
