"""
Create/edit forms and the edit/delete bookkeeping of the entity tables.

Forms validate presence only; anything else is left to the API, whose error
text ends up in ``error``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from roster.services.hooks import call_hook
from roster.services.roster_client import RosterAPIError, RosterClient

logger = logging.getLogger(__name__)


class UserForm:
    def __init__(
        self,
        client: RosterClient,
        initial: dict | None = None,
        on_saved: Callable[[], Any] | None = None,
    ):
        self.client = client
        self.on_saved = on_saved
        self.initial: dict | None = None
        self.name = ""
        self.email = ""
        self.loading = False
        self.error: str | None = None
        self.success = False
        self.load(initial)

    @property
    def is_edit(self) -> bool:
        return self.initial is not None

    def load(self, initial: dict | None) -> None:
        self.initial = initial
        if initial:
            self.name = initial.get("name") or ""
            self.email = initial.get("email") or ""

    async def submit(self) -> bool:
        self.error = None
        self.success = False

        email = self.email.strip()
        name = self.name.strip() or None
        if not email:
            self.error = "Email is required"
            return False
        if "@" not in email:
            self.error = "Enter a valid email address"
            return False

        self.loading = True
        try:
            if self.is_edit:
                await self.client.update_user(self.initial["id"], email=email, name=name)
            else:
                await self.client.create_user(email=email, name=name)
        except RosterAPIError as e:
            self.error = e.message
            return False
        except httpx.HTTPError as e:
            logger.warning("Saving user failed: %s", e)
            self.error = "Failed to save user"
            return False
        finally:
            self.loading = False

        self.success = True
        if not self.is_edit:
            self.name = ""
            self.email = ""
        await call_hook(self.on_saved)
        return True


class CourseForm:
    def __init__(
        self,
        client: RosterClient,
        initial: dict | None = None,
        on_saved: Callable[[], Any] | None = None,
    ):
        self.client = client
        self.on_saved = on_saved
        self.initial: dict | None = None
        self.title = ""
        self.description = ""
        self.loading = False
        self.error: str | None = None
        self.load(initial)

    @property
    def is_edit(self) -> bool:
        return self.initial is not None

    def load(self, initial: dict | None) -> None:
        self.initial = initial
        if initial:
            self.title = initial.get("title") or ""
            self.description = initial.get("description") or ""

    async def submit(self) -> bool:
        title = self.title.strip()
        if not title:
            self.error = "Title is required"
            return False
        description = self.description.strip() or None

        self.loading = True
        self.error = None
        try:
            if self.is_edit:
                await self.client.update_course(self.initial["id"], title=title, description=description)
            else:
                await self.client.create_course(title=title, description=description)
        except RosterAPIError as e:
            self.error = e.message
            return False
        except httpx.HTTPError as e:
            logger.warning("Saving course failed: %s", e)
            self.error = f"Failed to {'update' if self.is_edit else 'create'} course"
            return False
        finally:
            self.loading = False

        if not self.is_edit:
            self.title = ""
            self.description = ""
        await call_hook(self.on_saved)
        return True


class EntityActions:
    """
    Edit/delete selection for one entity table (users or courses).

    ``notify(message, severity)`` receives the snackbar messages;
    ``on_refresh()`` is called after every change so the table reloads.
    """

    def __init__(
        self,
        label: str,
        client: RosterClient,
        delete_method: str,
        on_refresh: Callable[[], Any] | None = None,
        notify: Callable[[str, str], Any] | None = None,
    ):
        self.label = label
        self.client = client
        self.delete_method = delete_method
        self.on_refresh = on_refresh
        self.notify = notify

        self.edit_target: dict | None = None
        self.delete_target: dict | None = None
        self.action_loading = False
        self.action_error: str | None = None

    def start_edit(self, entity: dict) -> None:
        self.edit_target = entity

    def cancel_edit(self) -> None:
        self.edit_target = None

    async def edit_succeeded(self) -> None:
        await call_hook(self.on_refresh)
        self.cancel_edit()
        await call_hook(self.notify, f"{self.label} updated successfully!", "success")

    async def create_succeeded(self) -> None:
        await call_hook(self.on_refresh)
        await call_hook(self.notify, f"{self.label} created successfully!", "success")

    def start_delete(self, entity: dict) -> None:
        self.delete_target = entity
        self.action_error = None

    def cancel_delete(self) -> None:
        self.delete_target = None

    async def confirm_delete(self) -> bool:
        if self.delete_target is None:
            return False

        self.action_loading = True
        self.action_error = None
        try:
            delete = getattr(self.client, self.delete_method)
            await delete(self.delete_target["id"])
        except RosterAPIError as e:
            self.action_error = e.message
            return False
        except httpx.HTTPError as e:
            logger.warning("Deleting %s failed: %s", self.label.lower(), e)
            self.action_error = f"Failed to delete {self.label.lower()}"
            return False
        finally:
            self.action_loading = False

        await call_hook(self.on_refresh)
        self.cancel_delete()
        await call_hook(self.notify, f"{self.label} deleted successfully!", "success")
        return True


def user_actions(client: RosterClient, **hooks: Any) -> EntityActions:
    return EntityActions("User", client, "delete_user", **hooks)


def course_actions(client: RosterClient, **hooks: Any) -> EntityActions:
    return EntityActions("Course", client, "delete_course", **hooks)
