import pytest

from roster.services.forms import CourseForm, UserForm, course_actions, user_actions
from tests.fakes import FakeRosterClient


@pytest.fixture
def client():
    return FakeRosterClient([{"id": 1, "title": "Algebra", "description": None}])


@pytest.mark.asyncio
async def test_user_form_requires_email(client):
    form = UserForm(client)
    form.name = "Alice"

    assert await form.submit() is False
    assert form.error == "Email is required"
    assert client.calls == []


@pytest.mark.asyncio
async def test_user_form_rejects_email_without_at_sign(client):
    form = UserForm(client)
    form.email = "not-an-email"

    assert await form.submit() is False
    assert form.error == "Enter a valid email address"
    assert client.calls == []


@pytest.mark.asyncio
async def test_user_form_create_clears_fields_and_calls_hook(client):
    saved = []
    form = UserForm(client, on_saved=lambda: saved.append(True))
    form.name, form.email = " Alice ", "alice@x.com "

    assert await form.submit() is True
    assert client.calls == [("create_user", "alice@x.com", "Alice")]
    assert (form.name, form.email) == ("", "")
    assert form.success is True
    assert saved == [True]


@pytest.mark.asyncio
async def test_user_form_shows_server_error(client):
    await client.create_user("alice@x.com")
    form = UserForm(client)
    form.email = "alice@x.com"

    assert await form.submit() is False
    assert form.error == "User with this email already exists"
    assert form.loading is False


@pytest.mark.asyncio
async def test_user_form_edit_patches_and_keeps_values(client):
    form = UserForm(client, initial={"id": 7, "name": "Old", "email": "old@x.com"})
    form.email = "new@x.com"

    assert await form.submit() is True
    assert client.calls == [("update_user", 7, "new@x.com", "Old")]
    assert form.email == "new@x.com"


@pytest.mark.asyncio
async def test_course_form_trims_and_nulls_blank_description(client):
    form = CourseForm(client)
    form.title, form.description = "  Biology ", "   "

    assert await form.submit() is True
    assert client.calls == [("create_course", "Biology", None)]
    assert form.title == ""


@pytest.mark.asyncio
async def test_course_form_requires_title(client):
    form = CourseForm(client, initial={"id": 1, "title": "Algebra", "description": None})
    form.title = "   "

    assert await form.submit() is False
    assert form.error == "Title is required"


@pytest.mark.asyncio
async def test_delete_confirm_refreshes_and_notifies(client):
    refreshed, messages = [], []
    actions = course_actions(
        client,
        on_refresh=lambda: refreshed.append(True),
        notify=lambda message, severity: messages.append((message, severity)),
    )
    actions.start_delete({"id": 1, "title": "Algebra"})

    assert await actions.confirm_delete() is True
    assert 1 not in client.courses
    assert actions.delete_target is None
    assert refreshed == [True]
    assert messages == [("Course deleted successfully!", "success")]


@pytest.mark.asyncio
async def test_delete_failure_keeps_dialog_open(client):
    actions = user_actions(client)
    actions.start_delete({"id": 99, "email": "ghost@x.com"})

    assert await actions.confirm_delete() is False
    assert actions.action_error == "User not found"
    assert actions.delete_target is not None
    assert actions.action_loading is False


@pytest.mark.asyncio
async def test_edit_success_closes_editor(client):
    messages = []
    actions = user_actions(client, notify=lambda m, s: messages.append(m))
    actions.start_edit({"id": 1})

    await actions.edit_succeeded()

    assert actions.edit_target is None
    assert messages == ["User updated successfully!"]
