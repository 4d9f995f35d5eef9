"""
Course Roster Streamlit UI

Interface for:
- Users: search, paginate, create, edit, delete, manage course enrollments
- Courses: search, paginate, create, edit, delete
"""
import asyncio
import os

import httpx
import streamlit as st

from roster.services.course_assignment import CourseAssignmentController
from roster.services.forms import CourseForm, UserForm, course_actions, user_actions
from roster.services.roster_client import RosterAPIError, RosterClient
from roster.services.table_view import ROWS_PER_PAGE_OPTIONS, course_table, user_table

API_URL = os.getenv("API_URL", "http://localhost:8000")

st.set_page_config(page_title="Course Roster", page_icon="🎓", layout="wide")

# Sidebar navigation
st.sidebar.title("Course Roster")
st.sidebar.markdown("Users, courses and enrollments")
page = st.sidebar.radio("Navigation", ["Users", "Courses"])

st.sidebar.markdown("---")
st.sidebar.markdown("**Quick Links**")
st.sidebar.markdown(f"[API Docs]({API_URL}/docs)")


# ============ API HELPERS ============

def run(fn):
    """Run ``fn(client)`` on a fresh event loop with a fresh client."""
    async def _main():
        async with RosterClient(API_URL) as client:
            return await fn(client)

    return asyncio.run(_main())


def bump_refresh():
    st.session_state.refresh += 1


def notify(message: str, severity: str = "success"):
    st.toast(message, icon="✅" if severity == "success" else "⚠️")


def state(key, factory):
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


state("refresh", lambda: 0)


@st.cache_data(show_spinner=False)
def load_users(refresh: int):
    return run(lambda c: c.list_users_with_courses())


@st.cache_data(show_spinner=False)
def load_courses(refresh: int):
    return run(lambda c: c.list_courses())


def format_timestamp(ts) -> str:
    """Safely format a timestamp for display."""
    if not ts or not isinstance(ts, str):
        return "N/A"
    return ts[:19].replace("T", " ")


def table_controls(table, key: str, records):
    """Search box, page size and page selector shared by both tables."""
    col1, col2, col3 = st.columns([3, 1, 1])
    with col1:
        table.set_search(st.text_input("Search", value=table.search, key=f"{key}_search"))
    with col2:
        size = st.selectbox(
            "Rows per page",
            ROWS_PER_PAGE_OPTIONS,
            index=ROWS_PER_PAGE_OPTIONS.index(table.rows_per_page),
            key=f"{key}_size",
        )
        if size != table.rows_per_page:
            table.set_rows_per_page(size)
    with col3:
        pages = table.page_count(records)
        table.set_page(min(table.page, pages - 1))
        chosen = st.number_input(
            "Page",
            min_value=1,
            max_value=pages,
            value=table.page + 1,
            key=f"{key}_page_{table.search}_{table.rows_per_page}",
        )
        table.set_page(int(chosen) - 1)
    st.caption(f"{len(table.filtered(records))} of {len(records)} shown")


# ============ COURSE ASSIGNMENT DIALOG ============

def assignment_controller() -> CourseAssignmentController:
    return state(
        "assignment",
        lambda: CourseAssignmentController(client=None, on_assignment_change=bump_refresh),
    )


@st.dialog("Manage Courses", width="large")
def manage_courses_dialog(user: dict):
    controller = assignment_controller()
    st.subheader(f"Courses for {user.get('name') or user['email']}")

    if controller.error:
        st.error(controller.error)

    st.markdown(f"**Current Courses ({len(controller.user_courses)})**")
    if controller.user_courses:
        for course in controller.user_courses:
            col1, col2 = st.columns([4, 1])
            col1.markdown(f"📚 {course['title']}")
            if col2.button("Remove", key=f"remove_{course['id']}", disabled=controller.action_loading):
                run(lambda c: _with_client(controller, c, controller.remove_course(course["id"])))
                st.rerun(scope="fragment")
    else:
        st.info("No courses assigned yet.")

    st.markdown("**Assign New Course**")
    available = controller.available_courses
    if not available:
        st.info("All courses are already assigned.")
        return

    # Titles are not unique, so options are course ids
    titles = {c["id"]: c["title"] for c in available}
    choice = st.selectbox(
        "Select Course", list(titles), format_func=lambda cid: titles[cid], key="assign_choice"
    )
    if st.button("Assign Course", disabled=controller.action_loading):
        controller.selected_course_id = choice
        run(lambda c: _with_client(controller, c, controller.assign_course()))
        st.rerun(scope="fragment")


async def _activate(controller, client, user):
    controller.client = client
    # Clicking "Manage Courses" is a fresh open of the dialog
    await controller.sync(user, False)
    await controller.sync(user, True)


async def _with_client(controller, client, coro):
    controller.client = client
    await coro


# ============ USERS PAGE ============
if page == "Users":
    st.title("User Management")

    tab1, tab2 = st.tabs(["Users", "Create User"])

    with tab2:
        with st.form("create_user"):
            name = st.text_input("Name")
            email = st.text_input("Email")
            if st.form_submit_button("Create User"):
                form = UserForm(client=None)
                form.name, form.email = name, email
                actions = user_actions(None, on_refresh=bump_refresh, notify=notify)

                async def _create(client):
                    form.client = actions.client = client
                    if await form.submit():
                        await actions.create_succeeded()

                run(_create)
                if form.error:
                    st.error(form.error)

    with tab1:
        try:
            users = load_users(st.session_state.refresh)
        except (RosterAPIError, httpx.HTTPError) as e:
            st.error(f"API Error: {e}")
            st.stop()

        table = state("user_table", user_table)
        table_controls(table, "users", users)
        actions = state("user_actions", lambda: user_actions(None, on_refresh=bump_refresh, notify=notify))

        if not users:
            st.info("No users found. Create one in the next tab!")

        for user in table.paginated(users):
            with st.expander(f"👤 {user.get('name') or '(no name)'} <{user['email']}>"):
                chips = ", ".join(c["title"] for c in user.get("courses", [])) or "_No courses_"
                st.markdown(f"**Courses:** {chips}")
                st.markdown(f"**Created:** {format_timestamp(user.get('createdAt'))}")

                col1, col2, col3 = st.columns(3)
                if col1.button("Manage Courses", key=f"manage_{user['id']}"):
                    run(lambda c: _activate(assignment_controller(), c, user))
                    manage_courses_dialog(user)
                if col2.button("Edit", key=f"edit_{user['id']}"):
                    actions.start_edit(user)
                if col3.button("Delete", key=f"delete_{user['id']}"):
                    actions.start_delete(user)

        if actions.edit_target:
            target = actions.edit_target
            with st.form("edit_user"):
                st.subheader(f"Edit {target['email']}")
                name = st.text_input("Name", value=target.get("name") or "")
                email = st.text_input("Email", value=target["email"])
                save, cancel = st.columns(2)
                if save.form_submit_button("Save"):
                    form = UserForm(client=None, initial=target)
                    form.name, form.email = name, email

                    async def _save(client):
                        form.client = actions.client = client
                        if await form.submit():
                            await actions.edit_succeeded()

                    run(_save)
                    if form.error:
                        st.error(form.error)
                    else:
                        st.rerun()
                if cancel.form_submit_button("Cancel"):
                    actions.cancel_edit()
                    st.rerun()

        if actions.delete_target:
            target = actions.delete_target
            st.warning(f"Delete user {target['email']}? Their enrollments are removed too.")
            yes, no = st.columns(2)
            if yes.button("Confirm Delete", disabled=actions.action_loading):
                run(lambda c: _with_client(actions, c, actions.confirm_delete()))
                if not actions.action_error:
                    st.rerun()
            if no.button("Cancel"):
                actions.cancel_delete()
                st.rerun()
            if actions.action_error:
                st.error(actions.action_error)


# ============ COURSES PAGE ============
elif page == "Courses":
    st.title("Course Management")

    tab1, tab2 = st.tabs(["Courses", "Create Course"])

    with tab2:
        with st.form("create_course"):
            title = st.text_input("Course Title", placeholder="e.g., Algebra")
            description = st.text_area("Description", height=120)
            if st.form_submit_button("Create Course"):
                form = CourseForm(client=None)
                form.title, form.description = title, description
                actions = course_actions(None, on_refresh=bump_refresh, notify=notify)

                async def _create(client):
                    form.client = actions.client = client
                    if await form.submit():
                        await actions.create_succeeded()

                run(_create)
                if form.error:
                    st.error(form.error)

    with tab1:
        try:
            courses = load_courses(st.session_state.refresh)
        except (RosterAPIError, httpx.HTTPError) as e:
            st.error(f"API Error: {e}")
            st.stop()

        table = state("course_table", course_table)
        table_controls(table, "courses", courses)
        actions = state("course_actions", lambda: course_actions(None, on_refresh=bump_refresh, notify=notify))

        if not courses:
            st.info("No courses found. Create one in the next tab!")

        for course in table.paginated(courses):
            with st.expander(f"📚 {course['title']} ({course.get('enrollmentCount', 0)} enrolled)"):
                st.markdown(course.get("description") or "_No description_")
                st.markdown(f"**Created:** {format_timestamp(course.get('createdAt'))}")
                col1, col2 = st.columns(2)
                if col1.button("Edit", key=f"edit_course_{course['id']}"):
                    actions.start_edit(course)
                if col2.button("Delete", key=f"delete_course_{course['id']}"):
                    actions.start_delete(course)

        if actions.edit_target:
            target = actions.edit_target
            with st.form("edit_course"):
                st.subheader(f"Edit {target['title']}")
                title = st.text_input("Course Title", value=target["title"])
                description = st.text_area("Description", value=target.get("description") or "")
                save, cancel = st.columns(2)
                if save.form_submit_button("Save"):
                    form = CourseForm(client=None, initial=target)
                    form.title, form.description = title, description

                    async def _save(client):
                        form.client = actions.client = client
                        if await form.submit():
                            await actions.edit_succeeded()

                    run(_save)
                    if form.error:
                        st.error(form.error)
                    else:
                        st.rerun()
                if cancel.form_submit_button("Cancel"):
                    actions.cancel_edit()
                    st.rerun()

        if actions.delete_target:
            target = actions.delete_target
            st.warning(f"Delete course {target['title']}? It is removed from every user.")
            yes, no = st.columns(2)
            if yes.button("Confirm Delete", disabled=actions.action_loading):
                run(lambda c: _with_client(actions, c, actions.confirm_delete()))
                if not actions.action_error:
                    st.rerun()
            if no.button("Cancel"):
                actions.cancel_delete()
                st.rerun()
            if actions.action_error:
                st.error(actions.action_error)
