import asyncio

from roster.services.roster_client import RosterAPIError


class FakeRosterClient:
    """In-memory stand-in for RosterClient with the same coroutine methods."""

    def __init__(self, courses, enrollments=None):
        self.courses = {c["id"]: c for c in courses}
        self.enrollments = {uid: set(ids) for uid, ids in (enrollments or {}).items()}
        self.users = {}
        self.fail_fetch = False
        self.fail_assign = None
        self.gates = {}
        self.calls = []

    async def list_courses(self):
        self.calls.append(("list_courses",))
        if self.fail_fetch:
            raise RosterAPIError("Internal error", 500)
        return list(self.courses.values())

    async def list_user_courses(self, user_id):
        self.calls.append(("list_user_courses", user_id))
        gate = self.gates.get(user_id)
        if gate is not None:
            await gate.wait()
        ids = self.enrollments.get(user_id, set())
        return sorted((self.courses[i] for i in ids), key=lambda c: c["title"])

    async def assign_course(self, user_id, course_id):
        self.calls.append(("assign_course", user_id, course_id))
        if self.fail_assign:
            raise RosterAPIError(self.fail_assign, 500)
        enrolled = self.enrollments.setdefault(user_id, set())
        if course_id in enrolled:
            raise RosterAPIError("User is already enrolled in this course", 400)
        enrolled.add(course_id)
        return {"id": user_id, "courses": []}

    async def remove_course(self, user_id, course_id):
        self.calls.append(("remove_course", user_id, course_id))
        self.enrollments.setdefault(user_id, set()).discard(course_id)
        return {"id": user_id, "courses": []}

    async def create_user(self, email, name=None):
        self.calls.append(("create_user", email, name))
        if any(u["email"] == email for u in self.users.values()):
            raise RosterAPIError("User with this email already exists", 400)
        user = {"id": len(self.users) + 1, "email": email, "name": name}
        self.users[user["id"]] = user
        return user

    async def update_user(self, user_id, email, name=None):
        self.calls.append(("update_user", user_id, email, name))
        return {"id": user_id, "email": email, "name": name}

    async def delete_user(self, user_id):
        self.calls.append(("delete_user", user_id))
        if user_id not in self.users:
            raise RosterAPIError("User not found", 404)
        del self.users[user_id]
        return {"success": True}

    async def create_course(self, title, description=None):
        self.calls.append(("create_course", title, description))
        course = {"id": max(self.courses, default=0) + 1, "title": title, "description": description}
        self.courses[course["id"]] = course
        return course

    async def update_course(self, course_id, title, description=None):
        self.calls.append(("update_course", course_id, title, description))
        return {"id": course_id, "title": title, "description": description}

    async def delete_course(self, course_id):
        self.calls.append(("delete_course", course_id))
        self.courses.pop(course_id, None)
        return {"success": True}


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)
