def _assign(client, user_id, course_id):
    return client.post("/api/user-courses", json={"userId": user_id, "courseId": course_id})


def _unassign(client, user_id, course_id):
    return client.request("DELETE", "/api/user-courses", json={"userId": user_id, "courseId": course_id})


def test_end_to_end_enrollment_lifecycle(client):
    user = client.post("/api/users", json={"email": "a@x.com"})
    assert user.status_code == 201
    user_id = user.json()["id"]

    course = client.post("/api/courses", json={"title": "Algebra"})
    assert course.status_code == 201
    course_id = course.json()["id"]

    assigned = _assign(client, user_id, course_id)
    assert assigned.status_code == 200
    assert [c["title"] for c in assigned.json()["courses"]] == ["Algebra"]

    deleted = client.request("DELETE", "/api/courses", json={"id": course_id})
    assert deleted.json() == {"success": True}

    assert client.get("/api/user-courses", params={"userId": user_id}).json() == []


def test_assign_then_list_contains_course_once(client, make_user, make_course):
    user = make_user("a@x.com")
    course = make_course("Algebra")

    _assign(client, user["id"], course["id"])
    courses = client.get("/api/user-courses", params={"userId": user["id"]}).json()

    assert [c["id"] for c in courses].count(course["id"]) == 1


def test_duplicate_assign_is_a_conflict(client, make_user, make_course):
    user = make_user("a@x.com")
    course = make_course("Algebra")
    _assign(client, user["id"], course["id"])

    response = _assign(client, user["id"], course["id"])

    assert response.status_code == 400
    assert response.json() == {"error": "User is already enrolled in this course"}
    courses = client.get("/api/user-courses", params={"userId": user["id"]}).json()
    assert [c["id"] for c in courses] == [course["id"]]


def test_assign_requires_both_ids(client, make_user):
    user = make_user("a@x.com")

    for body in ({}, {"userId": user["id"]}, {"courseId": 1}):
        response = client.post("/api/user-courses", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "User ID and Course ID are required"}


def test_assign_unknown_course(client, make_user):
    user = make_user("a@x.com")

    response = _assign(client, user["id"], 999)

    assert response.status_code == 404
    assert response.json() == {"error": "Course not found"}


def test_unassign_removes_course_and_repeats_safely(client, make_user, make_course):
    user = make_user("a@x.com")
    algebra = make_course("Algebra")
    biology = make_course("Biology")
    _assign(client, user["id"], algebra["id"])
    _assign(client, user["id"], biology["id"])

    first = _unassign(client, user["id"], algebra["id"])
    second = _unassign(client, user["id"], algebra["id"])

    assert first.status_code == 200
    assert [c["title"] for c in first.json()["courses"]] == ["Biology"]
    assert second.status_code == 200
    courses = client.get("/api/user-courses", params={"userId": user["id"]}).json()
    assert [c["id"] for c in courses] == [biology["id"]]


def test_unassign_requires_both_ids(client):
    response = client.request("DELETE", "/api/user-courses", json={"userId": 1})

    assert response.status_code == 400
    assert response.json() == {"error": "User ID and Course ID are required"}


def test_list_for_unknown_user_is_404(client):
    response = client.get("/api/user-courses", params={"userId": 12345})

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_user_courses_are_alphabetical(client, make_user, make_course):
    user = make_user("a@x.com")
    for title in ("Zoology", "Algebra", "Music"):
        _assign(client, user["id"], make_course(title)["id"])

    titles = [c["title"] for c in client.get("/api/user-courses", params={"userId": user["id"]}).json()]

    assert titles == ["Algebra", "Music", "Zoology"]


def test_list_all_users_with_courses(client, make_user, make_course):
    older = make_user("old@x.com", "Old")
    newer = make_user("new@x.com", "New")
    chem = make_course("Chemistry")
    art = make_course("Art")
    _assign(client, older["id"], chem["id"])
    _assign(client, older["id"], art["id"])

    payload = client.get("/api/user-courses").json()

    assert [u["id"] for u in payload] == [newer["id"], older["id"]]
    assert payload[0]["courses"] == []
    assert [c["title"] for c in payload[1]["courses"]] == ["Art", "Chemistry"]


def test_deleting_user_removes_enrollments(client, make_user, make_course):
    user = make_user("a@x.com")
    course = make_course("Algebra")
    _assign(client, user["id"], course["id"])

    client.request("DELETE", "/api/users", json={"id": user["id"]})

    courses = client.get("/api/courses").json()
    assert courses[0]["enrollmentCount"] == 0
