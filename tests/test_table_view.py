from roster.services.table_view import (
    DEFAULT_ROWS_PER_PAGE,
    course_table,
    filter_records,
    paginate,
    user_table,
)

USERS = [{"id": i, "name": n} for i, n in enumerate(["Alice", "Bob", "Malik", None, "ALINA"])]
COURSES = [
    {"id": 1, "title": "Algebra", "description": None},
    {"id": 2, "title": "Biology", "description": "Cells and genetics"},
    {"id": 3, "title": "History", "description": "Ancient Egypt"},
]


def test_search_is_case_insensitive_substring():
    names = [u["name"] for u in filter_records(USERS, "ali", ("name",))]

    assert names == ["Alice", "Malik", "ALINA"]


def test_empty_search_matches_everything():
    assert filter_records(USERS, "", ("name",)) == USERS


def test_course_search_covers_description():
    titles = [c["title"] for c in filter_records(COURSES, "GENE", ("title", "description"))]

    assert titles == ["Biology"]


def test_pagination_slices_and_runs_out():
    records = list(range(12))

    assert paginate(records, 0, 5) == [0, 1, 2, 3, 4]
    assert paginate(records, 2, 5) == [10, 11]
    assert paginate(records, 3, 5) == []


def test_search_change_resets_page():
    table = user_table()
    table.set_page(2)

    table.set_search("bo")

    assert table.page == 0
    assert table.paginated(USERS) == [USERS[1]]


def test_same_search_keeps_page():
    table = course_table()
    table.set_search("a")
    table.set_page(1)

    table.set_search("a")

    assert table.page == 1


def test_user_table_keeps_page_on_resize():
    table = user_table()
    table.set_page(2)

    table.set_rows_per_page(10)

    assert table.page == 2
    assert table.rows_per_page == 10


def test_course_table_resets_page_on_resize():
    table = course_table()
    table.set_page(2)

    table.set_rows_per_page(10)

    assert table.page == 0


def test_page_count():
    table = user_table()

    assert table.rows_per_page == DEFAULT_ROWS_PER_PAGE
    assert table.page_count([{"name": "x"}] * 12) == 3
    assert table.page_count([]) == 1
