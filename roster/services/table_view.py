"""
Client-side search and pagination over an in-memory list of records.

Records are the JSON dicts returned by the API (attribute access also works,
so ORM rows can be fed in directly).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

DEFAULT_ROWS_PER_PAGE = 5
ROWS_PER_PAGE_OPTIONS = (5, 10, 25)


def _field(record: Any, name: str) -> str:
    value = record.get(name) if isinstance(record, Mapping) else getattr(record, name, None)
    return value or ""


def filter_records(records: Sequence[Any], search: str, fields: Sequence[str]) -> list:
    """Case-insensitive substring match of ``search`` against any of ``fields``."""
    term = (search or "").lower()
    if not term:
        return list(records)
    return [r for r in records if any(term in _field(r, f).lower() for f in fields)]


def paginate(records: Sequence[Any], page: int, rows_per_page: int) -> list:
    """Slice ``[page*size, page*size+size)``; out-of-range pages are empty."""
    if page < 0 or rows_per_page <= 0:
        return []
    start = page * rows_per_page
    return list(records[start:start + rows_per_page])


@dataclass
class TableState:
    search_fields: tuple[str, ...]
    # The course table jumps back to the first page when the page size
    # changes, the user table keeps its page.
    reset_page_on_resize: bool = False
    search: str = ""
    page: int = 0
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE

    def set_search(self, search: str) -> None:
        if search != self.search:
            self.search = search
            self.page = 0

    def set_page(self, page: int) -> None:
        self.page = max(page, 0)

    def set_rows_per_page(self, rows_per_page: int) -> None:
        self.rows_per_page = rows_per_page
        if self.reset_page_on_resize:
            self.page = 0

    def filtered(self, records: Sequence[Any]) -> list:
        return filter_records(records, self.search, self.search_fields)

    def paginated(self, records: Sequence[Any]) -> list:
        return paginate(self.filtered(records), self.page, self.rows_per_page)

    def page_count(self, records: Sequence[Any]) -> int:
        total = len(self.filtered(records))
        return max((total + self.rows_per_page - 1) // self.rows_per_page, 1)


def user_table() -> TableState:
    return TableState(search_fields=("name",), reset_page_on_resize=False)


def course_table() -> TableState:
    return TableState(search_fields=("title", "description"), reset_page_on_resize=True)
