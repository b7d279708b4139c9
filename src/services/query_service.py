"""
Query view over a token record snapshot.

Filtering and pagination are pure in-memory functions. ``TokenQueryView``
holds the UI-local state (snapshot, search term, current page) and borrows
its records from a ``TokenStore``; it never owns the data.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import structlog

from src.models.token import TokenRecord
from src.services.registry_store import TokenStore
from src.utils.exceptions import StorageUnavailable, SubmissionRejected, ValidationError

PAGE_SIZE = 5


def filter_records(records: Sequence[TokenRecord], search_term: str) -> List[TokenRecord]:
    needle = (search_term or "").casefold()
    if not needle:
        return list(records)
    return [
        r
        for r in records
        if needle in r.owner.casefold() or needle in r.token_name.casefold() or needle in r.funding_source.casefold()
    ]


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    if count <= 0:
        return 0
    return math.ceil(count / page_size)


def clamp_page(page_number: int, pages: int) -> int:
    if pages < 1:
        return 1
    return max(1, min(page_number, pages))


def paginate(records: Sequence[TokenRecord], page_size: int = PAGE_SIZE, page_number: int = 1) -> List[TokenRecord]:
    if not records:
        return []
    page = clamp_page(page_number, total_pages(len(records), page_size))
    start = (page - 1) * page_size
    return list(records[start : start + page_size])


def page_window(count: int, page_size: int = PAGE_SIZE, page_number: int = 1) -> Tuple[int, int]:
    """1-based ``(first, last)`` positions shown on a page, ``(0, 0)`` when empty"""
    if count <= 0:
        return 0, 0
    page = clamp_page(page_number, total_pages(count, page_size))
    first = (page - 1) * page_size + 1
    return first, min(page * page_size, count)


@dataclass(frozen=True)
class PageSummary:
    page: int
    total_pages: int
    first: int
    last: int
    total: int

    def describe(self) -> str:
        return f"Showing {self.first} to {self.last} of {self.total} results"


class TokenQueryView:
    """Filtered, paginated view of a record snapshot"""

    def __init__(self, store: TokenStore, page_size: int = PAGE_SIZE, reset_page_on_search: bool = False):
        self.store = store
        self.page_size = page_size
        self.reset_page_on_search = reset_page_on_search
        self.records: List[TokenRecord] = []
        self.search_term = ""
        self.page = 1
        self.logger = structlog.get_logger()

    def load(self) -> List[TokenRecord]:
        """Replace the snapshot with the store's current records.

        A storage failure leaves an empty snapshot ("no data available").
        """
        try:
            self.records = list(self.store.list())
        except StorageUnavailable as e:
            self.logger.error("Failed to load token records", error=e.message)
            self.records = []
        return self.records

    def set_search_term(self, term: Optional[str]) -> None:
        self.search_term = term or ""
        if self.reset_page_on_search:
            self.page = 1

    def go_to_page(self, page_number: int) -> int:
        self.page = clamp_page(page_number, self.total_pages())
        return self.page

    def next_page(self) -> int:
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.page - 1)

    def filtered(self) -> List[TokenRecord]:
        return filter_records(self.records, self.search_term)

    def total_pages(self) -> int:
        return total_pages(len(self.filtered()), self.page_size)

    def current_page_records(self) -> List[TokenRecord]:
        return paginate(self.filtered(), self.page_size, self.page)

    def summary(self) -> PageSummary:
        count = len(self.filtered())
        pages = total_pages(count, self.page_size)
        first, last = page_window(count, self.page_size, self.page)
        return PageSummary(page=clamp_page(self.page, pages), total_pages=pages, first=first, last=last, total=count)

    def submit(self, fields: Mapping[str, Any]) -> TokenRecord:
        """Create a record through the store and append it to the snapshot.

        On failure the snapshot is left untouched and ``SubmissionRejected`` is
        raised so the caller can keep its pending form state and retry.
        """
        try:
            record = self.store.create(fields)
        except (ValidationError, StorageUnavailable) as e:
            self.logger.warning("Token submission not accepted", error_code=e.error_code, error=e.message)
            raise SubmissionRejected(e) from e
        self.records.append(record)
        return record
