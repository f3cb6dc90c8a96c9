"""Page arithmetic for post listings"""

import math
from typing import Any


def _page_number(page: Any) -> int:
    """Coerce a requested page (often raw query string text) to a page >= 1"""
    try:
        number = int(page)
    except (TypeError, ValueError):
        return 1
    return max(number, 1)


class Paginator:
    """
    Works out LIMIT/OFFSET and neighbouring pages for a listing.

    Args:
        page: Requested page, 1-based. Non-numeric or values below 1 fall back to 1
        per_page: Number of records per page
        total: Total number of records in the listing
    """

    def __init__(self, page: Any, per_page: int, total: int):
        if per_page < 1:
            raise ValueError("Per page count must be 1 or greater")
        if total < 0:
            raise ValueError("Total must be 0 or greater")

        self.page = _page_number(page)
        self.per_page = per_page
        self.total = total
        self.page_count = math.ceil(total / per_page)

    @property
    def limit(self) -> int:
        return self.per_page

    @property
    def offset(self) -> int:
        return self.per_page * (self.page - 1)

    @property
    def previous(self) -> int | None:
        return self.page - 1 if self.page > 1 else None

    @property
    def next(self) -> int | None:
        return self.page + 1 if self.page < self.page_count else None

    def __repr__(self) -> str:
        return f"Paginator(page={self.page}, per_page={self.per_page}, total={self.total})"
