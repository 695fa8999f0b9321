"""Pagination Arithmetic — page window and metadata for the post listing.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - offset == (page - 1) * limit
    - total_pages == ceil(total_count / limit); zero matching rows means zero pages
    - page and limit are >= 1 by the time they reach here (validated upstream)

Design Decisions:
    - Integer ceiling division over math.ceil: no float rounding on large counts
    - Pagination echoes the requested page even past the last page: an empty
      page with consistent metadata, never an error
"""

from dataclasses import dataclass


def page_offset(page: int, limit: int) -> int:
    """Rows to skip before the requested page."""
    return (page - 1) * limit


def total_pages(total_count: int, limit: int) -> int:
    """Number of pages needed to show total_count rows, limit per page."""
    return -(-total_count // limit)


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata returned alongside a page of posts."""
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.limit)
