"""
Pagination State

Page-position metadata handed to the table alongside the rows.
"""

from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class PaginationDTO:
    """
    Where the table is within the corpus.

    page_number is 1-based; page_index is the 0-based form the
    table's paginator emits.
    """
    page_number: int
    rows_per_page: int
    total_count: int

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {self.page_number}")
        if self.rows_per_page < 1:
            raise ValueError(f"rows_per_page must be >= 1, got {self.rows_per_page}")
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}")

    @property
    def page_index(self) -> int:
        return self.page_number - 1

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_count / self.rows_per_page)

    @property
    def first_row_offset(self) -> int:
        return self.page_index * self.rows_per_page

    @property
    def is_beyond_end(self) -> bool:
        """True when the page lies past the last page of the corpus."""
        return self.page_number > max(self.page_count, 1)

    @property
    def has_next(self) -> bool:
        return self.page_number < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1
