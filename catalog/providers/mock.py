"""
Mock Catalog Provider
=====================

Deterministic in-memory provider for offline use and testing.

GUARANTEES:
- Same corpus + same page number → identical page
- Explicit failure modes can be triggered
- No network access
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import asyncio

from ..contracts import ArtworkRecord, CatalogPage, CatalogFetchError, FetchStatus
from .base import RecordProvider


class MockCatalogProvider(RecordProvider):
    """
    Serves pages sliced from a fixed corpus.

    Pages past the end of the corpus are empty.
    """

    def __init__(
        self,
        records: Optional[Sequence[ArtworkRecord]] = None,
        total_count: int = 47,
        rows_per_page: int = 5,
        latency_ms: float = 0.0,
        failure_mode: Optional[FetchStatus] = None
    ):
        """
        Args:
            records: Explicit corpus; generated when omitted
            total_count: Size of the generated corpus
            rows_per_page: Page size
            latency_ms: Simulated latency per fetch
            failure_mode: If set, every fetch fails with this status
        """
        if rows_per_page < 1:
            raise ValueError(f"rows_per_page must be >= 1, got {rows_per_page}")

        self._records: List[ArtworkRecord] = (
            list(records) if records is not None else generate_records(total_count)
        )
        self._rows_per_page = rows_per_page
        self._latency_ms = latency_ms
        self.failure_mode = failure_mode
        self.requested_pages: List[int] = []

    @property
    def provider_id(self) -> str:
        return "mock"

    async def fetch_page(self, page_number: int) -> CatalogPage:
        if page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {page_number}")

        self.requested_pages.append(page_number)

        if self._latency_ms:
            await asyncio.sleep(self._latency_ms / 1000.0)

        if self.failure_mode is not None:
            raise CatalogFetchError(
                self.failure_mode,
                f"Mock provider configured to fail: {self.failure_mode.value}",
                page_number=page_number
            )

        start = (page_number - 1) * self._rows_per_page
        page_records = tuple(self._records[start:start + self._rows_per_page])

        return CatalogPage(
            page_number=page_number,
            records=page_records,
            total_count=len(self._records)
        )


def generate_records(count: int) -> List[ArtworkRecord]:
    """Build a deterministic corpus of `count` artworks with ids 1..count."""
    origins = ("France", "Japan", "United States", "Italy", "Netherlands")
    return [
        ArtworkRecord(
            id=i,
            title=f"Study No. {i}",
            place_of_origin=origins[i % len(origins)],
            artist_display=f"Artist {i % 7 + 1}",
            inscriptions=None if i % 3 else f"Signed lower right: {i}",
            date_start=1800 + i,
            date_end=1800 + i + (i % 4),
        )
        for i in range(1, count + 1)
    ]
