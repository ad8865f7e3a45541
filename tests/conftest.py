"""
Shared Test Fixtures

Deterministic records and providers. No network access anywhere.
"""

import asyncio
from typing import Dict, List

import pytest

from catalog.contracts import ArtworkRecord, CatalogPage, CatalogFetchError, FetchStatus
from catalog.providers.base import RecordProvider
from catalog.providers.mock import generate_records


# =============================================================================
# RECORDS
# =============================================================================

def make_record(artwork_id: int, title: str = None) -> ArtworkRecord:
    return ArtworkRecord(
        id=artwork_id,
        title=title or f"Artwork {artwork_id}",
        place_of_origin="France",
        artist_display=f"Artist {artwork_id}",
        inscriptions=None,
        date_start=1900,
        date_end=1901,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def corpus() -> List[ArtworkRecord]:
    """Ten artworks, ids 1..10."""
    return generate_records(10)


# =============================================================================
# GATED PROVIDER
# =============================================================================

class GatedProvider(RecordProvider):
    """
    Provider whose responses are released by the test, page by page.

    Lets a test decide the order in which in-flight fetches complete.
    """

    def __init__(self, pages: Dict[int, CatalogPage]):
        self._pages = pages
        self._gates: Dict[int, asyncio.Event] = {}
        self._failures: Dict[int, FetchStatus] = {}
        self.requested: List[int] = []

    @property
    def provider_id(self) -> str:
        return "gated"

    def _gate(self, page_number: int) -> asyncio.Event:
        if page_number not in self._gates:
            self._gates[page_number] = asyncio.Event()
        return self._gates[page_number]

    def release(self, page_number: int) -> None:
        self._gate(page_number).set()

    def fail(self, page_number: int, status: FetchStatus = FetchStatus.NETWORK_ERROR) -> None:
        self._failures[page_number] = status
        self.release(page_number)

    async def fetch_page(self, page_number: int) -> CatalogPage:
        self.requested.append(page_number)
        await self._gate(page_number).wait()
        if page_number in self._failures:
            raise CatalogFetchError(
                self._failures[page_number],
                "gated failure",
                page_number=page_number
            )
        return self._pages.get(
            page_number,
            CatalogPage(page_number=page_number, records=(), total_count=0)
        )


@pytest.fixture
def gated_provider(corpus):
    """Two-row pages over the ten-artwork corpus."""
    pages = {
        n: CatalogPage(
            page_number=n,
            records=tuple(corpus[(n - 1) * 2:n * 2]),
            total_count=len(corpus)
        )
        for n in range(1, 6)
    }
    return GatedProvider(pages)
