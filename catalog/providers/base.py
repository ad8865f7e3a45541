"""
Record Provider Abstraction
===========================

Abstract interface for paged artwork sources.

BOUNDARY ENFORCEMENT:
- Providers hold no viewer state
- One call returns one whole page plus the corpus total
- Failures are explicit CatalogFetchError with a FetchStatus
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..contracts import CatalogPage


class RecordProvider(ABC):
    """
    Abstract paged-record provider.

    GUARANTEES:
    - fetch_page(n) returns a CatalogPage with page_number == n
    - A page beyond the corpus is an empty page, not an error

    EXPLICIT FAILURE STATES (CatalogFetchError.status):
    - TIMEOUT: Request exceeded the configured timeout
    - NETWORK_ERROR: Connection failed
    - HTTP_ERROR: Upstream returned a non-success status
    - PARSE_ERROR: Response body was not the expected shape
    """

    @abstractmethod
    async def fetch_page(self, page_number: int) -> CatalogPage:
        """
        Fetch one 1-based page.

        Raises CatalogFetchError on transport or parse failure.
        """
        pass

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique provider identifier."""
        pass

    async def aclose(self) -> None:
        """Release any held resources."""
        return None
