"""
Page Cache

Holds exactly one page of catalog records plus the corpus total.

GUARANTEES:
===========
1. Records and total are replaced together, or not at all
2. A failed fetch leaves the previous page intact and clears `loading`
3. Last write wins: only the most recent request may apply its response
4. load() never raises a provider error past its boundary
"""

from __future__ import annotations
from typing import Callable, Optional, Tuple
import asyncio
import logging

from catalog.contracts import ArtworkRecord, CatalogPage
from catalog.providers.base import RecordProvider

from .failures import FailureLog, FetchFailure

logger = logging.getLogger(__name__)


class PageCache:
    """
    Current page of the catalog view.

    STALE RESPONSES:
    ================
    Every load() takes a sequence ticket. A response (or failure) whose
    ticket is no longer the latest is discarded without touching state.
    """

    def __init__(
        self,
        provider: RecordProvider,
        failure_log: Optional[FailureLog] = None,
        on_failure: Optional[Callable[[FetchFailure], None]] = None
    ):
        self._provider = provider
        self._failure_log = failure_log if failure_log is not None else FailureLog()
        self._on_failure = on_failure

        self._records: Tuple[ArtworkRecord, ...] = ()
        self._total_count = 0
        self._page_number: Optional[int] = None

        self._sequence = 0
        self._requested_page: Optional[int] = None
        self._loading = False
        self._last_failure: Optional[FetchFailure] = None

    # =========================================================================
    # LOADING
    # =========================================================================

    async def load(self, page_number: int) -> bool:
        """
        Fetch a 1-based page and apply it if still current.

        Returns True if the response was applied.
        """
        if isinstance(page_number, bool) or not isinstance(page_number, int) or page_number < 1:
            raise ValueError(f"page_number must be a positive integer, got {page_number!r}")

        self._sequence += 1
        ticket = self._sequence
        self._requested_page = page_number
        self._loading = True

        try:
            page = await self._provider.fetch_page(page_number)
        except asyncio.CancelledError:
            if ticket == self._sequence:
                self._loading = False
            logger.debug(f"Load of page {page_number} cancelled")
            raise
        except Exception as e:
            if ticket != self._sequence:
                logger.debug(f"Discarding stale failure for page {page_number}: {e}")
                return False
            self._loading = False
            self._report_failure(FetchFailure.from_exception(page_number, e))
            return False

        if ticket != self._sequence:
            logger.debug(
                f"Discarding stale response for page {page_number} "
                f"(page {self._requested_page} requested since)"
            )
            return False

        self._apply(page_number, page)
        return True

    def _apply(self, page_number: int, page: CatalogPage) -> None:
        self._records = tuple(page.records)
        self._total_count = page.total_count
        self._page_number = page_number
        self._loading = False
        self._last_failure = None
        logger.debug(f"Applied page {page_number}: {len(self._records)} records of {self._total_count}")

    def _report_failure(self, failure: FetchFailure) -> None:
        self._last_failure = failure
        self._failure_log.collect(failure)
        logger.warning(failure.describe())
        if self._on_failure is not None:
            try:
                self._on_failure(failure)
            except Exception:
                logger.exception("Failure observer raised")

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    def current_records(self) -> Tuple[ArtworkRecord, ...]:
        return self._records

    def total_count(self) -> int:
        return self._total_count

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def page_number(self) -> Optional[int]:
        """Page whose data is currently held (None before first success)."""
        return self._page_number

    @property
    def requested_page(self) -> Optional[int]:
        """Most recently requested page."""
        return self._requested_page

    @property
    def last_failure(self) -> Optional[FetchFailure]:
        """Most recent failure not yet superseded by a successful load."""
        return self._last_failure

    @property
    def failure_log(self) -> FailureLog:
        return self._failure_log
