"""
Fetch Failure Log

Append-only record of page fetches that failed.

WHAT THIS MUST NOT DO:
======================
- Modify viewer state
- Retry or interpret failures (only record them)
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Deque, List, Optional

from catalog.contracts import CatalogFetchError, FetchStatus


@dataclass(frozen=True)
class FetchFailure:
    """One failed page load, as reported by the page cache."""
    page_number: int
    status: FetchStatus
    message: str
    occurred_at: datetime
    http_status: Optional[int] = None

    @classmethod
    def from_exception(cls, page_number: int, error: Exception) -> 'FetchFailure':
        occurred_at = datetime.now(timezone.utc)
        if isinstance(error, CatalogFetchError):
            return cls(
                page_number=page_number,
                status=error.status,
                message=error.message,
                occurred_at=occurred_at,
                http_status=error.http_status,
            )
        return cls(
            page_number=page_number,
            status=FetchStatus.PROVIDER_ERROR,
            message=f"{type(error).__name__}: {error}",
            occurred_at=occurred_at,
        )

    def describe(self) -> str:
        return f"Could not load page {self.page_number} ({self.status.value}): {self.message}"


class FailureLog:
    """
    Collects fetch failures (append-only).

    Entries are returned as copies; the log itself is never edited.
    """

    def __init__(self, max_entries: int = 100):
        self._entries: Deque[FetchFailure] = deque(maxlen=max_entries)
        self._total = 0

    def collect(self, failure: FetchFailure) -> None:
        self._entries.append(failure)
        self._total += 1

    def get_entries(self, status: Optional[FetchStatus] = None) -> List[FetchFailure]:
        entries = self._entries
        if status:
            entries = [e for e in entries if e.status == status]
        return list(entries)

    @property
    def latest(self) -> Optional[FetchFailure]:
        return self._entries[-1] if self._entries else None

    @property
    def entry_count(self) -> int:
        """Failures collected over the log's lifetime, including evicted ones."""
        return self._total
