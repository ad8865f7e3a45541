"""
Catalog Contracts

Immutable data structures for records fetched from the remote art catalog.

BOUNDARY: Catalog Layer
All upstream artwork data enters the viewer through these contracts.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================

class FetchStatus(Enum):
    """Status of a page fetch attempt."""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"
    NETWORK_ERROR = "network_error"
    PROVIDER_ERROR = "provider_error"


# Fields requested from the upstream API and kept on each record
RECORD_FIELDS: Tuple[str, ...] = (
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
)


# =============================================================================
# ERRORS
# =============================================================================

class CatalogFetchError(Exception):
    """
    A page could not be fetched or parsed.

    Always carries an explicit FetchStatus, never a bare message.
    """

    def __init__(
        self,
        status: FetchStatus,
        message: str,
        page_number: Optional[int] = None,
        http_status: Optional[int] = None
    ):
        super().__init__(message)
        self.status = status
        self.message = message
        self.page_number = page_number
        self.http_status = http_status

    @property
    def retryable(self) -> bool:
        """Transient failures worth another attempt."""
        if self.status in (FetchStatus.TIMEOUT, FetchStatus.NETWORK_ERROR):
            return True
        return (
            self.status == FetchStatus.HTTP_ERROR
            and self.http_status is not None
            and self.http_status >= 500
        )

    def __str__(self) -> str:
        prefix = f"[{self.status.value}]"
        if self.page_number is not None:
            prefix += f" page {self.page_number}"
        return f"{prefix}: {self.message}"


# =============================================================================
# RECORD CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class ArtworkRecord:
    """
    One artwork entry in the catalog.

    IDENTITY:
    =========
    `id` is stable and unique across the whole corpus.
    Two fetches of the same id may carry different field values;
    nothing here re-syncs them.
    """
    id: int
    title: Optional[str] = None
    place_of_origin: Optional[str] = None
    artist_display: Optional[str] = None
    inscriptions: Optional[str] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> 'ArtworkRecord':
        """
        Map one upstream JSON object to a record.

        Raises ValueError if the payload has no integer id.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Artwork payload must be an object, got {type(payload).__name__}")

        artwork_id = payload.get("id")
        # bool is an int subclass
        if isinstance(artwork_id, bool) or not isinstance(artwork_id, int):
            raise ValueError(f"Artwork payload has no integer id: {artwork_id!r}")

        return cls(
            id=artwork_id,
            title=payload.get("title"),
            place_of_origin=payload.get("place_of_origin"),
            artist_display=payload.get("artist_display"),
            inscriptions=payload.get("inscriptions"),
            date_start=_optional_int(payload.get("date_start")),
            date_end=_optional_int(payload.get("date_end")),
        )

    def panel_label(self) -> str:
        """Label shown in the cross-page selection panel."""
        return f"{self.title or 'Untitled'} - {self.artist_display or 'Unknown artist'}"


@dataclass(frozen=True)
class CatalogPage:
    """
    One server-paginated batch of records.

    EPHEMERAL:
    ==========
    Replaced wholesale on every navigation, never merged.
    """
    page_number: int
    records: Tuple[ArtworkRecord, ...]
    total_count: int

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {self.page_number}")
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}")


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
