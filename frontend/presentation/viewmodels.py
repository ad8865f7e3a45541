"""
Presentation Contracts

Responsibility:
Define ViewModel contracts for the catalog table and the selection panel.
Strictly decoupled from fetching and selection logic.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from frontend.state import PaginationDTO


NO_SELECTION_MESSAGE = "No artworks selected"


@dataclass(frozen=True)
class ArtworkRowViewModel:
    """ViewModel for one table row."""
    artwork_id: int
    title: Optional[str]
    place_of_origin: Optional[str]
    artist_display: Optional[str]
    inscriptions: Optional[str]
    date_start: Optional[int]
    date_end: Optional[int]
    is_checked: bool


@dataclass(frozen=True)
class LoadingStateViewModel:
    """Unified loading state."""
    message: str
    progress: Optional[float]
    is_blocking: bool


@dataclass(frozen=True)
class CatalogTableViewModel:
    """ViewModel for the paginated table."""
    rows: Tuple[ArtworkRowViewModel, ...]
    checked_ids: Tuple[int, ...]
    pagination: Optional[PaginationDTO]  # None before the first page lands
    rows_per_page: int
    total_count: int
    loading: Optional[LoadingStateViewModel]


@dataclass(frozen=True)
class SelectionPanelItemViewModel:
    """One entry of the cross-page selection panel."""
    artwork_id: int
    label: str


@dataclass(frozen=True)
class SelectionPanelViewModel:
    """ViewModel for the cross-page selection panel."""
    items: Tuple[SelectionPanelItemViewModel, ...]
    empty_message: str = NO_SELECTION_MESSAGE

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0


@dataclass(frozen=True)
class CatalogViewModel:
    """Everything the display layer needs for one render."""
    table: CatalogTableViewModel
    selection_panel: SelectionPanelViewModel
    warnings: Tuple[str, ...]
