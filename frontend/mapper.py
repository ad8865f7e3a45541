"""
State to ViewModel Mapper

Converts viewer state into read-only view models.

MAPPING BOUNDARY:
=================
This is the ONLY place where records and selection become view models.

MAPPING RULES:
==============
1. Preserve page order for rows
2. Preserve insertion order for the selection panel
3. Checked state comes from the visible selection only
"""

from __future__ import annotations
from typing import Iterable, Optional, Sequence, Tuple

from catalog.contracts import ArtworkRecord
from frontend.state import FetchFailure, PaginationDTO
from frontend.presentation.viewmodels import (
    ArtworkRowViewModel,
    CatalogTableViewModel,
    CatalogViewModel,
    LoadingStateViewModel,
    SelectionPanelItemViewModel,
    SelectionPanelViewModel,
)


class ViewModelMapper:
    """
    Maps viewer state to view models.

    SINGLE POINT OF CONVERSION:
    ===========================
    The session renders through this class only.
    """

    def __init__(self, rows_per_page: int):
        if rows_per_page < 1:
            raise ValueError(f"rows_per_page must be >= 1, got {rows_per_page}")
        self._rows_per_page = rows_per_page

    @property
    def rows_per_page(self) -> int:
        return self._rows_per_page

    # =========================================================================
    # TABLE MAPPING
    # =========================================================================

    def map_row(self, record: ArtworkRecord, is_checked: bool) -> ArtworkRowViewModel:
        return ArtworkRowViewModel(
            artwork_id=record.id,
            title=record.title,
            place_of_origin=record.place_of_origin,
            artist_display=record.artist_display,
            inscriptions=record.inscriptions,
            date_start=record.date_start,
            date_end=record.date_end,
            is_checked=is_checked,
        )

    def map_table(
        self,
        records: Sequence[ArtworkRecord],
        visible_selection: Sequence[ArtworkRecord],
        page_number: Optional[int],
        total_count: int,
        loading: bool,
        requested_page: Optional[int] = None,
    ) -> CatalogTableViewModel:
        checked_ids = tuple(record.id for record in visible_selection)
        checked = set(checked_ids)

        pagination = None
        if page_number is not None:
            pagination = PaginationDTO(
                page_number=page_number,
                rows_per_page=self._rows_per_page,
                total_count=total_count,
            )

        return CatalogTableViewModel(
            rows=tuple(self.map_row(record, record.id in checked) for record in records),
            checked_ids=checked_ids,
            pagination=pagination,
            rows_per_page=self._rows_per_page,
            total_count=total_count,
            loading=self._map_loading(loading, requested_page),
        )

    def _map_loading(self, loading: bool, requested_page: Optional[int]) -> Optional[LoadingStateViewModel]:
        if not loading:
            return None
        message = "Loading artworks..."
        if requested_page is not None:
            message = f"Loading page {requested_page}..."
        # Rows already rendered stay interactive while a page is in flight
        return LoadingStateViewModel(message=message, progress=None, is_blocking=False)

    # =========================================================================
    # SELECTION PANEL MAPPING
    # =========================================================================

    def map_selection_panel(self, selected: Iterable[ArtworkRecord]) -> SelectionPanelViewModel:
        return SelectionPanelViewModel(
            items=tuple(
                SelectionPanelItemViewModel(artwork_id=record.id, label=record.panel_label())
                for record in selected
            )
        )

    # =========================================================================
    # FULL VIEW
    # =========================================================================

    def map_view(
        self,
        table: CatalogTableViewModel,
        panel: SelectionPanelViewModel,
        last_failure: Optional[FetchFailure],
    ) -> CatalogViewModel:
        warnings: Tuple[str, ...] = ()
        if last_failure is not None:
            warnings = (last_failure.describe(),)
        return CatalogViewModel(table=table, selection_panel=panel, warnings=warnings)
