"""
API Mapper
==========

Transforms view models into JSON-ready dicts for the HTTP surface.
No state access here: input is an already-rendered CatalogViewModel.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from frontend.presentation.viewmodels import (
    ArtworkRowViewModel,
    CatalogTableViewModel,
    CatalogViewModel,
    LoadingStateViewModel,
    SelectionPanelViewModel,
)
from frontend.state import FailureLog, PaginationDTO


def map_view_to_dto(view: CatalogViewModel) -> Dict[str, Any]:
    """Map a full render to the `/api/v1/view` payload."""
    return {
        "generated_at": _now_iso(),
        "table": _map_table(view.table),
        "selection": map_panel_to_dto(view.selection_panel),
        "warnings": list(view.warnings),
    }


def map_panel_to_dto(panel: SelectionPanelViewModel) -> Dict[str, Any]:
    """Map the cross-page selection panel."""
    return {
        "count": len(panel.items),
        "items": [
            {"artwork_id": item.artwork_id, "label": item.label}
            for item in panel.items
        ],
        "empty_message": panel.empty_message if panel.is_empty else None,
    }


def map_failures_to_dto(failure_log: FailureLog) -> Dict[str, Any]:
    """Map the fetch failure log."""
    return {
        "total": failure_log.entry_count,
        "entries": [
            {
                "page_number": f.page_number,
                "status": f.status.value,
                "message": f.message,
                "http_status": f.http_status,
                "occurred_at": f.occurred_at.isoformat().replace('+00:00', 'Z'),
            }
            for f in failure_log.get_entries()
        ],
    }


def _map_table(table: CatalogTableViewModel) -> Dict[str, Any]:
    return {
        "rows": [_map_row(row) for row in table.rows],
        "checked_ids": list(table.checked_ids),
        "rows_per_page": table.rows_per_page,
        "total_count": table.total_count,
        "pagination": _map_pagination(table.pagination),
        "loading": _map_loading(table.loading),
    }


def _map_row(row: ArtworkRowViewModel) -> Dict[str, Any]:
    return {
        "id": row.artwork_id,
        "title": row.title,
        "place_of_origin": row.place_of_origin,
        "artist_display": row.artist_display,
        "inscriptions": row.inscriptions,
        "date_start": row.date_start,
        "date_end": row.date_end,
        "checked": row.is_checked,
    }


def _map_pagination(pagination: Optional[PaginationDTO]) -> Optional[Dict[str, Any]]:
    if pagination is None:
        return None
    return {
        "page_number": pagination.page_number,
        "page_index": pagination.page_index,
        "page_count": pagination.page_count,
        "first_row_offset": pagination.first_row_offset,
        "has_next": pagination.has_next,
        "has_previous": pagination.has_previous,
        "is_beyond_end": pagination.is_beyond_end,
    }


def _map_loading(loading: Optional[LoadingStateViewModel]) -> Dict[str, Any]:
    if loading is None:
        return {"active": False, "message": None}
    return {"active": True, "message": loading.message}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
