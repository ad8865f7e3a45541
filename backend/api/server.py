"""
Art Catalog Viewer: API Server
==============================

HTTP surface for one catalog viewer session.
The browser table and selection panel drive the session through these
endpoints and render whatever `/api/v1/view` returns.

Endpoints:
- GET    /health                          -> Liveness
- GET    /api/v1/view                     -> Rendered table + selection panel
- POST   /api/v1/page                     -> Navigate (0-based page index)
- PUT    /api/v1/selection                -> Report checked rows of the visible page
- GET    /api/v1/selection                -> Cross-page selection panel
- DELETE /api/v1/selection/{artwork_id}   -> Remove one selected artwork
- GET    /api/v1/failures                 -> Fetch failure log

Usage:
    uvicorn backend.api.server:app --reload
"""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from catalog.config import load_config
from catalog.providers import create_provider
from frontend.session import CatalogViewSession
from .mapper import map_view_to_dto, map_panel_to_dto, map_failures_to_dto

logger = logging.getLogger(__name__)

# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

# Single viewer session for this process
session_instance: Optional[CatalogViewSession] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the session and load the first page on startup."""
    global session_instance

    config = load_config()
    provider = create_provider(config.catalog)

    logger.info(
        f"Starting catalog viewer (provider={provider.provider_id}, "
        f"rows_per_page={config.catalog.rows_per_page})"
    )

    session_instance = CatalogViewSession(
        provider=provider,
        rows_per_page=config.catalog.rows_per_page
    )
    # Failures are recorded on the session, startup continues regardless
    await session_instance.mount()

    yield

    logger.info("Shutting down catalog viewer session.")
    await session_instance.aclose()
    session_instance = None


app = FastAPI(
    title="Art Catalog Viewer API",
    version="0.1.0",
    description="Paginated artwork browsing with cross-page selection",
    lifespan=lifespan
)

# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST BODIES
# =============================================================================

class PageChangeRequest(BaseModel):
    page_index: int = Field(ge=0, description="0-based page index from the paginator")


class SelectionChangeRequest(BaseModel):
    checked_ids: List[int] = Field(description="Ids of every checked row on the visible page")


def _require_session() -> CatalogViewSession:
    if not session_instance:
        raise HTTPException(status_code=503, detail="Viewer session not initialized")
    return session_instance


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    """System status."""
    _require_session()
    return {"status": "online"}


@app.get("/api/v1/view")
async def get_view():
    """Current page rows with checked state, plus the selection panel."""
    session = _require_session()
    return map_view_to_dto(session.render())


@app.post("/api/v1/page")
async def change_page(body: PageChangeRequest):
    """
    Navigate to a page.
    A failed fetch keeps the previous page and shows up under `warnings`.
    """
    session = _require_session()
    await session.on_page_change(body.page_index)
    return map_view_to_dto(session.render())


@app.put("/api/v1/selection")
async def change_selection(body: SelectionChangeRequest):
    """
    Report the checked rows of the visible page.
    Ids must belong to the visible page; merging never unchecks anything.
    """
    session = _require_session()

    visible = {record.id: record for record in session.page_cache.current_records()}
    unknown = [artwork_id for artwork_id in body.checked_ids if artwork_id not in visible]
    if unknown:
        raise HTTPException(
            status_code=422,
            detail=f"Artwork ids not on the visible page: {unknown}"
        )

    session.on_selection_change(visible[artwork_id] for artwork_id in body.checked_ids)
    return map_view_to_dto(session.render())


@app.get("/api/v1/selection")
async def get_selection():
    """Every selected artwork across all visited pages."""
    session = _require_session()
    return map_panel_to_dto(session.render_selection_panel())


@app.delete("/api/v1/selection/{artwork_id}")
async def remove_selection(artwork_id: int):
    """Remove one artwork from the selection. No-op if it is not selected."""
    session = _require_session()
    record = session.selection.get(artwork_id)
    if record is not None:
        session.on_remove(record)
    return map_panel_to_dto(session.render_selection_panel())


@app.get("/api/v1/failures")
async def get_failures():
    """Fetch failures recorded during this session."""
    session = _require_session()
    return map_failures_to_dto(session.page_cache.failure_log)
