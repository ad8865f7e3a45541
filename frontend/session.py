"""
Catalog View Session

Glue between the page cache, the selection accumulator and the display layer.

EVENT FLOW:
===========
1. mount                 -> load page 1
2. page change (0-based) -> load page index + 1
3. selection change      -> merge into the selection
4. panel remove          -> remove from the selection
5. render                -> visible selection + full selection as view models
"""

from __future__ import annotations
from typing import Iterable, Optional
import asyncio
import logging

from catalog.contracts import ArtworkRecord
from catalog.providers.base import RecordProvider

from .state import FailureLog, PageCache, SelectionAccumulator
from .mapper import ViewModelMapper
from .presentation.viewmodels import CatalogViewModel, SelectionPanelViewModel
from .interaction.actions import ActionType, InteractionRequest

logger = logging.getLogger(__name__)


class CatalogViewSession:
    """
    One viewer session: owns the page cache and the selection.

    Session-scoped and in-memory only; nothing survives a restart.
    """

    def __init__(
        self,
        provider: RecordProvider,
        rows_per_page: int = 5,
        failure_log: Optional[FailureLog] = None
    ):
        self._provider = provider
        self._cache = PageCache(provider, failure_log=failure_log)
        self._selection = SelectionAccumulator()
        self._mapper = ViewModelMapper(rows_per_page)
        self._pending: Optional[asyncio.Future] = None

    # =========================================================================
    # EVENT HANDLERS
    # =========================================================================

    async def mount(self) -> bool:
        """Initial load of the first page."""
        return await self._navigate(1)

    async def on_page_change(self, page_index: int) -> bool:
        """Handle the table paginator's 0-based page index."""
        if isinstance(page_index, bool) or not isinstance(page_index, int) or page_index < 0:
            raise ValueError(f"page_index must be a non-negative integer, got {page_index!r}")
        return await self._navigate(page_index + 1)

    def on_selection_change(self, checked_visible_records: Iterable[ArtworkRecord]) -> None:
        self._selection.merge(checked_visible_records)

    def on_remove(self, record: ArtworkRecord) -> None:
        self._selection.remove(record)

    async def dispatch(self, request: InteractionRequest) -> None:
        """Route an interaction intent to its handler."""
        if request.action == ActionType.PAGE_CHANGE:
            if request.page_index is None:
                raise ValueError("PAGE_CHANGE requires page_index")
            await self.on_page_change(request.page_index)
        elif request.action == ActionType.SELECTION_CHANGE:
            self.on_selection_change(request.records)
        elif request.action == ActionType.REMOVE_SELECTED:
            for record in request.records:
                self.on_remove(record)
        else:
            raise ValueError(f"Unsupported action: {request.action}")

    async def _navigate(self, page_number: int) -> bool:
        """
        Start a load and wait for it.

        A still-running earlier navigation is cancelled; the page cache's
        sequence guard discards anything that slips through.
        """
        previous = self._pending
        if previous is not None and not previous.done():
            logger.debug(f"Cancelling superseded navigation for page {page_number}")
            previous.cancel()

        task = asyncio.ensure_future(self._cache.load(page_number))
        self._pending = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._pending is not task:
                # Superseded by a later navigation
                return False
            raise

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render(self) -> CatalogViewModel:
        records = self._cache.current_records()
        table = self._mapper.map_table(
            records=records,
            visible_selection=self._selection.visible_selection(records),
            page_number=self._cache.page_number,
            total_count=self._cache.total_count(),
            loading=self._cache.loading,
            requested_page=self._cache.requested_page,
        )
        return self._mapper.map_view(
            table=table,
            panel=self.render_selection_panel(),
            last_failure=self._cache.last_failure,
        )

    def render_selection_panel(self) -> SelectionPanelViewModel:
        return self._mapper.map_selection_panel(self._selection.all())

    # =========================================================================
    # ACCESS
    # =========================================================================

    @property
    def page_cache(self) -> PageCache:
        return self._cache

    @property
    def selection(self) -> SelectionAccumulator:
        return self._selection

    @property
    def rows_per_page(self) -> int:
        return self._mapper.rows_per_page

    async def aclose(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        await self._provider.aclose()
