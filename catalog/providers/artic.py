"""
Art Institute of Chicago Provider
=================================

Fetches artwork pages from the public AIC API.

PRINCIPLES:
===========
1. One HTTP request per page (plus retries)
2. Remote page size equals the table page size
3. Every failure becomes a typed CatalogFetchError
4. Transient failures retry with capped exponential backoff
"""

from __future__ import annotations
from typing import Any, Optional
import asyncio
import logging

import httpx

from ..config import CatalogConfig
from ..contracts import ArtworkRecord, CatalogPage, CatalogFetchError, FetchStatus
from .base import RecordProvider

logger = logging.getLogger(__name__)


class ArticCatalogProvider(RecordProvider):
    """
    Paged artwork source backed by `GET {base_url}/artworks`.

    GUARANTEES:
    ===========
    1. Returns a CatalogPage or raises CatalogFetchError, nothing else
    2. Parse errors never produce a partial page
    3. Only TIMEOUT, NETWORK_ERROR and 5xx are retried
    """

    def __init__(
        self,
        config: Optional[CatalogConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            config: Catalog settings (defaults if omitted)
            transport: Optional httpx transport, used to stub the network
        """
        self._config = config or CatalogConfig()
        self._transport = transport

    @property
    def provider_id(self) -> str:
        return "artic"

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/artworks"

    async def fetch_page(self, page_number: int) -> CatalogPage:
        if page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {page_number}")

        delay = self._config.backoff_initial_seconds
        attempt = 0

        while True:
            try:
                return await self._fetch_once(page_number)
            except CatalogFetchError as e:
                if not e.retryable or attempt >= self._config.max_retries:
                    raise
                attempt += 1
                logger.info(
                    f"Retrying page {page_number} after {e.status.value} "
                    f"(attempt {attempt}/{self._config.max_retries}, waiting {delay}s)"
                )
                await asyncio.sleep(delay)
                delay = min(delay * 2, self._config.backoff_max_seconds)

    async def _fetch_once(self, page_number: int) -> CatalogPage:
        params = {
            "page": page_number,
            "limit": self._config.rows_per_page,
            "fields": ",".join(self._config.fields),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                transport=self._transport
            ) as client:
                response = await client.get(
                    self.endpoint,
                    params=params,
                    headers={"User-Agent": self._config.user_agent},
                    follow_redirects=True
                )
        except httpx.TimeoutException as e:
            raise CatalogFetchError(
                FetchStatus.TIMEOUT,
                f"Request timed out after {self._config.timeout_seconds}s",
                page_number=page_number
            ) from e
        except httpx.TooManyRedirects as e:
            raise CatalogFetchError(
                FetchStatus.HTTP_ERROR,
                f"Too many redirects: {e}",
                page_number=page_number
            ) from e
        except httpx.DecodingError as e:
            raise CatalogFetchError(
                FetchStatus.PARSE_ERROR,
                f"Response body could not be decoded: {e}",
                page_number=page_number
            ) from e
        except httpx.RequestError as e:
            raise CatalogFetchError(
                FetchStatus.NETWORK_ERROR,
                str(e) or type(e).__name__,
                page_number=page_number
            ) from e

        if response.status_code < 200 or response.status_code >= 300:
            raise CatalogFetchError(
                FetchStatus.HTTP_ERROR,
                f"HTTP {response.status_code}",
                page_number=page_number,
                http_status=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise CatalogFetchError(
                FetchStatus.PARSE_ERROR,
                f"Response is not valid JSON: {e}",
                page_number=page_number,
                http_status=response.status_code
            ) from e

        return self._parse_page(body, page_number)

    def _parse_page(self, body: Any, page_number: int) -> CatalogPage:
        """Map the `data` list and `pagination.total` into a page."""
        try:
            if not isinstance(body, dict):
                raise ValueError("response body is not an object")

            data = body.get("data")
            if not isinstance(data, list):
                raise ValueError("missing 'data' list")

            pagination = body.get("pagination")
            if not isinstance(pagination, dict):
                raise ValueError("missing 'pagination' object")

            total = pagination.get("total")
            if isinstance(total, bool) or not isinstance(total, int) or total < 0:
                raise ValueError(f"invalid pagination.total: {total!r}")

            records = tuple(ArtworkRecord.from_api(item) for item in data)

        except ValueError as e:
            raise CatalogFetchError(
                FetchStatus.PARSE_ERROR,
                str(e),
                page_number=page_number
            ) from e

        logger.debug(f"Fetched page {page_number}: {len(records)} records of {total}")
        return CatalogPage(page_number=page_number, records=records, total_count=total)
