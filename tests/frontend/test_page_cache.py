"""
Page Cache Tests

AXIOM UNDER TEST:
=================
The cache holds exactly one page. Failures never lose the previous page,
never leave `loading` stuck, and stale responses never win.
"""

import asyncio

import pytest

from catalog.contracts import CatalogFetchError, FetchStatus
from catalog.providers.mock import MockCatalogProvider
from frontend.state import FailureLog, FetchFailure, PageCache


def run(coro):
    return asyncio.run(coro)


# =============================================================================
# BASIC LOADING
# =============================================================================

class TestPageLoading:

    def test_empty_before_first_load(self):
        cache = PageCache(MockCatalogProvider(total_count=10))

        assert cache.current_records() == ()
        assert cache.total_count() == 0
        assert cache.page_number is None
        assert not cache.loading

    def test_load_replaces_records_and_total(self, corpus):
        provider = MockCatalogProvider(records=corpus, rows_per_page=2)
        cache = PageCache(provider)

        assert run(cache.load(1)) is True
        assert [r.id for r in cache.current_records()] == [1, 2]
        assert cache.total_count() == 10

        run(cache.load(3))
        assert [r.id for r in cache.current_records()] == [5, 6]
        assert cache.page_number == 3
        assert not cache.loading

    def test_page_beyond_end_is_empty_not_error(self, corpus):
        """ceil(10 / 2) == 5 pages; page 9 is a valid, empty request."""
        provider = MockCatalogProvider(records=corpus, rows_per_page=2)
        cache = PageCache(provider)

        assert run(cache.load(9)) is True
        assert cache.current_records() == ()
        assert cache.total_count() == 10
        assert cache.last_failure is None

    @pytest.mark.parametrize("bad", [0, -1, 1.5, True, "2"])
    def test_rejects_non_positive_page(self, bad):
        cache = PageCache(MockCatalogProvider(total_count=10))
        with pytest.raises(ValueError):
            run(cache.load(bad))

    def test_loading_flag_while_in_flight(self, gated_provider):
        async def scenario():
            cache = PageCache(gated_provider)
            task = asyncio.ensure_future(cache.load(1))
            await asyncio.sleep(0)
            during = cache.loading
            gated_provider.release(1)
            await task
            return during, cache.loading

        during, after = run(scenario())
        assert during is True
        assert after is False


# =============================================================================
# FAILURE HANDLING
# =============================================================================

class TestLoadFailures:

    def test_failure_keeps_previous_page(self, corpus):
        provider = MockCatalogProvider(records=corpus, rows_per_page=2)
        cache = PageCache(provider)
        run(cache.load(2))

        provider.failure_mode = FetchStatus.TIMEOUT
        assert run(cache.load(3)) is False

        assert [r.id for r in cache.current_records()] == [3, 4]
        assert cache.total_count() == 10
        assert cache.page_number == 2
        assert not cache.loading

    def test_failure_is_reported(self, corpus):
        seen = []
        log = FailureLog()
        provider = MockCatalogProvider(records=corpus, failure_mode=FetchStatus.HTTP_ERROR)
        cache = PageCache(provider, failure_log=log, on_failure=seen.append)

        run(cache.load(1))

        assert log.entry_count == 1
        assert log.latest.status == FetchStatus.HTTP_ERROR
        assert log.latest.page_number == 1
        assert seen == [log.latest]
        assert cache.last_failure == log.latest

    def test_unexpected_provider_exception_is_contained(self):
        class BrokenProvider(MockCatalogProvider):
            async def fetch_page(self, page_number):
                raise RuntimeError("boom")

        cache = PageCache(BrokenProvider(total_count=3))

        assert run(cache.load(1)) is False
        assert cache.last_failure.status == FetchStatus.PROVIDER_ERROR
        assert "boom" in cache.last_failure.message
        assert not cache.loading

    def test_raising_observer_does_not_escape(self):
        def observer(failure):
            raise RuntimeError("observer bug")

        provider = MockCatalogProvider(total_count=3, failure_mode=FetchStatus.NETWORK_ERROR)
        cache = PageCache(provider, on_failure=observer)

        assert run(cache.load(1)) is False
        assert not cache.loading

    def test_success_clears_last_failure(self, corpus):
        provider = MockCatalogProvider(records=corpus, failure_mode=FetchStatus.TIMEOUT)
        cache = PageCache(provider)
        run(cache.load(1))
        assert cache.last_failure is not None

        provider.failure_mode = None
        run(cache.load(1))

        assert cache.last_failure is None
        assert cache.failure_log.entry_count == 1


# =============================================================================
# LAST WRITE WINS
# =============================================================================

class TestStaleResponses:

    def test_stale_response_does_not_overwrite_newer_page(self, gated_provider):
        """Page 1 resolves after page 2 was requested and applied."""
        async def scenario():
            cache = PageCache(gated_provider)
            first = asyncio.ensure_future(cache.load(1))
            await asyncio.sleep(0)
            second = asyncio.ensure_future(cache.load(2))
            await asyncio.sleep(0)

            gated_provider.release(2)
            applied_second = await second
            gated_provider.release(1)
            applied_first = await first
            return cache, applied_first, applied_second

        cache, applied_first, applied_second = run(scenario())

        assert applied_second is True
        assert applied_first is False
        assert cache.page_number == 2
        assert [r.id for r in cache.current_records()] == [3, 4]

    def test_stale_response_arriving_first_is_also_discarded(self, gated_provider):
        """Page 1 resolves while page 2 is still in flight."""
        async def scenario():
            cache = PageCache(gated_provider)
            first = asyncio.ensure_future(cache.load(1))
            await asyncio.sleep(0)
            second = asyncio.ensure_future(cache.load(2))
            await asyncio.sleep(0)

            gated_provider.release(1)
            await first
            state_between = (cache.current_records(), cache.loading)

            gated_provider.release(2)
            await second
            return cache, state_between

        cache, (records_between, loading_between) = run(scenario())

        assert records_between == ()
        assert loading_between is True
        assert cache.page_number == 2

    def test_stale_failure_is_silent(self, gated_provider):
        async def scenario():
            cache = PageCache(gated_provider)
            first = asyncio.ensure_future(cache.load(1))
            await asyncio.sleep(0)
            second = asyncio.ensure_future(cache.load(2))
            await asyncio.sleep(0)

            gated_provider.release(2)
            await second
            gated_provider.fail(1)
            await first
            return cache

        cache = run(scenario())

        assert cache.last_failure is None
        assert cache.failure_log.entry_count == 0
        assert cache.page_number == 2

    def test_cancelled_latest_load_clears_loading(self, gated_provider):
        async def scenario():
            cache = PageCache(gated_provider)
            task = asyncio.ensure_future(cache.load(1))
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            return cache

        cache = run(scenario())
        assert not cache.loading
        assert cache.current_records() == ()


class TestFetchErrorContract:

    def test_retryable_classification(self):
        assert CatalogFetchError(FetchStatus.TIMEOUT, "t").retryable
        assert CatalogFetchError(FetchStatus.NETWORK_ERROR, "n").retryable
        assert CatalogFetchError(FetchStatus.HTTP_ERROR, "h", http_status=503).retryable
        assert not CatalogFetchError(FetchStatus.HTTP_ERROR, "h", http_status=404).retryable
        assert not CatalogFetchError(FetchStatus.PARSE_ERROR, "p").retryable


class TestFailureLogBounds:

    def test_keeps_only_the_newest_entries(self):
        log = FailureLog(max_entries=2)

        for page_number in (1, 2, 3):
            error = CatalogFetchError(FetchStatus.TIMEOUT, "slow", page_number=page_number)
            log.collect(FetchFailure.from_exception(page_number, error))

        assert [f.page_number for f in log.get_entries()] == [2, 3]
        assert log.latest.page_number == 3
        assert log.entry_count == 3
