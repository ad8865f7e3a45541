"""
Viewer API Tests

The HTTP surface over one session, backed by the mock provider.
"""

import pytest
from fastapi.testclient import TestClient

from backend.api import server
from catalog.contracts import FetchStatus
from catalog.providers.mock import MockCatalogProvider


@pytest.fixture
def provider():
    return MockCatalogProvider(total_count=12, rows_per_page=5)


@pytest.fixture
def client(monkeypatch, provider):
    monkeypatch.delenv("ARTVIEW_CONFIG", raising=False)
    monkeypatch.setenv("ARTVIEW_PROVIDER", "mock")
    monkeypatch.setenv("ARTVIEW_ROWS_PER_PAGE", "5")
    monkeypatch.setattr(server, "create_provider", lambda config: provider)

    with TestClient(server.app) as test_client:
        yield test_client


def row_ids(payload):
    return [row["id"] for row in payload["table"]["rows"]]


# =============================================================================
# VIEW & NAVIGATION
# =============================================================================

class TestViewAndNavigation:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "online"}

    def test_first_page_loaded_on_startup(self, client):
        payload = client.get("/api/v1/view").json()

        assert row_ids(payload) == [1, 2, 3, 4, 5]
        assert payload["table"]["total_count"] == 12
        assert payload["table"]["pagination"]["page_count"] == 3
        assert payload["table"]["loading"]["active"] is False
        assert payload["selection"]["empty_message"] == "No artworks selected"

    def test_page_change(self, client):
        payload = client.post("/api/v1/page", json={"page_index": 2}).json()

        assert row_ids(payload) == [11, 12]
        assert payload["table"]["pagination"]["page_number"] == 3
        assert payload["table"]["pagination"]["has_next"] is False
        assert payload["table"]["pagination"]["is_beyond_end"] is False

    def test_page_beyond_end_is_empty(self, client):
        response = client.post("/api/v1/page", json={"page_index": 40})

        assert response.status_code == 200
        assert row_ids(response.json()) == []
        assert response.json()["warnings"] == []
        assert response.json()["table"]["pagination"]["is_beyond_end"] is True

    def test_negative_page_index_rejected(self, client):
        assert client.post("/api/v1/page", json={"page_index": -1}).status_code == 422

    def test_failed_page_keeps_rows_and_warns(self, client, provider):
        provider.failure_mode = FetchStatus.TIMEOUT

        payload = client.post("/api/v1/page", json={"page_index": 1}).json()

        assert row_ids(payload) == [1, 2, 3, 4, 5]
        assert len(payload["warnings"]) == 1

        failures = client.get("/api/v1/failures").json()
        assert failures["total"] == 1
        assert failures["entries"][0]["status"] == "timeout"
        assert failures["entries"][0]["page_number"] == 2


# =============================================================================
# SELECTION
# =============================================================================

class TestSelection:

    def test_selection_across_pages(self, client):
        client.put("/api/v1/selection", json={"checked_ids": [2]})
        client.post("/api/v1/page", json={"page_index": 1})
        payload = client.put("/api/v1/selection", json={"checked_ids": [7]}).json()

        assert payload["table"]["checked_ids"] == [7]
        assert [i["artwork_id"] for i in payload["selection"]["items"]] == [2, 7]

        back = client.post("/api/v1/page", json={"page_index": 0}).json()
        assert back["table"]["checked_ids"] == [2]
        assert [row["checked"] for row in back["table"]["rows"]] == [False, True, False, False, False]

    def test_ids_off_the_visible_page_rejected(self, client):
        response = client.put("/api/v1/selection", json={"checked_ids": [1, 9]})

        assert response.status_code == 422
        assert client.get("/api/v1/selection").json()["count"] == 0

    def test_remove(self, client):
        client.put("/api/v1/selection", json={"checked_ids": [1, 3]})

        panel = client.delete("/api/v1/selection/1").json()

        assert [i["artwork_id"] for i in panel["items"]] == [3]
        assert panel["items"][0]["label"] == "Study No. 3 - Artist 4"

    def test_remove_absent_is_noop(self, client):
        client.put("/api/v1/selection", json={"checked_ids": [1]})

        response = client.delete("/api/v1/selection/999")

        assert response.status_code == 200
        assert response.json()["count"] == 1


class TestWithoutSession:

    def test_503_before_startup(self):
        # No lifespan: the session was never created
        test_client = TestClient(server.app)
        assert test_client.get("/api/v1/view").status_code == 503
