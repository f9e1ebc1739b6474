"""
Tests for the API client, mock client and reminder store.
"""

import json

import pendulum
import pytest
import requests

from pettime.adapters.api_client import ApiClient
from pettime.adapters.mock_api_client import MockApiClient
from pettime.adapters.reminder_store import ReminderStore
from pettime.domain.exceptions import ApiError, ReminderStoreError
from pettime.domain.models import PetTask, TimeOfDay


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self._payload


@pytest.fixture
def captured(monkeypatch):
    """Patch requests.get and record the calls."""
    calls = []
    responses = {}

    def fake_get(url, headers=None, params=None, timeout=None):
        calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        return responses[url]

    monkeypatch.setattr(requests, "get", fake_get)
    return calls, responses


class TestApiClient:
    """Tests for ApiClient."""

    def test_get_shops(self, captured):
        calls, responses = captured
        responses["http://api.test/api/shops/map"] = FakeResponse([
            {
                "id": 1,
                "shopName": "Happy Paws",
                "openingTime": "9:00 AM",
                "closingTime": "6:00 PM",
                "latitude": 7.07,
                "longitude": 125.61,
                "isAvailable": True,
                "approved": True,
                "ownerName": "Maria",
            },
            {"shopName": "missing id"},
        ])
        client = ApiClient(base_url="http://api.test/api/", access_token="secret")

        shops = client.get_shops(search="paws")

        assert len(shops) == 1
        assert shops[0].shop_name == "Happy Paws"
        assert shops[0].opening_window().opening == TimeOfDay(9, 0)
        assert calls[0]["params"] == {"search": "paws"}
        assert calls[0]["headers"]["Authorization"] == "Bearer secret"
        assert calls[0]["timeout"] == 30

    def test_get_tasks_and_pets(self, captured):
        _, responses = captured
        responses["http://api.test/api/task"] = FakeResponse([
            {"id": 4, "petId": 1, "name": "Walk", "type": "Daily", "time": "2025-08-11T09:00:00Z"},
            {"id": 5, "petId": 1, "name": "Broken", "type": "Daily", "time": "not a date"},
        ])
        responses["http://api.test/api/pet"] = FakeResponse([{"id": 1, "name": "Buddy"}])
        client = ApiClient(base_url="http://api.test/api", timezone="Asia/Manila")

        tasks = client.get_tasks()
        pets = client.get_pet_names()

        assert [task.id for task in tasks] == [4]
        assert tasks[0].time.hour == 17
        assert pets == {1: "Buddy"}

    def test_http_error_raises_api_error(self, captured):
        _, responses = captured
        responses["http://api.test/api/task"] = FakeResponse({"message": "Unauthorized"}, status_code=401)
        client = ApiClient(base_url="http://api.test/api")

        with pytest.raises(ApiError, match="/task"):
            client.get_tasks()

    def test_unexpected_payload_raises_api_error(self, captured):
        _, responses = captured
        responses["http://api.test/api/shops/map"] = FakeResponse({"message": "Internal server error"})
        client = ApiClient(base_url="http://api.test/api")

        with pytest.raises(ApiError, match="Expected a list"):
            client.get_shops()


class TestMockApiClient:
    """Tests for MockApiClient."""

    def test_bundled_shops(self):
        client = MockApiClient()

        shops = client.get_shops()

        assert len(shops) == 5
        assert [shop.shop_name for shop in shops] == sorted(shop.shop_name for shop in shops)

    def test_search(self):
        client = MockApiClient()

        assert [shop.shop_name for shop in client.get_shops(search="night owl")] == ["Night Owl Vet Clinic"]

    def test_task_offsets(self):
        now = pendulum.datetime(2025, 8, 11, 8, 0, tz="Asia/Manila")
        client = MockApiClient(now=now, timezone="Asia/Manila")

        tasks = client.get_tasks()

        assert tasks[0].time == now
        assert client.get_pet_names()[1] == "Buddy"


class TestReminderStore:
    """Tests for ReminderStore."""

    def test_save_load_clear(self, tmp_path):
        store = ReminderStore(tmp_path / "nested" / "pending.json")
        task = PetTask(
            id=1, pet_id=1, name="Walk", task_type="Daily",
            time=pendulum.datetime(2025, 8, 11, 9, 0, tz="UTC"), pet_name="Buddy",
        )

        assert store.load() == []
        store.save([task])
        assert store.load() == [task]

        store.clear()
        assert store.load() == []

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "pending.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ReminderStoreError):
            ReminderStore(path).load()

    def test_unreadable_entries_are_dropped(self, tmp_path):
        path = tmp_path / "pending.json"
        path.write_text(json.dumps([{"id": 1}]), encoding="utf-8")

        assert ReminderStore(path).load() == []

    def test_clear_failure_raises_store_error(self, tmp_path):
        """A store path that cannot be removed is reported as ReminderStoreError."""
        path = tmp_path / "pending.json"
        path.mkdir()

        with pytest.raises(ReminderStoreError, match="Could not clear"):
            ReminderStore(path).clear()

    def test_clear_missing_file(self, tmp_path):
        ReminderStore(tmp_path / "pending.json").clear()
