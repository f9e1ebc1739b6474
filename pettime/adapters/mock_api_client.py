"""
Mock API client for trying the CLI without a running backend.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pendulum
from pendulum import DateTime
from rich.console import Console

from ..domain.models import PetTask, ShopRecord
from .api_client import parse_shop

console = Console(stderr=True)


class MockApiClient:
    """
    Mock client that simulates the REST API.

    Shops, pets and tasks are loaded from mock_data.json. Task times are
    stored as an offset in minutes from the moment the client is created, so
    the reminder demo always has something due.
    """

    def __init__(
        self,
        data_file: Path | None = None,
        now: DateTime | None = None,
        timezone: str = "UTC"
    ):
        """
        Initialize the mock client.

        Args:
            data_file: Optional path to a JSON file in the mock_data.json layout
            now: Reference time for task offsets (defaults to the current time)
            timezone: IANA timezone identifier
        """
        self.timezone = timezone
        self.now = now or pendulum.now(timezone)
        self.data_file = data_file or Path(__file__).parent / "mock_data.json"
        self._load_data()

    def _load_data(self):
        """Load mock data from the JSON file."""
        if self.data_file.exists():
            with open(self.data_file, "r", encoding="utf-8") as f:
                self.data: Dict[str, List[Dict[str, Any]]] = json.load(f)
        else:
            # Fallback to empty if file doesn't exist
            self.data = {}

    def get_shops(self, search: str | None = None) -> List[ShopRecord]:
        shops: List[ShopRecord] = []

        for item in self.data.get("shops", []):
            if search and not self._matches(item, search):
                continue
            try:
                shops.append(parse_shop(item))
            except (KeyError, TypeError, ValueError) as e:
                console.print(f"[yellow]Warning: Could not parse shop: {e}[/yellow]")
                continue

        return sorted(shops, key=lambda shop: shop.shop_name)

    def get_tasks(self, pet_id: int | None = None) -> List[PetTask]:
        tasks: List[PetTask] = []

        for item in self.data.get("tasks", []):
            if pet_id and item.get("petId") != pet_id:
                continue

            payload = dict(item)
            if "time" not in payload:
                offset = int(payload.get("offsetMinutes", 0))
                payload["time"] = self.now.add(minutes=offset).to_iso8601_string()

            try:
                tasks.append(PetTask.from_dict(payload, timezone=self.timezone))
            except (KeyError, TypeError, ValueError) as e:
                console.print(f"[yellow]Warning: Could not parse task: {e}[/yellow]")
                continue

        return sorted(tasks, key=lambda task: task.time)

    def get_pet_names(self) -> Dict[int, str]:
        return {int(pet["id"]): pet.get("name") or "" for pet in self.data.get("pets", [])}

    @staticmethod
    def _matches(item: Dict[str, Any], search: str) -> bool:
        term = search.lower()
        return (
            term in (item.get("shopName") or "").lower()
            or term in (item.get("shopLocation") or "").lower()
        )
