"""
REST API client for fetching shops, tasks and pets.
"""

from typing import Any, Dict, List

import requests
from rich.console import Console

from ..domain.exceptions import ApiError
from ..domain.models import PetTask, ShopRecord

console = Console(stderr=True)


def parse_shop(item: Dict[str, Any]) -> ShopRecord:
    """
    Parse a shop entry of the /shops/map response.

    Raises:
        KeyError: If id or shopName is missing
        ValueError: If a field has the wrong type
    """
    return ShopRecord(
        id=int(item["id"]),
        shop_name=item["shopName"],
        opening_time=item.get("openingTime") or "",
        closing_time=item.get("closingTime") or "",
        shop_location=item.get("shopLocation") or "",
        shop_type=item.get("shopType") or "",
        is_available=bool(item.get("isAvailable", True)),
        approved=bool(item.get("approved", True)),
        owner_name=item.get("ownerName") or "Unknown",
        latitude=_optional_float(item.get("latitude")),
        longitude=_optional_float(item.get("longitude")),
    )


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


class ApiClient:
    """
    Client for the pet-care application's REST API.

    Endpoints used:
    - GET /shops/map  (public)
    - GET /task       (authenticated)
    - GET /pet        (authenticated)
    """

    def __init__(self, base_url: str, access_token: str | None = None, timezone: str = "UTC"):
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. http://localhost:3000/api
            access_token: Optional bearer token for authenticated endpoints
            timezone: IANA timezone task times are converted to
        """
        self.base_url = base_url.rstrip("/")
        self.timezone = timezone
        self.headers = {"Content-Type": "application/json"}
        if access_token:
            self.headers["Authorization"] = f"Bearer {access_token}"

    def get_shops(self, search: str | None = None) -> List[ShopRecord]:
        """
        Get all shops shown on the map.

        Args:
            search: Optional filter on shop name or location

        Returns:
            List of ShopRecord objects

        Raises:
            ApiError: If the API call fails
        """
        params = {"search": search} if search else None
        data = self._get("/shops/map", params=params)

        shops: List[ShopRecord] = []
        for item in data:
            try:
                shops.append(parse_shop(item))
            except (KeyError, TypeError, ValueError) as e:
                console.print(f"[yellow]Warning: Could not parse shop: {e}[/yellow]")
                continue

        return shops

    def get_tasks(self, pet_id: int | None = None) -> List[PetTask]:
        """
        Get the current user's tasks, ordered by time.

        Raises:
            ApiError: If the API call fails
        """
        params = {"petId": pet_id} if pet_id else None
        data = self._get("/task", params=params)

        tasks: List[PetTask] = []
        for item in data:
            try:
                tasks.append(PetTask.from_dict(item, timezone=self.timezone))
            except (KeyError, TypeError, ValueError) as e:
                console.print(f"[yellow]Warning: Could not parse task: {e}[/yellow]")
                continue

        return tasks

    def get_pet_names(self) -> Dict[int, str]:
        """
        Get a mapping of pet id to pet name.

        Raises:
            ApiError: If the API call fails
        """
        data = self._get("/pet")

        return {
            int(pet["id"]): pet.get("name") or ""
            for pet in data
            if isinstance(pet, dict) and "id" in pet
        }

    def _get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"

        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=30)
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise ApiError(f"Failed to fetch {path}: {e}") from e
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {path}: {e}") from e

        if not isinstance(data, list):
            raise ApiError(f"Expected a list from {path}, got {type(data).__name__}")

        return data
