"""
Application service for evaluating which shops are open.

The service fetches shop records via a client adapter and delegates the
open/closed decision to the domain layer. The current time is passed in by
the caller so results are reproducible.
"""

from __future__ import annotations

from typing import List, Protocol

from rich.console import Console

from ..domain.models import ShopRecord, ShopStatus
from ..domain.opening_hours import Now, evaluate_shop

console = Console(stderr=True)


class ShopClientProtocol(Protocol):
    """Protocol describing the shop source needed by the service."""

    def get_shops(self, search: str | None = None) -> List[ShopRecord]:
        """Return shop records, optionally filtered by name or location."""


class ShopStatusService:
    """Evaluates the opening state of every shop the API knows about."""

    def __init__(self, shop_client: ShopClientProtocol) -> None:
        self._shop_client = shop_client

    def list_statuses(self, *, now: Now, search: str | None = None) -> List[ShopStatus]:
        """Fetch shops and evaluate each one at ``now``."""
        shops = self._shop_client.get_shops(search=search)

        statuses: List[ShopStatus] = []
        for shop in shops:
            if shop.opening_time and shop.closing_time and shop.opening_window() is None:
                console.print(
                    f"[yellow]Warning: Unrecognized opening hours for "
                    f"'{shop.shop_name}': {shop.opening_time!r} - {shop.closing_time!r}[/yellow]"
                )
            statuses.append(evaluate_shop(shop, now))

        return statuses

    def open_shops(self, *, now: Now, search: str | None = None) -> List[ShopStatus]:
        """Only the shops that are open at ``now``."""
        return [
            status for status in self.list_statuses(now=now, search=search)
            if status.is_open
        ]
