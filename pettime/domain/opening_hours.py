"""
Opening-window checks for shops.

The current time is always passed in by the caller; nothing in here reads
the system clock.
"""

from datetime import datetime, time

from .models import OpeningWindow, ShopRecord, ShopStatus, TimeOfDay
from .time_format import format_for_display

Now = TimeOfDay | time | datetime


def to_time_of_day(now: Now) -> TimeOfDay:
    """Coerce the supported "now" representations to a TimeOfDay."""
    if isinstance(now, TimeOfDay):
        return now
    return TimeOfDay.from_datetime(now)


def is_open_now(opening_time: str | None, closing_time: str | None, now: Now) -> bool:
    """
    Check whether ``now`` falls within the daily window opening_time-closing_time.

    Both times may be in 12-hour or 24-hour form. When closing is earlier
    than opening the window runs past midnight (e.g. 22:00 - 02:00).
    Missing or unparseable times count as closed.
    """
    if not opening_time or not closing_time:
        return False

    opening = TimeOfDay.parse(opening_time)
    closing = TimeOfDay.parse(closing_time)

    if opening is None or closing is None:
        return False

    window = OpeningWindow(opening=opening, closing=closing)
    return window.contains(to_time_of_day(now))


def evaluate_shop(shop: ShopRecord, now: Now) -> ShopStatus:
    """
    Evaluate a shop's open/closed state.

    A shop flagged as unavailable by its owner is closed whatever its hours.
    """
    is_open = shop.is_available and is_open_now(shop.opening_time, shop.closing_time, now)

    return ShopStatus(
        shop=shop,
        is_open=is_open,
        opening_display=format_for_display(shop.opening_time),
        closing_display=format_for_display(shop.closing_time),
    )
