"""
Domain models for time-of-day values, opening windows, shops and pet tasks.
"""

from dataclasses import dataclass, field
from datetime import datetime, time
from enum import Enum
from typing import List, Optional

import pendulum
from pendulum import DateTime

MINUTES_PER_DAY = 24 * 60


class TimeFormat(str, Enum):
    """Textual encodings of a time of day."""
    TWELVE_HOUR = "12hour"
    TWENTY_FOUR_HOUR = "24hour"
    UNKNOWN = "unknown"


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    An hour and minute within a single day.

    Invariant: 0 <= hour <= 23 and 0 <= minute <= 59.
    """
    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Minute must be between 0 and 59, got {self.minute}")

    @classmethod
    def parse(cls, text: str | None) -> "TimeOfDay | None":
        """
        Parse a 12-hour or 24-hour time string.
        Returns None if the string is not a recognizable time.
        """
        # Imported here, time_format depends on this module
        from .time_format import parse_to_24_hour, split_24_hour

        if not text:
            return None

        parts = split_24_hour(parse_to_24_hour(text))
        if parts is None:
            return None

        hour, minute = parts
        if hour > 23 or minute > 59:
            return None
        return cls(hour=hour, minute=minute)

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        """Build from minutes since midnight, wrapping around the day."""
        minutes %= MINUTES_PER_DAY
        return cls(hour=minutes // 60, minute=minutes % 60)

    @classmethod
    def from_datetime(cls, value: datetime | time) -> "TimeOfDay":
        """Take the wall-clock hour and minute of a datetime or time."""
        return cls(hour=value.hour, minute=value.minute)

    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def to_24_hour(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def to_12_hour(self) -> str:
        display_hour = self.hour % 12 or 12
        period = "AM" if self.hour < 12 else "PM"
        return f"{display_hour}:{self.minute:02d} {period}"

    def __str__(self) -> str:
        return self.to_24_hour()


@dataclass(frozen=True)
class OpeningWindow:
    """
    A shop's daily availability.

    The window wraps past midnight when closing is earlier than opening.
    """
    opening: TimeOfDay
    closing: TimeOfDay

    @property
    def wraps_midnight(self) -> bool:
        return self.closing.minutes_since_midnight() < self.opening.minutes_since_midnight()

    def contains(self, now: TimeOfDay) -> bool:
        """Check whether a time of day falls inside the window (bounds inclusive)."""
        open_minutes = self.opening.minutes_since_midnight()
        close_minutes = self.closing.minutes_since_midnight()
        now_minutes = now.minutes_since_midnight()

        if self.wraps_midnight:
            return now_minutes >= open_minutes or now_minutes <= close_minutes

        # open == close collapses to a single instant
        return open_minutes <= now_minutes <= close_minutes

    def __str__(self) -> str:
        return f"{self.opening} - {self.closing}"


@dataclass
class ShopRecord:
    """
    A shop as returned by the map endpoint of the API.

    Opening and closing times are kept as the raw strings the API stores;
    they may be in either encoding or empty.
    """
    id: int
    shop_name: str
    opening_time: str = ""
    closing_time: str = ""
    shop_location: str = ""
    shop_type: str = ""
    is_available: bool = True
    approved: bool = True
    owner_name: str = "Unknown"
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def opening_window(self) -> OpeningWindow | None:
        """
        Get the parsed opening window.
        Returns None if either bound is missing or unparseable.
        """
        opening = TimeOfDay.parse(self.opening_time)
        closing = TimeOfDay.parse(self.closing_time)

        if opening is None or closing is None:
            return None

        return OpeningWindow(opening=opening, closing=closing)

    def display_hours(self) -> str:
        from .time_format import format_for_display

        return f"{format_for_display(self.opening_time)} - {format_for_display(self.closing_time)}"


@dataclass
class ShopStatus:
    """Evaluated open/closed state of a shop at a given time."""
    shop: ShopRecord
    is_open: bool
    opening_display: str
    closing_display: str


@dataclass
class PetTask:
    """
    A care task for a pet (feeding, walk, medication...).

    Daily tasks repeat every day at the time of day of ``time``;
    scheduled tasks happen once.
    """
    id: int
    pet_id: int
    name: str
    task_type: str
    time: DateTime
    description: str = ""
    frequency: str = "daily"
    pet_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.task_type

    @property
    def is_daily(self) -> bool:
        return self.task_type == "Daily"

    def to_dict(self) -> dict:
        """Serialize for the pending reminder store."""
        return {
            "id": self.id,
            "petId": self.pet_id,
            "name": self.name,
            "type": self.task_type,
            "time": self.time.to_iso8601_string(),
            "description": self.description,
            "frequency": self.frequency,
            "petName": self.pet_name,
        }

    @classmethod
    def from_dict(cls, data: dict, timezone: str = "UTC") -> "PetTask":
        """
        Build a task from an API or store payload.

        Raises:
            KeyError: If a required field is missing
            ValueError: If the time cannot be parsed
        """
        parsed = pendulum.parse(data["time"], tz=timezone)
        if not isinstance(parsed, DateTime):
            raise ValueError(f"Could not parse task time: {data['time']}")

        pet = data.get("pet") or {}
        return cls(
            id=int(data["id"]),
            pet_id=int(data["petId"]),
            name=data.get("name") or "",
            task_type=data.get("type") or "Scheduled",
            time=parsed.in_timezone(timezone),
            description=data.get("description") or "",
            frequency=data.get("frequency") or "daily",
            pet_name=data.get("petName") or pet.get("name"),
        )


@dataclass
class TaskNotification:
    """A reminder produced for a task that is due."""
    id: str
    task_id: int
    pet_name: str
    task_name: str
    task_type: str
    task_time: str
    message: str
    timestamp: str
    is_overlay: bool = True


@dataclass
class PendingCheck:
    """Outcome of draining the pending reminder queue."""
    notifications: List[TaskNotification] = field(default_factory=list)
    remaining: List[PetTask] = field(default_factory=list)
