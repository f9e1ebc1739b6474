"""
Domain layer - Pure time handling logic without external dependencies.
"""

from .models import (
    OpeningWindow,
    PetTask,
    ShopRecord,
    ShopStatus,
    TaskNotification,
    TimeFormat,
    TimeOfDay,
)
from .opening_hours import evaluate_shop, is_open_now
from .reminders import ReminderCalculator
from .time_format import (
    format_for_display,
    format_to_12_hour,
    get_time_format,
    parse_to_24_hour,
)

__all__ = [
    "OpeningWindow",
    "PetTask",
    "ShopRecord",
    "ShopStatus",
    "TaskNotification",
    "TimeFormat",
    "TimeOfDay",
    "ReminderCalculator",
    "evaluate_shop",
    "is_open_now",
    "format_for_display",
    "format_to_12_hour",
    "get_time_format",
    "parse_to_24_hour",
]
