"""
Tests for domain models.
"""

import pendulum
import pytest

from pettime.domain.models import PetTask, ShopRecord, TimeOfDay


class TestTimeOfDay:
    """Tests for TimeOfDay model."""

    def test_create_valid(self):
        tod = TimeOfDay(hour=18, minute=30)

        assert tod.minutes_since_midnight() == 1110
        assert tod.to_24_hour() == "18:30"
        assert tod.to_12_hour() == "6:30 PM"

    @pytest.mark.parametrize("hour, minute", [(24, 0), (-1, 0), (12, 60)])
    def test_invalid_values_raise_error(self, hour, minute):
        """Out of range hour or minute raises ValueError."""
        with pytest.raises(ValueError, match="must be between"):
            TimeOfDay(hour=hour, minute=minute)

    def test_parse_both_formats(self):
        assert TimeOfDay.parse("9:00 AM") == TimeOfDay(9, 0)
        assert TimeOfDay.parse("12:00 AM") == TimeOfDay(0, 0)
        assert TimeOfDay.parse("21:15") == TimeOfDay(21, 15)
        assert TimeOfDay.parse("08:00:00") == TimeOfDay(8, 0)

    def test_parse_returns_none_for_bad_input(self):
        """Parsing never raises."""
        assert TimeOfDay.parse("") is None
        assert TimeOfDay.parse(None) is None
        assert TimeOfDay.parse("not-a-time") is None
        assert TimeOfDay.parse("24:00") is None
        assert TimeOfDay.parse("10:60") is None

    def test_from_minutes_wraps(self):
        assert TimeOfDay.from_minutes(90) == TimeOfDay(1, 30)
        assert TimeOfDay.from_minutes(24 * 60 + 5) == TimeOfDay(0, 5)

    def test_ordering(self):
        assert TimeOfDay(9, 0) < TimeOfDay(9, 1) < TimeOfDay(18, 0)


class TestShopRecord:
    """Tests for ShopRecord model."""

    def test_opening_window(self):
        shop = ShopRecord(id=1, shop_name="Night Owl", opening_time="10:00 PM", closing_time="02:00")

        window = shop.opening_window()

        assert window is not None
        assert window.opening == TimeOfDay(22, 0)
        assert window.closing == TimeOfDay(2, 0)
        assert window.wraps_midnight

    def test_opening_window_missing(self):
        assert ShopRecord(id=1, shop_name="x", opening_time="09:00").opening_window() is None

    def test_display_hours(self):
        shop = ShopRecord(id=1, shop_name="x", opening_time="09:00:00", closing_time="")

        assert shop.display_hours() == "9:00 AM - Not set"


class TestPetTask:
    """Tests for PetTask model."""

    def test_from_api_payload(self):
        """Tasks parse the shape returned by GET /task."""
        payload = {
            "id": 7,
            "petId": 3,
            "name": "",
            "type": "Daily",
            "time": "2025-08-11T00:30:00.000Z",
            "frequency": "daily",
            "pet": {"name": "Buddy", "type": "Dog"},
        }

        task = PetTask.from_dict(payload, timezone="Asia/Manila")

        assert task.id == 7
        assert task.pet_id == 3
        assert task.pet_name == "Buddy"
        assert task.is_daily
        assert task.display_name == "Daily"
        assert task.time.hour == 8
        assert task.time.minute == 30

    def test_store_round_trip(self):
        task = PetTask(
            id=1,
            pet_id=2,
            name="Walk",
            task_type="Scheduled",
            time=pendulum.datetime(2025, 8, 11, 17, 0, tz="UTC"),
            pet_name="Mittens",
        )

        restored = PetTask.from_dict(task.to_dict())

        assert restored == task

    def test_missing_time_raises(self):
        with pytest.raises(KeyError):
            PetTask.from_dict({"id": 1, "petId": 1})
