"""
File-backed queue of pending task reminders.
"""

import json
from pathlib import Path
from typing import List

from rich.console import Console

from ..domain.exceptions import ReminderStoreError
from ..domain.models import PetTask

console = Console(stderr=True)


class ReminderStore:
    """
    Persists reminders scheduled for future tasks between polling runs.

    The file holds a JSON list of task payloads (see PetTask.to_dict).
    """

    def __init__(self, store_file: Path, timezone: str = "UTC"):
        self.store_file = store_file
        self.timezone = timezone

    def load(self) -> List[PetTask]:
        """
        Load pending tasks.

        Unreadable entries are skipped; a missing file means no pending tasks.

        Raises:
            ReminderStoreError: If the file is not valid JSON
        """
        if not self.store_file.exists():
            return []

        try:
            with open(self.store_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ReminderStoreError(f"Could not read reminder store {self.store_file}: {e}") from e

        if not isinstance(data, list):
            raise ReminderStoreError(f"Reminder store {self.store_file} must contain a list")

        tasks: List[PetTask] = []
        for item in data:
            try:
                tasks.append(PetTask.from_dict(item, timezone=self.timezone))
            except (KeyError, TypeError, ValueError) as e:
                console.print(f"[yellow]Warning: Dropping unreadable pending reminder: {e}[/yellow]")
                continue

        return tasks

    def save(self, tasks: List[PetTask]) -> None:
        """
        Replace the pending tasks.

        Raises:
            ReminderStoreError: If the file cannot be written
        """
        try:
            self.store_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.store_file, "w", encoding="utf-8") as f:
                json.dump([task.to_dict() for task in tasks], f, indent=2)
        except OSError as e:
            raise ReminderStoreError(f"Could not write reminder store {self.store_file}: {e}") from e

    def clear(self) -> None:
        """
        Remove all pending tasks.

        Raises:
            ReminderStoreError: If the file cannot be removed
        """
        try:
            self.store_file.unlink(missing_ok=True)
        except OSError as e:
            raise ReminderStoreError(f"Could not clear reminder store {self.store_file}: {e}") from e
