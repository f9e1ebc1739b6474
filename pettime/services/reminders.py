"""
Application service for task reminders.

Coordinates fetching tasks and pets through a client adapter, the pending
reminder store and the domain-level ``ReminderCalculator``. It is meant to be
called from a polling loop; each call receives the current time.
"""

from __future__ import annotations

from typing import Dict, List, Protocol

from pendulum import DateTime

from ..adapters.reminder_store import ReminderStore
from ..domain.models import PetTask, TaskNotification
from ..domain.reminders import ReminderCalculator


class TaskClientProtocol(Protocol):
    """Protocol describing the task source needed by the service."""

    def get_tasks(self, pet_id: int | None = None) -> List[PetTask]:
        """Return the user's tasks."""

    def get_pet_names(self) -> Dict[int, str]:
        """Return pet names keyed by pet id."""


class ReminderService:
    """
    Produces reminders for due tasks.

    Admins and shop owners never get overlay reminders; for them
    notifications are still returned but flagged as non-overlay, and the
    pending queue yields nothing.
    """

    def __init__(
        self,
        task_client: TaskClientProtocol,
        calculator: ReminderCalculator,
        store: ReminderStore | None = None,
        role: str = "user",
    ) -> None:
        self._task_client = task_client
        self._calculator = calculator
        self._store = store
        self._role = role

    @property
    def shows_overlays(self) -> bool:
        return self._role == "user"

    def check(self, *, now: DateTime) -> List[TaskNotification]:
        """Fetch tasks and return notifications for the ones due at ``now``."""
        tasks = self._task_client.get_tasks()
        pet_names = self._task_client.get_pet_names()

        return self._calculator.check_due_tasks(
            tasks,
            pet_names,
            now,
            show_overlay=self.shows_overlays,
        )

    def schedule_all(self, *, now: DateTime) -> List[str]:
        """
        Replace the pending queue with all upcoming tasks.

        Returns:
            Identifiers of the scheduled reminders
        """
        store = self._require_store()

        tasks = self._task_client.get_tasks()
        pet_names = self._task_client.get_pet_names()

        upcoming = self._calculator.schedule(tasks, now)
        for task in upcoming:
            task.pet_name = pet_names.get(task.pet_id) or task.pet_name

        # Only touch the queue once the fetch succeeded
        store.clear()
        store.save(upcoming)
        return [self._calculator.schedule_id(task, now) for task in upcoming]

    def check_pending(self, *, now: DateTime) -> List[TaskNotification]:
        """Drain the pending queue: notify due tasks, keep future ones."""
        if not self.shows_overlays:
            return []

        store = self._require_store()
        result = self._calculator.drain_pending(store.load(), now)
        store.save(result.remaining)

        return result.notifications

    def _require_store(self) -> ReminderStore:
        if self._store is None:
            raise ValueError("ReminderService was created without a reminder store")
        return self._store
