"""
Reminder logic for pet-care tasks.

Pure domain logic: the caller supplies the task list and the current time,
the calculator decides which tasks are due and what the reminder says.
"""

from typing import Dict, Iterable, List

from pendulum import DateTime

from .models import PendingCheck, PetTask, TaskNotification

UNKNOWN_PET = "Unknown Pet"


class ReminderCalculator:
    """
    Decides which tasks need a reminder at a given moment.

    A task is due when the whole-minute difference between now and the task
    time (truncated toward zero) is at most ``window_minutes``. Daily tasks
    are compared against their occurrence closest to now, scheduled tasks
    against their absolute time.
    """

    def __init__(self, window_minutes: int = 1):
        if window_minutes < 0:
            raise ValueError(f"window_minutes must not be negative, got {window_minutes}")
        self.window_minutes = window_minutes

    def occurrence(self, task: PetTask, now: DateTime) -> DateTime:
        """Get the occurrence of the task closest to ``now``."""
        task_time = task.time.in_timezone(now.timezone)

        if not task.is_daily:
            return task_time

        today = self._on_day_of(task_time, now)
        # Closest of yesterday, today and tomorrow, so reminders around
        # midnight still fire
        candidates = [today.subtract(days=1), today, today.add(days=1)]
        return min(candidates, key=lambda dt: abs((dt - now).total_seconds()))

    def next_occurrence(self, task: PetTask, now: DateTime) -> DateTime:
        """Get the first occurrence of the task after ``now``."""
        task_time = task.time.in_timezone(now.timezone)

        if not task.is_daily:
            return task_time

        today = self._on_day_of(task_time, now)
        return today if today > now else today.add(days=1)

    @staticmethod
    def _on_day_of(task_time: DateTime, now: DateTime) -> DateTime:
        return now.set(
            hour=task_time.hour,
            minute=task_time.minute,
            second=0,
            microsecond=0
        )

    def minutes_until(self, task: PetTask, now: DateTime) -> int:
        """Whole minutes from now until the task, truncated toward zero."""
        return int((self.occurrence(task, now) - now).total_seconds() / 60)

    def is_due(self, task: PetTask, now: DateTime) -> bool:
        return abs(self.minutes_until(task, now)) <= self.window_minutes

    def is_upcoming(self, task: PetTask, now: DateTime) -> bool:
        """Check if the task still lies in the future."""
        return self.next_occurrence(task, now) > now

    def build_message(self, task: PetTask, pet_name: str, now: DateTime) -> str:
        """
        Build the reminder text.

        Examples:
            Daily:            "Rex's Feeding now"
            Scheduled, today: "Rex's Vet visit is today at 02:30 pm"
            Scheduled, other: "Rex's Vet visit is today"
        """
        label = task.display_name

        if task.is_daily:
            return f"{pet_name}'s {label} now"

        task_time = self.occurrence(task, now)
        if task_time.is_same_day(now):
            period = "am" if task_time.hour < 12 else "pm"
            return f"{pet_name}'s {label} is today at {task_time.format('hh:mm')} {period}"

        return f"{pet_name}'s {label} is today"

    def check_due_tasks(
        self,
        tasks: Iterable[PetTask],
        pet_names: Dict[int, str],
        now: DateTime,
        show_overlay: bool = True
    ) -> List[TaskNotification]:
        """
        Create a notification for every task that is due now.

        Args:
            tasks: Tasks to check
            pet_names: Mapping of pet id to pet name
            now: Current time
            show_overlay: Whether the notifications should be shown as overlays

        Returns:
            List of TaskNotification objects, in task order
        """
        return [
            self._notify(task, self._resolve_pet_name(task, pet_names), now, "task", show_overlay)
            for task in tasks
            if self.is_due(task, now)
        ]

    def schedule(self, tasks: Iterable[PetTask], now: DateTime) -> List[PetTask]:
        """Keep only tasks that still lie in the future."""
        return [task for task in tasks if self.is_upcoming(task, now)]

    def schedule_id(self, task: PetTask, now: DateTime) -> str:
        """Identifier of a scheduled reminder."""
        return f"overlay-{task.id}-{self.next_occurrence(task, now).format('YYYYMMDDHHmm')}"

    def drain_pending(self, pending: Iterable[PetTask], now: DateTime) -> PendingCheck:
        """
        Split the pending reminder queue.

        Due tasks become notifications, future tasks stay in the queue and
        tasks that are already past are dropped. Daily tasks stay queued
        after firing since they come back the next day.
        """
        result = PendingCheck()

        for task in pending:
            if self.is_due(task, now):
                pet_name = task.pet_name or UNKNOWN_PET
                result.notifications.append(
                    self._notify(task, pet_name, now, "stored-task", True)
                )
                if task.is_daily:
                    result.remaining.append(task)
            elif self.is_upcoming(task, now):
                result.remaining.append(task)

        return result

    def _notify(
        self,
        task: PetTask,
        pet_name: str,
        now: DateTime,
        prefix: str,
        show_overlay: bool
    ) -> TaskNotification:
        return TaskNotification(
            id=f"{prefix}-{task.id}-{now.format('YYYYMMDDHHmm')}",
            task_id=task.id,
            pet_name=pet_name,
            task_name=task.display_name,
            task_type=task.task_type,
            task_time=self.occurrence(task, now).format("HH:mm"),
            message=self.build_message(task, pet_name, now),
            timestamp=now.format("YYYY-MM-DD HH:mm:ss"),
            is_overlay=show_overlay,
        )

    @staticmethod
    def _resolve_pet_name(task: PetTask, pet_names: Dict[int, str]) -> str:
        return pet_names.get(task.pet_id) or task.pet_name or UNKNOWN_PET
