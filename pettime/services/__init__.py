"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .reminders import ReminderService, TaskClientProtocol
from .shop_status import ShopClientProtocol, ShopStatusService

__all__ = ["ReminderService", "TaskClientProtocol", "ShopClientProtocol", "ShopStatusService"]
