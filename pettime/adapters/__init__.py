"""
Adapters layer - External integrations (REST API, reminder storage).
"""

from .api_client import ApiClient
from .mock_api_client import MockApiClient
from .reminder_store import ReminderStore

__all__ = ["ApiClient", "MockApiClient", "ReminderStore"]
