"""Notification Service Interface

Defines the contract for announcing document status changes.
"""

from abc import ABC, abstractmethod
from src.domain.status_history import StatusHistory


class NotificationService(ABC):
    """
    Abstract notification service for status changes

    Implementations can send notifications via:
    - Logging
    - Webhook (HTTP POST)
    """

    @abstractmethod
    async def send_status_change(self, history: StatusHistory) -> bool:
        """
        Announce a recorded status transition

        Args:
            history: StatusHistory row that was committed

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
