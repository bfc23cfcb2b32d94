"""Notification Service Implementations

Concrete channels for announcing document status changes.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.domain.status_history import StatusHistory

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """Logs status changes; never fails"""

    async def send_status_change(self, history: StatusHistory) -> bool:
        logger.info(
            f"[STATUS CHANGE] Tenant: {history.tenant_id}, "
            f"Document: {history.document_type.value} {history.document_id}, "
            f"{history.from_status} -> {history.to_status}, "
            f"By: {history.changed_by}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that posts status changes to an HTTP webhook

    Sends a JSON payload to the configured URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST status changes to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_status_change(self, history: StatusHistory) -> bool:
        """
        Send a status change via webhook

        Args:
            history: Committed StatusHistory row

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "type": "status_change",
            "history_id": history.id,
            "tenant_id": history.tenant_id,
            "document_type": history.document_type.value,
            "document_id": history.document_id,
            "from_status": history.from_status,
            "to_status": history.to_status,
            "changed_by": history.changed_by,
            "note": history.note,
            "changed_at": history.created_at.isoformat() if history.created_at else None,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
                logger.info(
                    f"Webhook notification sent for {history.document_type.value} "
                    f"{history.document_id} to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to send webhook notification for {history.document_type.value} "
                f"{history.document_id}: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """Delegates to several channels; succeeds if any of them does"""

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_status_change(self, history: StatusHistory) -> bool:
        success = False
        for service in self.services:
            try:
                if await service.send_status_change(history):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Build the configured notification channel

    Args:
        webhook_url: Optional webhook URL. With it, logging and webhook are
                     combined; without it, only logging is used.
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
